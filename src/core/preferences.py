"""
Preferences store: preferences.yaml

규칙:
- get(key): 저장된 값의 복사본 (없으면 기본값)
- set(key, value): 즉시 디스크에 반영
- 쓰기는 FileLock으로 프로세스 간 직렬화 + 원자적 쓰기 (temp → rename)
- 손상된 파일은 경고 후 기본값으로 시작 (다음 set에서 덮어씀)

사용 키: snippetDirectories, defaultSnippetDirectory
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml
from filelock import FileLock, Timeout

from src.core.filesystem import atomic_write_text
from src.domain.constants import (
    PREF_SNIPPET_DIRECTORIES,
    PREFERENCE_DEFAULTS,
)
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import DirectoryRegistration

logger = logging.getLogger(__name__)


class Preferences:
    """YAML 파일 기반 preferences."""

    # 락 timeout (초)
    LOCK_TIMEOUT = 10.0

    def __init__(self, path: Path, defaults: dict[str, Any] | None = None):
        """
        Args:
            path: preferences.yaml 경로
            defaults: 키별 기본값 (기본: PREFERENCE_DEFAULTS)
        """
        self.path = path
        self._defaults = dict(PREFERENCE_DEFAULTS if defaults is None else defaults)
        self._lock = FileLock(str(path) + ".lock", timeout=self.LOCK_TIMEOUT)
        self._values = self._read()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read preferences {self.path}: {e}. Using defaults.")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Preferences {self.path} is not a mapping. Using defaults.")
            return {}
        return data

    def get(self, key: str) -> Any:
        value = self._values.get(key, self._defaults.get(key))
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        """
        값 저장.

        Raises:
            SnippetError: PREFERENCES_ERROR (락 timeout, 쓰기 실패)
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._lock:
                # 다른 프로세스가 쓴 키 보존
                merged = self._read()
                merged[key] = copy.deepcopy(value)
                atomic_write_text(
                    self.path,
                    yaml.safe_dump(merged, default_flow_style=False, allow_unicode=True),
                )
        except Timeout as e:
            raise SnippetError(
                ErrorCodes.PREFERENCES_ERROR,
                f"Failed to acquire preferences lock for '{key}'",
                path=self.path,
                timeout=self.LOCK_TIMEOUT,
            ) from e
        except OSError as e:
            raise SnippetError(
                ErrorCodes.PREFERENCES_ERROR,
                f"Failed to write preferences: {e}",
                path=self.path,
            ) from e

        self._values = merged

    # =========================================================================
    # Directory Registrations
    # =========================================================================

    def get_registrations(self) -> list[DirectoryRegistration]:
        """snippetDirectories → DirectoryRegistration 목록 (잘못된 항목은 건너뜀)."""
        registrations = []
        for item in self.get(PREF_SNIPPET_DIRECTORIES) or []:
            if not isinstance(item, dict) or "fullPath" not in item:
                logger.warning(f"Ignoring malformed snippet directory entry: {item!r}")
                continue
            registrations.append(DirectoryRegistration.from_dict(item))
        return registrations

    def set_registrations(self, registrations: list[DirectoryRegistration]) -> None:
        self.set(PREF_SNIPPET_DIRECTORIES, [r.to_dict() for r in registrations])
