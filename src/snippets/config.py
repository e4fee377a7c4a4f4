"""
스니펫 관리자 설정 (default.yaml의 snippets 섹션).

snippets:
  app_support_dir: null        # null이면 platformdirs.user_data_dir
  preferences_path: null       # null이면 <app_support_dir>/preferences.yaml
  default_directory: null      # preferences 값이 없을 때 초기값
  bundled_directory: null      # null이면 src/snippets/default_snippets/
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from src.core.escaping import normalize_directory_path
from src.domain.constants import (
    APP_NAME,
    BUNDLED_SNIPPETS_DIRNAME,
    DEFAULT_SNIPPETS_SUBDIR,
    PREFERENCES_FILENAME,
)

BUNDLED_SNIPPETS_ROOT = Path(__file__).parent / BUNDLED_SNIPPETS_DIRNAME


@dataclass
class SnippetConfig:
    """해석된 경로 설정."""
    app_support_dir: str
    preferences_path: Path
    bundled_directory: str
    default_directory: str | None = None

    @property
    def computed_default_directory(self) -> str:
        """<app support>/snippets/ (preferences 초기화/복구 기준값)."""
        return get_default_snippet_directory(self.app_support_dir)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SnippetConfig":
        data = data or {}
        app_support_dir = data.get("app_support_dir") or user_data_dir(APP_NAME, appauthor=False)

        preferences_path = data.get("preferences_path")
        if preferences_path:
            prefs = Path(preferences_path)
        else:
            prefs = Path(app_support_dir) / PREFERENCES_FILENAME

        bundled = data.get("bundled_directory") or BUNDLED_SNIPPETS_ROOT.as_posix()

        return cls(
            app_support_dir=str(app_support_dir),
            preferences_path=prefs,
            bundled_directory=normalize_directory_path(str(bundled)),
            default_directory=data.get("default_directory"),
        )


def get_default_snippet_directory(app_support_dir: str | None = None) -> str:
    """
    계산된 기본 스니펫 디렉터리.

    Args:
        app_support_dir: 앱 데이터 위치 (None이면 platformdirs)

    Returns:
        "<app support>/snippets/" (슬래시 구분, 끝 슬래시 포함)
    """
    base = app_support_dir or user_data_dir(APP_NAME, appauthor=False)
    return normalize_directory_path(str(base)) + DEFAULT_SNIPPETS_SUBDIR + "/"
