"""
비동기 파일시스템 추상화.

규칙:
- 모든 블로킹 I/O는 asyncio.to_thread로 실행 (이벤트 루프 비차단)
- OSError는 SnippetError로 변환: NOT_FOUND / ALREADY_EXISTS / IO_ERROR
- 디렉터리 경로는 "/"로 끝나는 문자열, 파일 경로는 그대로
- 쓰기는 원자적: temp → rename + fsync

파일시스템 안정성 (best-effort):
- fsync 실패 시 경고 남기고 계속 진행
- rename 실패 시 temp 파일 정리, 원본 유지
"""

import asyncio
import logging
import os
import stat
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from src.core.escaping import normalize_directory_path
from src.domain.constants import DEFAULT_DIRECTORY_MODE
from src.domain.errors import ErrorCodes, SnippetError

logger = logging.getLogger(__name__)

# 새 스니펫 파일 기본 권한 (umask 적용 전)
DEFAULT_FILE_MODE = 0o666


# =============================================================================
# Error Translation
# =============================================================================

@contextmanager
def translate_os_errors(path: str) -> Generator[None, None, None]:
    """
    OSError → SnippetError 변환.

    UTF-8이 아닌 파일 읽기(UnicodeDecodeError)도 IO_ERROR로 본다.

    Raises:
        SnippetError: NOT_FOUND, ALREADY_EXISTS, IO_ERROR
    """
    try:
        yield
    except FileNotFoundError as e:
        raise SnippetError(ErrorCodes.NOT_FOUND, f"Not found: {path}", path=path) from e
    except FileExistsError as e:
        raise SnippetError(ErrorCodes.ALREADY_EXISTS, f"Already exists: {path}", path=path) from e
    except UnicodeDecodeError as e:
        raise SnippetError(
            ErrorCodes.IO_ERROR,
            f"Not a UTF-8 text file: {path} ({e.reason} at byte {e.start})",
            path=path,
        ) from e
    except OSError as e:
        raise SnippetError(
            ErrorCodes.IO_ERROR,
            f"{e.strerror or e} ({path})",
            path=path,
            errno=e.errno,
        ) from e


# =============================================================================
# Atomic Write
# =============================================================================


def _fsync_dir(dir_path: Path) -> None:
    """
    디렉토리 fsync (가능한 환경에서).

    rename 후 디렉토리 엔트리까지 내구성 강화. 실패 시 경고만.
    """
    try:
        dir_fd = os.open(str(dir_path), os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except (OSError, AttributeError) as e:
        logger.warning(
            f"Directory fsync failed for {dir_path}: {e}. "
            f"Rename durability may not be guaranteed."
        )


def _target_mode(path: Path) -> int:
    """기존 파일 권한 유지, 새 파일은 umask 적용."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except OSError:
        umask = os.umask(0)
        os.umask(umask)
        return DEFAULT_FILE_MODE & ~umask


def atomic_write_text(path: Path, content: str) -> None:
    """
    원자적 텍스트 쓰기.

    동작:
    - 중간 상태 없음: temp → rename
    - 파일 fsync + 디렉토리 fsync (실패 시 경고)
    - 실패 시 temp 파일 삭제, 기존 파일 보존

    부모 디렉터리는 만들지 않는다 (없으면 FileNotFoundError).

    Args:
        path: 저장할 파일 경로
        content: 파일 내용
    """
    dir_path = path.parent
    mode = _target_mode(path)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="",
        ) as f:
            temp_path = Path(f.name)
            f.write(content)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(
                    f"File fsync failed for {path}: {e}. "
                    f"Data may not be durable on power loss."
                )

        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
        _fsync_dir(dir_path)

    except Exception:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise


# =============================================================================
# Entries
# =============================================================================

@dataclass
class FileSystemEntry:
    """resolve/get_contents가 돌려주는 파일 또는 디렉터리 핸들."""
    full_path: str
    name: str
    is_file: bool
    is_directory: bool
    fs: "FileSystem" = field(repr=False, compare=False)

    async def read(self) -> str:
        return await self.fs.read_file(self.full_path)

    async def write(self, content: str) -> None:
        await self.fs.write_file(self.full_path, content)

    async def unlink(self) -> None:
        await self.fs.unlink(self.full_path)

    async def rename(self, new_path: str) -> None:
        await self.fs.rename(self.full_path, new_path)

    async def get_contents(self) -> list["FileSystemEntry"]:
        return await self.fs.get_contents(self.full_path)


# =============================================================================
# File System
# =============================================================================

class FileSystem:
    """
    pathlib 기반 비동기 파일시스템.

    호출자는 각 단계를 await한 뒤 공유 상태(store)를 변경한다.
    """

    def is_absolute_path(self, path: str) -> bool:
        return Path(path).is_absolute()

    def _make_entry(self, path: Path, st: os.stat_result) -> FileSystemEntry:
        is_directory = stat.S_ISDIR(st.st_mode)
        full_path = normalize_directory_path(path.as_posix()) if is_directory else path.as_posix()
        return FileSystemEntry(
            full_path=full_path,
            name=path.name,
            is_file=stat.S_ISREG(st.st_mode),
            is_directory=is_directory,
            fs=self,
        )

    def _resolve_sync(self, path: str) -> FileSystemEntry:
        with translate_os_errors(path):
            target = Path(path)
            return self._make_entry(target, target.stat())

    def _read_sync(self, path: str) -> str:
        with translate_os_errors(path):
            # 템플릿 원문 유지 (줄바꿈 변환 없음)
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()

    def _write_sync(self, path: str, content: str) -> None:
        with translate_os_errors(path):
            atomic_write_text(Path(path), content)

    def _unlink_sync(self, path: str) -> None:
        with translate_os_errors(path):
            Path(path).unlink()

    def _rename_sync(self, old_path: str, new_path: str) -> None:
        with translate_os_errors(old_path):
            if os.path.lexists(new_path):
                raise SnippetError(
                    ErrorCodes.ALREADY_EXISTS,
                    f"File already exists: {new_path}",
                    path=new_path,
                )
            os.rename(old_path, new_path)

    def _contents_sync(self, path: str) -> list[FileSystemEntry]:
        with translate_os_errors(path):
            entries = []
            for child in sorted(Path(path).iterdir()):
                try:
                    entries.append(self._make_entry(child, child.stat()))
                except OSError as e:
                    # 깨진 심볼릭 링크 등
                    logger.warning(f"Skipping unreadable entry {child}: {e}")
            return entries

    def _mkdir_sync(self, path: str, mode: int) -> None:
        with translate_os_errors(path):
            Path(path).mkdir(mode=mode, parents=True, exist_ok=True)

    async def resolve(self, path: str) -> FileSystemEntry:
        """
        경로를 엔트리로 해석.

        Raises:
            SnippetError: NOT_FOUND (경로 없음), IO_ERROR
        """
        return await asyncio.to_thread(self._resolve_sync, path)

    async def read_file(self, path: str) -> str:
        return await asyncio.to_thread(self._read_sync, path)

    async def write_file(self, path: str, content: str) -> None:
        await asyncio.to_thread(self._write_sync, path, content)

    async def unlink(self, path: str) -> None:
        await asyncio.to_thread(self._unlink_sync, path)

    async def rename(self, old_path: str, new_path: str) -> None:
        """
        파일 이름 변경.

        Raises:
            SnippetError: ALREADY_EXISTS (대상 존재), NOT_FOUND, IO_ERROR
        """
        await asyncio.to_thread(self._rename_sync, old_path, new_path)

    async def get_contents(self, path: str) -> list[FileSystemEntry]:
        """디렉터리 직속 엔트리 목록 (이름순)."""
        return await asyncio.to_thread(self._contents_sync, path)

    async def make_directory(self, path: str, mode: int = DEFAULT_DIRECTORY_MODE) -> None:
        """디렉터리 생성 (없는 부모 포함)."""
        await asyncio.to_thread(self._mkdir_sync, path, mode)
