"""
Persistence Operations: 스니펫 파일 생성/이름변경/덮어쓰기/삭제.

규칙:
- 디스크 먼저, store 나중 (store는 디스크 상태의 캐시)
- 실패는 발견 지점에서 보고 후 re-raise → 호출자는 후속 단계 중단
  (다이얼로그 닫지 않음, store 갱신 없음)
- 재시도 없음
- clear_all은 store만 비움 (파일 삭제 없음)
"""

import logging

from src.core.escaping import join_path, replace_last_segment
from src.core.filesystem import FileSystem
from src.core.preferences import Preferences
from src.core.reporting import ErrorReporter
from src.core.store import SnippetStore
from src.domain.constants import (
    FORBIDDEN_NAME_CHARS,
    PREF_DEFAULT_SNIPPET_DIRECTORY,
    RESERVED_NAMES,
)
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import Snippet, SnippetSource
from src.snippets import strings

logger = logging.getLogger(__name__)


def validate_snippet_name(name: str) -> None:
    """
    스니펫 이름(= 파일명) 검증.

    규칙:
    - 비어 있으면 안 됨
    - 경로 구분자 금지: / \\ NUL
    - "." / ".." 금지

    Raises:
        SnippetError: INVALID_SNIPPET_NAME
    """
    if not name or name in RESERVED_NAMES or set(name) & FORBIDDEN_NAME_CHARS:
        raise SnippetError(
            ErrorCodes.INVALID_SNIPPET_NAME,
            strings.INVALID_SNIPPET_NAME.format(name=name),
            name=name,
        )


class SnippetPersistence:
    """스니펫 파일 CRUD + store 반영."""

    def __init__(
        self,
        store: SnippetStore,
        fs: FileSystem,
        preferences: Preferences,
        reporter: ErrorReporter,
        fallback_directory: str | None = None,
    ):
        """
        Args:
            fallback_directory: preferences에 기본 디렉터리가 없을 때 쓸 경로
                (보통 계산된 <app support>/snippets/)
        """
        self.store = store
        self.fs = fs
        self.preferences = preferences
        self.reporter = reporter
        self.fallback_directory = fallback_directory

    @property
    def default_directory(self) -> str:
        """preferences 값, 없으면 fallback (둘 다 없으면 빈 문자열)."""
        return (
            self.preferences.get(PREF_DEFAULT_SNIPPET_DIRECTORY)
            or self.fallback_directory
            or ""
        )

    def _report(self, error: SnippetError) -> SnippetError:
        self.reporter.report(error)
        return error

    async def _undo_rename(self, renamed_path: str, original_path: str) -> None:
        """편집 중 바뀐 파일 이름 복구. 실패는 보고만 한다 (원래 에러가 우선)."""
        try:
            await self.fs.rename(renamed_path, original_path)
        except SnippetError as e:
            logger.warning(f"Could not restore {original_path} after failed edit: {e}")
            self.reporter.report(e)
        else:
            logger.info(f"Restored {original_path} after failed edit")

    # =========================================================================
    # Create
    # =========================================================================

    async def create(self, name: str, template: str) -> Snippet:
        """
        기본 디렉터리에 새 스니펫 파일 생성.

        NOT_FOUND가 정상 경로 (파일이 없어야 새로 씀).

        Returns:
            store에 등록된 스니펫

        Raises:
            SnippetError: INVALID_SNIPPET_NAME, DEFAULT_DIRECTORY_UNSET,
                          ALREADY_EXISTS, IO_ERROR
        """
        try:
            validate_snippet_name(name)
        except SnippetError as e:
            self.reporter.report(e)
            raise

        directory = self.default_directory
        if not directory:
            raise self._report(SnippetError(
                ErrorCodes.DEFAULT_DIRECTORY_UNSET,
                "Default snippet directory is not set",
                name=name,
            ))
        target = join_path(directory, name)

        try:
            await self.fs.resolve(target)
        except SnippetError as e:
            if e.code != ErrorCodes.NOT_FOUND:
                self.reporter.report(e)
                raise
        else:
            raise self._report(SnippetError(
                ErrorCodes.ALREADY_EXISTS,
                strings.FILE_ALREADY_EXISTS.format(path=target),
                path=target,
            ))

        try:
            await self.fs.write_file(target, template)
        except SnippetError as e:
            self.reporter.report(e)
            raise

        snippet = Snippet(
            name=name,
            template=template,
            source=SnippetSource.DIRECTORY,
            file_path=target,
        )
        self.store.load(snippet)
        logger.info(f"Created snippet '{name}' at {target}")
        return snippet

    # =========================================================================
    # Rename / Overwrite
    # =========================================================================

    async def rename(self, old_name: str, new_name: str, old_full_path: str) -> str:
        """
        스니펫 파일 이름 변경.

        Returns:
            새 전체 경로

        Raises:
            SnippetError: ALREADY_EXISTS (대상 존재), NOT_FOUND, IO_ERROR
        """
        new_full_path = replace_last_segment(old_full_path, new_name)

        try:
            entry = await self.fs.resolve(old_full_path)
            await entry.rename(new_full_path)
        except SnippetError as e:
            self.reporter.report(e)
            raise

        logger.info(f"Renamed snippet '{old_name}' → '{new_name}'")
        return new_full_path

    async def overwrite(self, full_path: str, content: str) -> None:
        """
        스니펫 파일 덮어쓰기 (blind write).

        방금 이름이 바뀐 파일은 resolve가 아직 못 찾을 수 있으므로
        NOT_FOUND여도 쓰기를 시도한다.

        Raises:
            SnippetError: IO_ERROR
        """
        try:
            try:
                await self.fs.resolve(full_path)
            except SnippetError as e:
                if e.code != ErrorCodes.NOT_FOUND:
                    raise
                logger.debug(f"Blind write to unresolved path: {full_path}")
            await self.fs.write_file(full_path, content)
        except SnippetError as e:
            self.reporter.report(e)
            raise

    # =========================================================================
    # Delete
    # =========================================================================

    async def delete(self, record: Snippet) -> None:
        """
        스니펫 파일 삭제 후 store에서 제거.

        resolve/unlink 실패 시 store는 건드리지 않는다.
        """
        try:
            if not record.file_path:
                raise SnippetError(
                    ErrorCodes.NOT_DIRECTORY_SNIPPET,
                    f"Snippet '{record.name}' has no backing file",
                    name=record.name,
                )
            entry = await self.fs.resolve(record.file_path)
            await entry.unlink()
        except SnippetError as e:
            self.reporter.report(e)
            raise

        self.store.delete(record)
        logger.info(f"Deleted snippet '{record.name}'")

    def clear_all(self) -> None:
        """store만 비운다 (디스크 변경 없음)."""
        self.store.clear()

    # =========================================================================
    # Edit
    # =========================================================================

    async def edit(
        self,
        record: Snippet,
        new_name: str,
        new_template: str,
        new_full_path: str | None = None,
    ) -> Snippet:
        """
        스니펫 편집.

        1. directory 스니펫만 허용
        2. 이름이 바뀌면 rename 먼저, 결과 경로에 쓰기
        3. 쓰기 성공 후에만 store update
        4. rename 후 쓰기가 실패하면 원래 이름으로 되돌린다 (best-effort).
           되돌리기도 실패하면 파일은 새 이름으로 남고 store는 옛 경로를 가리킨다.

        Returns:
            갱신된 store 레코드

        Raises:
            SnippetError: NOT_DIRECTORY_SNIPPET, INVALID_SNIPPET_NAME,
                          ALREADY_EXISTS, IO_ERROR
        """
        if not record.is_directory_snippet:
            raise self._report(SnippetError(
                ErrorCodes.NOT_DIRECTORY_SNIPPET,
                strings.CANNOT_EDIT_NON_DIRECTORY,
                name=record.name,
            ))

        path = new_full_path or record.file_path
        if new_name != record.name:
            try:
                validate_snippet_name(new_name)
            except SnippetError as e:
                self.reporter.report(e)
                raise

            # 다른 디렉터리의 동명 스니펫과 충돌하면 디스크 변경 전에 중단
            other = self.store.find_by_name(new_name)
            if other is not None and other.id != record.id:
                raise self._report(SnippetError(
                    ErrorCodes.ALREADY_EXISTS,
                    f"Snippet '{new_name}' already exists",
                    name=new_name,
                ))
            path = await self.rename(record.name, new_name, record.file_path)

        try:
            await self.overwrite(path, new_template)
        except SnippetError:
            if path != record.file_path and new_name != record.name:
                await self._undo_rename(path, record.file_path)
            raise

        return self.store.update(Snippet(
            id=record.id,
            name=new_name,
            template=new_template,
            source=record.source,
            file_path=path,
        ))
