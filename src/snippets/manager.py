"""
Snippet Manager: 시작 순서 + 다이얼로그 기반 사용자 액션.

다이얼로그는 2단계:
1. present(snippet) → 사용자가 제출한 SnippetSubmission (취소 시 None)
2. core가 검증/저장 성공 후 complete() → 다이얼로그 닫힘
   저장 실패 시 complete()를 부르지 않고 예외 전파 (다이얼로그 유지)
"""

import logging
from abc import ABC, abstractmethod

from src.core.filesystem import FileSystem
from src.core.preferences import Preferences
from src.core.reporting import ErrorReporter
from src.core.store import SnippetStore
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import LoadSummary, Snippet, SnippetSubmission
from src.snippets import strings
from src.snippets.bootstrap import (
    check_default_snippets_directories,
    ensure_default_directory,
)
from src.snippets.config import SnippetConfig
from src.snippets.loader import DirectoryLoader
from src.snippets.persistence import SnippetPersistence

logger = logging.getLogger(__name__)


class SnippetDialog(ABC):
    """호스트 UI가 구현하는 다이얼로그/확인 서비스."""

    @abstractmethod
    async def ask_yes_no(self, title: str, message: str) -> bool:
        """예/아니오 확인."""
        ...

    @abstractmethod
    async def present(self, snippet: Snippet | None) -> SnippetSubmission | None:
        """편집 다이얼로그 표시 (None이면 새 스니펫). 취소 시 None."""
        ...

    @abstractmethod
    async def complete(self) -> None:
        """저장 성공 후 다이얼로그 닫기."""
        ...


class SnippetManager:
    """
    스니펫 관리 진입점.

    구성:
    - SnippetStore: 메모리 컬렉션
    - DirectoryLoader: 시작 시 디렉터리 스캔
    - SnippetPersistence: 파일 CRUD
    """

    def __init__(
        self,
        config: SnippetConfig,
        dialog: SnippetDialog | None = None,
        store: SnippetStore | None = None,
        fs: FileSystem | None = None,
        preferences: Preferences | None = None,
        reporter: ErrorReporter | None = None,
    ):
        self.config = config
        self.dialog = dialog
        self.reporter = reporter if reporter is not None else ErrorReporter()
        # 빈 store는 falsy (__len__)
        self.store = store if store is not None else SnippetStore(reporter=self.reporter)
        self.fs = fs if fs is not None else FileSystem()
        self.preferences = (
            preferences if preferences is not None else Preferences(config.preferences_path)
        )

        self.loader = DirectoryLoader(self.store, self.fs, self.preferences, self.reporter)
        self.persistence = SnippetPersistence(
            self.store,
            self.fs,
            self.preferences,
            self.reporter,
            fallback_directory=config.computed_default_directory,
        )

    # =========================================================================
    # Startup
    # =========================================================================

    async def init(self) -> LoadSummary:
        """
        시작 순서 (엄격히 순차):
        1. 기본 디렉터리 확보
        2. 번들 스니펫 디렉터리 등록
        3. 등록된 디렉터리 로드

        Raises:
            SnippetError: 1, 2 단계 실패 (3단계 내부 실패는 summary.errors)
        """
        await ensure_default_directory(
            self.preferences,
            self.fs,
            self.reporter,
            computed_default=self.config.computed_default_directory,
            initial_directory=self.config.default_directory,
        )
        await check_default_snippets_directories(
            self.preferences,
            self.fs,
            self.reporter,
            self.config.bundled_directory,
        )
        return await self.loader.load_from_directories()

    # =========================================================================
    # Read
    # =========================================================================

    def get_all(self) -> list[Snippet]:
        return self.store.get_all()

    def search(self, query: str | None = None) -> list[Snippet]:
        return self.store.search(query)

    def get_default_snippet_directory(self) -> str:
        """preferences에 저장된 기본 디렉터리 (없으면 계산값)."""
        return self.persistence.default_directory

    # =========================================================================
    # Dialog Actions
    # =========================================================================

    def _require_dialog(self, dialog: SnippetDialog | None) -> SnippetDialog:
        dialog = dialog if dialog is not None else self.dialog
        if dialog is None:
            raise RuntimeError("SnippetManager has no dialog service")
        return dialog

    async def add_new_snippet_dialog(
        self,
        snippet: Snippet | None = None,
        dialog: SnippetDialog | None = None,
    ) -> Snippet | None:
        """
        새 스니펫 다이얼로그.

        Returns:
            생성된 스니펫 (취소 시 None)
        """
        dialog = self._require_dialog(dialog)
        submission = await dialog.present(snippet)
        if submission is None:
            return None

        created = await self.persistence.create(submission.name, submission.template)
        await dialog.complete()
        return created

    async def edit_snippet_dialog(
        self,
        snippet: Snippet,
        dialog: SnippetDialog | None = None,
    ) -> Snippet | None:
        """
        스니펫 편집 다이얼로그.

        directory 스니펫이 아니면 다이얼로그를 열기 전에 실패.

        Returns:
            갱신된 스니펫 (취소 시 None)
        """
        if not snippet.is_directory_snippet:
            error = SnippetError(
                ErrorCodes.NOT_DIRECTORY_SNIPPET,
                strings.CANNOT_EDIT_NON_DIRECTORY,
                name=snippet.name,
            )
            self.reporter.report(error)
            raise error

        dialog = self._require_dialog(dialog)
        submission = await dialog.present(snippet)
        if submission is None:
            return None

        updated = await self.persistence.edit(snippet, submission.name, submission.template)
        await dialog.complete()
        return updated

    async def delete_snippet_dialog(
        self,
        snippet: Snippet,
        dialog: SnippetDialog | None = None,
    ) -> bool:
        """
        확인 후 스니펫 삭제 (파일 + store).

        Returns:
            삭제 실행 여부
        """
        dialog = self._require_dialog(dialog)
        if await dialog.ask_yes_no(strings.QUESTION, strings.SNIPPET_DELETE_CONFIRM) is not True:
            return False

        await self.persistence.delete(snippet)
        return True

    async def delete_all_snippets_dialog(self, dialog: SnippetDialog | None = None) -> bool:
        """
        확인 후 store 비우기 (파일은 삭제하지 않음).

        Returns:
            실행 여부
        """
        dialog = self._require_dialog(dialog)
        if await dialog.ask_yes_no(strings.QUESTION, strings.SNIPPET_DELETE_ALL_CONFIRM) is not True:
            return False

        self.persistence.clear_all()
        return True
