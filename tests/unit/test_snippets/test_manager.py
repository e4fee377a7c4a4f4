"""
test_manager.py - SnippetManager 테스트

검증:
- init: 기본 디렉터리 → 번들 등록 → 로드 (순차, 앞 단계 실패 시 중단)
- 다이얼로그: 취소 시 변경 없음, 저장 실패 시 complete() 호출 안 함
- 삭제 확인: True일 때만 실행
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.core.store import SnippetStore
from src.domain.constants import PREF_DEFAULT_SNIPPET_DIRECTORY
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import Snippet, SnippetSource, SnippetSubmission
from src.snippets import strings
from src.snippets.config import SnippetConfig
from src.snippets.manager import SnippetManager


# =============================================================================
# Startup
# =============================================================================

class TestInit:
    """init 시작 순서 테스트."""

    @pytest.mark.asyncio
    async def test_full_startup(
        self,
        manager: SnippetManager,
        app_support_dir: Path,
    ):
        summary = await manager.init()

        expected_default = app_support_dir.as_posix() + "/snippets/"
        assert manager.get_default_snippet_directory() == expected_default
        assert Path(expected_default).is_dir()
        assert [s.name for s in manager.get_all()] == ["ifmain", "log"]
        assert summary.directories_scanned == 3
        assert summary.errors == []
        assert len(manager.preferences.get_registrations()) == 2

    @pytest.mark.asyncio
    async def test_second_startup_keeps_registrations(
        self,
        manager: SnippetManager,
        snippet_config: SnippetConfig,
    ):
        await manager.init()
        restarted = SnippetManager(snippet_config)

        summary = await restarted.init()

        assert len(restarted.preferences.get_registrations()) == 2
        assert summary.snippets_loaded == 2

    @pytest.mark.asyncio
    async def test_default_directory_failure_aborts(self, manager: SnippetManager):
        manager.fs.make_directory = AsyncMock(
            side_effect=SnippetError(ErrorCodes.IO_ERROR, "Permission denied")
        )
        manager.loader.load_from_directories = AsyncMock()

        with pytest.raises(SnippetError):
            await manager.init()

        manager.loader.load_from_directories.assert_not_called()
        assert manager.preferences.get_registrations() == []

    @pytest.mark.asyncio
    async def test_bundle_failure_aborts_before_load(
        self,
        app_support_dir: Path,
        tmp_path: Path,
    ):
        config = SnippetConfig.from_dict({
            "app_support_dir": app_support_dir.as_posix(),
            "bundled_directory": (tmp_path / "missing").as_posix(),
        })
        manager = SnippetManager(config)
        manager.loader.load_from_directories = AsyncMock()

        with pytest.raises(SnippetError) as exc_info:
            await manager.init()

        assert exc_info.value.code == ErrorCodes.NOT_FOUND
        manager.loader.load_from_directories.assert_not_called()

    def test_default_directory_before_init(
        self,
        manager: SnippetManager,
        snippet_config: SnippetConfig,
    ):
        assert manager.get_default_snippet_directory() == snippet_config.computed_default_directory

    def test_injected_empty_store_kept(self, snippet_config: SnippetConfig):
        store = SnippetStore()

        manager = SnippetManager(snippet_config, store=store)

        assert manager.store is store
        assert manager.loader.store is store
        assert manager.persistence.store is store


# =============================================================================
# Dialog Actions
# =============================================================================

class TestAddNewSnippetDialog:
    """add_new_snippet_dialog 테스트."""

    @pytest.mark.asyncio
    async def test_creates_and_completes(self, manager: SnippetManager, dialog):
        await manager.init()
        dialog.submission = SnippetSubmission(name="mine", template="body")

        created = await manager.add_new_snippet_dialog()

        assert created.name == "mine"
        assert dialog.presented == [None]
        assert dialog.completed == 1
        assert manager.search("MIN") == [created]
        assert Path(manager.get_default_snippet_directory(), "mine").read_text(encoding="utf-8") == "body"

    @pytest.mark.asyncio
    async def test_cancel_changes_nothing(self, manager: SnippetManager, dialog):
        await manager.init()
        before = [s.name for s in manager.get_all()]

        assert await manager.add_new_snippet_dialog() is None

        assert [s.name for s in manager.get_all()] == before
        assert dialog.completed == 0

    @pytest.mark.asyncio
    async def test_failure_keeps_dialog_open(self, manager: SnippetManager, dialog):
        await manager.init()
        dialog.submission = SnippetSubmission(name="dup", template="one")
        await manager.add_new_snippet_dialog()

        dialog.submission = SnippetSubmission(name="dup", template="two")
        with pytest.raises(SnippetError) as exc_info:
            await manager.add_new_snippet_dialog()

        assert exc_info.value.code == ErrorCodes.ALREADY_EXISTS
        assert dialog.completed == 1

    @pytest.mark.asyncio
    async def test_dialog_argument_overrides(self, snippet_config: SnippetConfig, dialog):
        manager = SnippetManager(snippet_config)
        await manager.init()

        assert await manager.add_new_snippet_dialog(dialog=dialog) is None
        assert dialog.presented == [None]

    @pytest.mark.asyncio
    async def test_no_dialog_service(self, snippet_config: SnippetConfig):
        manager = SnippetManager(snippet_config)

        with pytest.raises(RuntimeError):
            await manager.add_new_snippet_dialog()


class TestEditSnippetDialog:
    """edit_snippet_dialog 테스트."""

    @pytest.mark.asyncio
    async def test_edit_and_complete(self, manager: SnippetManager, dialog):
        await manager.init()
        dialog.submission = SnippetSubmission(name="mine", template="v1")
        snippet = await manager.add_new_snippet_dialog()

        dialog.submission = SnippetSubmission(name="renamed", template="v2")
        updated = await manager.edit_snippet_dialog(snippet)

        assert updated.id == snippet.id
        assert updated.name == "renamed"
        assert dialog.presented[-1] is snippet
        assert dialog.completed == 2

    @pytest.mark.asyncio
    async def test_non_directory_rejected_before_present(self, manager: SnippetManager, dialog):
        legacy = Snippet(name="legacy", template="x", source=SnippetSource.GIST)
        manager.store.load(legacy)

        with pytest.raises(SnippetError) as exc_info:
            await manager.edit_snippet_dialog(legacy)

        assert exc_info.value.code == ErrorCodes.NOT_DIRECTORY_SNIPPET
        assert exc_info.value.message == strings.CANNOT_EDIT_NON_DIRECTORY
        assert dialog.presented == []
        assert [r.code for r in manager.reporter.reports] == [ErrorCodes.NOT_DIRECTORY_SNIPPET]

    @pytest.mark.asyncio
    async def test_cancel(self, manager: SnippetManager, dialog):
        await manager.init()
        snippet = manager.get_all()[0]
        template = snippet.template

        assert await manager.edit_snippet_dialog(snippet) is None
        assert snippet.template == template
        assert dialog.completed == 0


class TestDeleteDialogs:
    """delete_snippet_dialog / delete_all_snippets_dialog 테스트."""

    @pytest.mark.asyncio
    async def test_delete_confirmed(self, manager: SnippetManager, dialog):
        await manager.init()
        dialog.submission = SnippetSubmission(name="mine", template="x")
        snippet = await manager.add_new_snippet_dialog()

        assert await manager.delete_snippet_dialog(snippet) is True

        assert manager.store.find_by_id(snippet.id) is None
        assert not Path(snippet.file_path).exists()
        assert dialog.questions == [(strings.QUESTION, strings.SNIPPET_DELETE_CONFIRM)]

    @pytest.mark.asyncio
    async def test_delete_declined(self, manager: SnippetManager, dialog):
        await manager.init()
        dialog.submission = SnippetSubmission(name="mine", template="x")
        snippet = await manager.add_new_snippet_dialog()
        dialog.answer = False

        assert await manager.delete_snippet_dialog(snippet) is False

        assert manager.store.find_by_id(snippet.id) is snippet
        assert Path(snippet.file_path).exists()

    @pytest.mark.asyncio
    async def test_delete_all_clears_store_only(self, manager: SnippetManager, dialog):
        await manager.init()
        files = [Path(s.file_path) for s in manager.get_all()]

        assert await manager.delete_all_snippets_dialog() is True

        assert manager.get_all() == []
        assert all(f.exists() for f in files)
        assert dialog.questions == [(strings.QUESTION, strings.SNIPPET_DELETE_ALL_CONFIRM)]

    @pytest.mark.asyncio
    async def test_delete_all_declined(self, manager: SnippetManager, dialog):
        await manager.init()
        dialog.answer = False

        assert await manager.delete_all_snippets_dialog() is False
        assert len(manager.get_all()) == 2

    @pytest.mark.asyncio
    async def test_preference_survives_delete_all(self, manager: SnippetManager):
        await manager.init()

        await manager.delete_all_snippets_dialog()

        assert manager.preferences.get(PREF_DEFAULT_SNIPPET_DIRECTORY) == (
            manager.get_default_snippet_directory()
        )
