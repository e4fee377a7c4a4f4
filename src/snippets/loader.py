"""
Directory Loader: 등록된 디렉터리 → SnippetStore.

규칙:
- 등록 목록 + 기본 디렉터리(암묵적 autoLoad 항목)를 스캔
- autoLoad가 True인 항목만 처리
- 절대 경로 아님 / 디렉터리 아님 → autoLoad=False로 바꿔 저장 (매 시작 재시도 방지)
- 디렉터리/파일 단위로 독립 실패: 하나의 실패가 다른 로드를 중단하지 않음
- 디렉터리/파일 읽기는 동시에 진행 (순서 보장 없음)
"""

import asyncio
import logging

from src.core.filesystem import FileSystem, FileSystemEntry
from src.core.preferences import Preferences
from src.core.reporting import ErrorReporter
from src.core.store import SnippetStore
from src.domain.constants import PREF_DEFAULT_SNIPPET_DIRECTORY
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import (
    DirectoryRegistration,
    LoadOutcome,
    LoadSummary,
    Snippet,
    SnippetSource,
)
from src.snippets import strings

logger = logging.getLogger(__name__)


class DirectoryLoader:
    """등록된 스니펫 디렉터리를 읽어 store에 채운다."""

    def __init__(
        self,
        store: SnippetStore,
        fs: FileSystem,
        preferences: Preferences,
        reporter: ErrorReporter,
    ):
        self.store = store
        self.fs = fs
        self.preferences = preferences
        self.reporter = reporter

    async def load_from_directories(self) -> LoadSummary:
        """
        모든 autoLoad 디렉터리 로드.

        Returns:
            LoadSummary (디렉터리별 실패는 errors에 누적, 예외 없음)
        """
        summary = LoadSummary()
        registrations = self.preferences.get_registrations()

        default_directory = self.preferences.get(PREF_DEFAULT_SNIPPET_DIRECTORY)
        implicit = []
        if default_directory:
            implicit.append(DirectoryRegistration(full_path=default_directory, auto_load=True))

        tasks = []
        for registration in registrations + implicit:
            if registration.auto_load is not True:
                logger.debug(f"Skipping directory: {registration.full_path}")
                summary.directories_skipped += 1
                continue
            tasks.append(self._load_directory(registration, registrations, summary))

        await asyncio.gather(*tasks)

        logger.info(
            f"Loaded {summary.snippets_loaded} snippets from "
            f"{summary.directories_scanned} directories "
            f"({summary.snippets_ignored} ignored, {len(summary.errors)} errors)"
        )
        return summary

    def _fail(self, summary: LoadSummary, error: SnippetError) -> None:
        self.reporter.report(error)
        summary.errors.append(str(error))

    async def _disable(
        self,
        registration: DirectoryRegistration,
        registrations: list[DirectoryRegistration],
        summary: LoadSummary,
    ) -> None:
        """autoLoad=False 저장 (암묵적 기본 디렉터리 항목은 저장하지 않음)."""
        registration.auto_load = False
        try:
            await asyncio.to_thread(self.preferences.set_registrations, registrations)
        except SnippetError as e:
            self._fail(summary, e)

    async def _load_directory(
        self,
        registration: DirectoryRegistration,
        registrations: list[DirectoryRegistration],
        summary: LoadSummary,
    ) -> None:
        path = registration.full_path

        if not self.fs.is_absolute_path(path):
            await self._disable(registration, registrations, summary)
            self._fail(summary, SnippetError(
                ErrorCodes.NOT_ABSOLUTE_PATH,
                strings.NOT_ABSOLUTE_PATH.format(path=path),
                path=path,
            ))
            return

        try:
            directory = await self.fs.resolve(path)
        except SnippetError as e:
            self._fail(summary, e)
            return

        if directory.is_directory is not True:
            await self._disable(registration, registrations, summary)
            self._fail(summary, SnippetError(
                ErrorCodes.NOT_A_DIRECTORY,
                strings.NOT_A_DIRECTORY.format(path=path),
                path=path,
            ))
            return

        try:
            contents = await directory.get_contents()
        except SnippetError as e:
            self._fail(summary, e)
            return

        summary.directories_scanned += 1
        await asyncio.gather(*(
            self._load_file(entry, summary) for entry in contents if entry.is_file
        ))

    async def _load_file(self, entry: FileSystemEntry, summary: LoadSummary) -> None:
        try:
            content = await entry.read()
        except SnippetError as e:
            self._fail(summary, e)
            return

        outcome = self.store.load(Snippet(
            name=entry.name,
            template=content,
            source=SnippetSource.DIRECTORY,
            file_path=entry.full_path,
        ))
        if outcome == LoadOutcome.ACCEPTED:
            summary.snippets_loaded += 1
        else:
            summary.snippets_ignored += 1
