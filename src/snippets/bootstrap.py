"""
기본 스니펫 디렉터리 부트스트랩.

시작 순서 (SnippetManager.init):
1. ensure_default_directory: 기본 디렉터리 확보 (없으면 생성)
2. check_default_snippets_directories: 번들 스니펫 세트 등록
3. DirectoryLoader.load_from_directories

1, 2의 실패는 시작 순서를 중단한다.
"""

import asyncio
import logging

from src.core.escaping import normalize_directory_path
from src.core.filesystem import FileSystem
from src.core.preferences import Preferences
from src.core.reporting import ErrorReporter
from src.domain.constants import DEFAULT_DIRECTORY_MODE, PREF_DEFAULT_SNIPPET_DIRECTORY
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import DirectoryRegistration
from src.snippets import strings

logger = logging.getLogger(__name__)


async def ensure_default_directory(
    preferences: Preferences,
    fs: FileSystem,
    reporter: ErrorReporter,
    computed_default: str,
    initial_directory: str | None = None,
) -> str:
    """
    기본 스니펫 디렉터리 확보.

    - preferences 값 → initial_directory → computed_default 순으로 결정
    - 경로 정규화: "\\" → "/", 끝 슬래시 하나
    - NOT_FOUND면 생성 (부모 포함, 0o777)
    - 실패 시 preferences를 computed_default로 되돌린 뒤 re-raise
      (잘못된 수동 설정이 다음 시작에서 복구됨)
    - preferences 쓰기(파일 락 대기 포함)는 to_thread로 실행

    Args:
        preferences: preferences store
        fs: 파일시스템
        reporter: 에러 보고
        computed_default: 계산된 기본 경로 (복구 기준값)
        initial_directory: preferences 값이 없을 때 쓸 경로

    Returns:
        확보된 디렉터리 경로 (preferences에 저장됨)

    Raises:
        SnippetError: 생성 실패, 해석 실패, NOT_A_DIRECTORY
    """
    directory = (
        preferences.get(PREF_DEFAULT_SNIPPET_DIRECTORY)
        or initial_directory
        or computed_default
    )
    directory = normalize_directory_path(directory)

    try:
        try:
            entry = await fs.resolve(directory)
        except SnippetError as e:
            if e.code != ErrorCodes.NOT_FOUND:
                raise
            logger.info(f"Creating default snippet directory: {directory}")
            await fs.make_directory(directory, DEFAULT_DIRECTORY_MODE)
        else:
            if not entry.is_directory:
                raise SnippetError(
                    ErrorCodes.NOT_A_DIRECTORY,
                    f"Target is not a directory: {directory}",
                    path=directory,
                )
    except SnippetError as e:
        reporter.report(e)
        await asyncio.to_thread(preferences.set, PREF_DEFAULT_SNIPPET_DIRECTORY, computed_default)
        raise

    await asyncio.to_thread(preferences.set, PREF_DEFAULT_SNIPPET_DIRECTORY, directory)
    return directory


def register_snippet_directory(preferences: Preferences, full_path: str) -> bool:
    """
    디렉터리 등록 (이미 있으면 무시).

    새 등록은 autoLoad=True.

    Returns:
        새로 등록되었는지 여부
    """
    registrations = preferences.get_registrations()
    if any(r.full_path == full_path for r in registrations):
        return False

    registrations.append(DirectoryRegistration(full_path=full_path, auto_load=True))
    preferences.set_registrations(registrations)
    logger.info(f"Registered snippet directory: {full_path}")
    return True


async def check_default_snippets_directories(
    preferences: Preferences,
    fs: FileSystem,
    reporter: ErrorReporter,
    bundled_directory: str,
) -> list[str]:
    """
    번들 default_snippets/ 직속 하위 디렉터리를 모두 등록.

    Returns:
        새로 등록된 경로 목록

    Raises:
        SnippetError: 번들 디렉터리 해석/목록 실패
    """
    try:
        entry = await fs.resolve(bundled_directory)
        if not entry.is_directory:
            raise SnippetError(
                ErrorCodes.NOT_A_DIRECTORY,
                strings.NOT_A_DIRECTORY.format(path=bundled_directory),
                path=bundled_directory,
            )
        contents = await entry.get_contents()
    except SnippetError as e:
        reporter.report(e)
        raise

    added = []
    for child in contents:
        if not child.is_directory:
            continue
        if await asyncio.to_thread(register_snippet_directory, preferences, child.full_path):
            added.append(child.full_path)
    return added
