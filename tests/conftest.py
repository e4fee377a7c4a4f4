"""
Pytest fixtures for the snippet manager tests.

구성:
- 경로 fixture: tmp_path 아래 app support / 기본 디렉터리 / 번들 세트
- 협력자 fixture: FileSystem, Preferences, ErrorReporter, SnippetStore
- RecordingDialog: 다이얼로그 호출 기록용 가짜 구현
"""

from pathlib import Path

import pytest

from src.core.filesystem import FileSystem
from src.core.preferences import Preferences
from src.core.reporting import ErrorReporter
from src.core.store import SnippetStore
from src.domain.constants import PREF_DEFAULT_SNIPPET_DIRECTORY
from src.domain.schemas import Snippet, SnippetSubmission
from src.snippets.config import SnippetConfig
from src.snippets.manager import SnippetDialog, SnippetManager

# =============================================================================
# Dialog
# =============================================================================


class RecordingDialog(SnippetDialog):
    """미리 정한 응답을 돌려주고 호출을 기록."""

    def __init__(
        self,
        submission: SnippetSubmission | None = None,
        answer: bool = True,
    ):
        self.submission = submission
        self.answer = answer
        self.questions: list[tuple[str, str]] = []
        self.presented: list[Snippet | None] = []
        self.completed = 0

    async def ask_yes_no(self, title: str, message: str) -> bool:
        self.questions.append((title, message))
        return self.answer

    async def present(self, snippet: Snippet | None) -> SnippetSubmission | None:
        self.presented.append(snippet)
        return self.submission

    async def complete(self) -> None:
        self.completed += 1


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def app_support_dir(tmp_path: Path) -> Path:
    """테스트용 앱 데이터 위치."""
    path = tmp_path / "app_support"
    path.mkdir()
    return path


@pytest.fixture
def default_dir(app_support_dir: Path) -> Path:
    """기본 스니펫 디렉터리 (생성됨)."""
    path = app_support_dir / "snippets"
    path.mkdir()
    return path


@pytest.fixture
def bundled_dir(tmp_path: Path) -> Path:
    """
    번들 default_snippets/ 구조.

    default_snippets/
    ├── javascript/log
    ├── python/ifmain
    └── README (파일 → 등록 대상 아님)
    """
    root = tmp_path / "default_snippets"
    (root / "javascript").mkdir(parents=True)
    (root / "python").mkdir()
    (root / "javascript" / "log").write_text("console.log($1);", encoding="utf-8")
    (root / "python" / "ifmain").write_text('if __name__ == "__main__":\n    main()\n', encoding="utf-8")
    (root / "README").write_text("bundled snippets", encoding="utf-8")
    return root


@pytest.fixture
def snippet_config(app_support_dir: Path, bundled_dir: Path) -> SnippetConfig:
    """테스트용 SnippetConfig."""
    return SnippetConfig.from_dict({
        "app_support_dir": app_support_dir.as_posix(),
        "bundled_directory": bundled_dir.as_posix(),
    })


# =============================================================================
# Collaborator Fixtures
# =============================================================================

@pytest.fixture
def fs() -> FileSystem:
    return FileSystem()


@pytest.fixture
def reporter() -> ErrorReporter:
    return ErrorReporter()


@pytest.fixture
def store(reporter: ErrorReporter) -> SnippetStore:
    return SnippetStore(reporter=reporter)


@pytest.fixture
def preferences(app_support_dir: Path) -> Preferences:
    return Preferences(app_support_dir / "preferences.yaml")


@pytest.fixture
def configured_preferences(preferences: Preferences, default_dir: Path) -> Preferences:
    """기본 디렉터리가 설정된 preferences."""
    preferences.set(PREF_DEFAULT_SNIPPET_DIRECTORY, default_dir.as_posix() + "/")
    return preferences


@pytest.fixture
def dialog() -> RecordingDialog:
    return RecordingDialog()


@pytest.fixture
def manager(
    snippet_config: SnippetConfig,
    dialog: RecordingDialog,
    store: SnippetStore,
    fs: FileSystem,
    preferences: Preferences,
    reporter: ErrorReporter,
) -> SnippetManager:
    """모든 협력자를 fixture로 주입한 SnippetManager."""
    return SnippetManager(
        snippet_config,
        dialog=dialog,
        store=store,
        fs=fs,
        preferences=preferences,
        reporter=reporter,
    )
