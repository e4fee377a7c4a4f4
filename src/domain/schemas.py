"""
Data schemas for the snippet manager.

규칙:
- 스니펫 하나 = 파일 하나 (파일명 = name, 내용 = template 원문)
- id는 store가 삽입 시 발급 (0 = 미발급)
- 디렉터리 등록 레코드는 preferences에 fullPath/autoLoad 키로 저장
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Snippet Source
# =============================================================================

class SnippetSource(str, Enum):
    """
    스니펫 출처 (덮어쓰기 우선순위 결정).

    user/gist는 더 이상 생성되지 않는 레거시 값이지만
    우선순위 판정에서는 여전히 인식한다.
    """
    DIRECTORY = "directory"
    USER = "user"      # legacy
    GIST = "gist"      # legacy


class LoadOutcome(str, Enum):
    """SnippetStore.load 결과."""
    ACCEPTED = "accepted"
    IGNORED = "ignored"  # 우선순위 규칙으로 무시됨 (에러 아님)


# =============================================================================
# Core Schemas
# =============================================================================

@dataclass
class Snippet:
    """스니펫 레코드."""
    name: str
    template: str
    source: SnippetSource | str = SnippetSource.DIRECTORY
    file_path: str | None = None  # directory 스니펫만
    id: int = 0

    @property
    def is_directory_snippet(self) -> bool:
        return self.source == SnippetSource.DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "id": self.id,
            "name": self.name,
            "template": self.template,
            "source": self.source.value if isinstance(self.source, SnippetSource) else self.source,
            "file_path": self.file_path,
        }


@dataclass
class DirectoryRegistration:
    """
    스니펫 디렉터리 등록 레코드.

    생성: 최초 발견 시 (auto_load=True)
    변경: 검증 실패 시 auto_load=False (매 시작마다 재시도 방지)
    삭제: 자동 삭제 없음
    """
    full_path: str
    auto_load: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"fullPath": self.full_path, "autoLoad": self.auto_load}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DirectoryRegistration":
        return cls(
            full_path=data["fullPath"],
            auto_load=data.get("autoLoad") is True,
        )


@dataclass
class SnippetSubmission:
    """다이얼로그가 core로 넘기는 편집 결과."""
    name: str
    template: str


# =============================================================================
# Loader Result
# =============================================================================

@dataclass
class LoadSummary:
    """디렉터리 로드 결과."""
    directories_scanned: int = 0
    directories_skipped: int = 0
    snippets_loaded: int = 0
    snippets_ignored: int = 0
    errors: list[str] = field(default_factory=list)
