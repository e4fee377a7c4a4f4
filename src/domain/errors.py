"""
Error definitions for the snippet manager.

에러 정책:
- 조용한 실패 금지 → SnippetError로 명시적 실패
- 발견 지점에서 ErrorReporter로 보고 후 re-raise (호출자가 후속 단계 중단)
- 재시도 없음
- 예외: 우선순위 충돌(precedence)로 무시된 load는 에러가 아님 (로그만)
"""

from typing import Any


class SnippetError(Exception):
    """
    스니펫 관리 중 발생하는 에러.

    code로 분류:
    - NOT_FOUND: 생성/디렉터리 부트스트랩에서는 "진행" 신호
    - ALREADY_EXISTS: 사용자에게 보이는 충돌, 작업 중단
    - IO_ERROR: 권한/디스크 등, 작업 중단
    - 검증 실패: 절대 경로 아님, 디렉터리 아님, directory 스니펫 아님

    Usage:
        raise SnippetError(ErrorCodes.ALREADY_EXISTS, "File already exists", path=path)
    """

    def __init__(self, code: str, message: str = "", **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        text = f"[{self.code}] {self.message}".rstrip()
        return f"{text} ({ctx_str})" if ctx_str else text

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **{k: str(v) for k, v in self.context.items()},
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === File System ===
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    IO_ERROR = "IO_ERROR"

    # === Validation ===
    NOT_ABSOLUTE_PATH = "NOT_ABSOLUTE_PATH"
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
    NOT_DIRECTORY_SNIPPET = "NOT_DIRECTORY_SNIPPET"
    INVALID_SNIPPET_NAME = "INVALID_SNIPPET_NAME"

    # === Store ===
    SNIPPET_NOT_FOUND = "SNIPPET_NOT_FOUND"  # update 전제조건 위반
    UNKNOWN_SOURCE = "UNKNOWN_SOURCE"

    # === Preferences ===
    PREFERENCES_ERROR = "PREFERENCES_ERROR"
    DEFAULT_DIRECTORY_UNSET = "DEFAULT_DIRECTORY_UNSET"
