"""
Error reporting sink.

fire-and-forget: report()는 예외를 던지지 않는다.
보고된 항목은 logging으로 남기고 최근 목록으로 보관 (UI/테스트 조회용).
"""

import logging
from collections import deque
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from src.domain.errors import SnippetError

logger = logging.getLogger(__name__)

# 보관할 최근 보고 개수
MAX_REPORTS = 100


@dataclass
class ErrorReport:
    """보고된 에러 한 건."""
    code: str
    message: str
    reported_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "reported_at": self.reported_at,
        }


class ErrorReporter:
    """
    사용자에게 보여줄 비치명적 실패를 수집.

    Usage:
        reporter.report(SnippetError(ErrorCodes.IO_ERROR, "disk full"))
        reporter.report("Directory is not an absolute path: snippets/")
    """

    def __init__(self, max_reports: int = MAX_REPORTS):
        self._reports: deque[ErrorReport] = deque(maxlen=max_reports)

    def report(self, error: SnippetError | Exception | str) -> ErrorReport:
        if isinstance(error, SnippetError):
            code, message = error.code, str(error)
        elif isinstance(error, Exception):
            code, message = type(error).__name__, str(error)
        else:
            code, message = "MESSAGE", error

        entry = ErrorReport(
            code=code,
            message=message,
            reported_at=datetime.now(UTC).isoformat(),
        )
        self._reports.append(entry)
        logger.error(message)
        return entry

    @property
    def reports(self) -> list[ErrorReport]:
        return list(self._reports)

    def clear(self) -> None:
        self._reports.clear()
