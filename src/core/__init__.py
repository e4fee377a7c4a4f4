"""
Core layer: 스니펫 컬렉션과 호스트 협력자.

역할:
- store (메모리 컬렉션, 우선순위 규칙)
- 비동기 파일시스템, preferences, 에러 보고
"""

from .escaping import escape_pattern, normalize_directory_path, replace_last_segment
from .filesystem import FileSystem, FileSystemEntry, atomic_write_text
from .logging import configure_logging
from .preferences import Preferences
from .reporting import ErrorReport, ErrorReporter
from .store import SnippetStore

__all__ = [
    # escaping
    "escape_pattern",
    "normalize_directory_path",
    "replace_last_segment",
    # filesystem
    "FileSystem",
    "FileSystemEntry",
    "atomic_write_text",
    # preferences
    "Preferences",
    # reporting
    "ErrorReporter",
    "ErrorReport",
    # store
    "SnippetStore",
    # logging
    "configure_logging",
]
