"""
Snippets layer: 스니펫 관리 모듈.

역할:
- 기본 디렉터리 부트스트랩 (bootstrap.py)
- 등록된 디렉터리 스캔 (loader.py)
- 스니펫 파일 CRUD (persistence.py)
- 시작 순서 + 다이얼로그 액션 (manager.py)

주의: 폴더 구분
- src/snippets/ → 코드 (이 모듈)
- src/snippets/default_snippets/ → 번들 스니펫 세트 (데이터)
"""

from .config import SnippetConfig, get_default_snippet_directory
from .loader import DirectoryLoader
from .manager import SnippetDialog, SnippetManager
from .persistence import SnippetPersistence, validate_snippet_name

__all__ = [
    # config
    "SnippetConfig",
    "get_default_snippet_directory",
    # loader
    "DirectoryLoader",
    # persistence
    "SnippetPersistence",
    "validate_snippet_name",
    # manager
    "SnippetManager",
    "SnippetDialog",
]
