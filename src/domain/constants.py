"""
Domain Constants: 스니펫 관리자 전역 상수.

preferences 키, 디렉터리 이름, 파일 모드 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Preference Keys
# =============================================================================
# preferences.yaml:
# snippetDirectories:        # 등록 레코드 목록
#   - fullPath: /abs/path/
#     autoLoad: true
# defaultSnippetDirectory: /abs/path/snippets/

PREF_SNIPPET_DIRECTORIES = "snippetDirectories"
PREF_DEFAULT_SNIPPET_DIRECTORY = "defaultSnippetDirectory"

PREFERENCE_DEFAULTS = {
    PREF_SNIPPET_DIRECTORIES: [],
    PREF_DEFAULT_SNIPPET_DIRECTORY: "",
}

# =============================================================================
# Directory Layout
# =============================================================================
# <app support>/
# ├── snippets/           # 기본 스니펫 디렉터리 (자동 생성)
# └── preferences.yaml
#
# src/snippets/default_snippets/<set>/   # 번들 스니펫 세트

APP_NAME = "snippet-manager"
DEFAULT_SNIPPETS_SUBDIR = "snippets"
BUNDLED_SNIPPETS_DIRNAME = "default_snippets"
PREFERENCES_FILENAME = "preferences.yaml"

# 기본 디렉터리 생성 모드 (umask 적용)
DEFAULT_DIRECTORY_MODE = 0o777

# =============================================================================
# Snippet Names
# =============================================================================

FORBIDDEN_NAME_CHARS = set("/\\\0")
RESERVED_NAMES = {".", ".."}
