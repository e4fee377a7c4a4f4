"""
검색어 escape + 경로 문자열 유틸리티.

경로는 preferences/스니펫 레코드에 문자열로 저장되므로
구분자는 항상 "/"로 통일한다.
"""

import re


def escape_pattern(text: str) -> str:
    """
    검색어를 정규식 리터럴로 escape.

    "a.b" → r"a\\.b" (임의 문자가 아닌 점 자체와 매칭)

    Args:
        text: 사용자 검색어

    Returns:
        re.compile에 그대로 넣을 수 있는 패턴
    """
    return re.escape(text)


def compile_search(query: str) -> re.Pattern[str]:
    """대소문자 무시 리터럴 부분문자열 매칭 패턴."""
    return re.compile(escape_pattern(query), re.IGNORECASE)


def normalize_directory_path(path: str) -> str:
    """
    디렉터리 경로 정규화.

    - 백슬래시 → 슬래시 (Windows 경로)
    - 끝 슬래시 정확히 하나

    Args:
        path: 원본 경로

    Returns:
        정규화된 경로
    """
    path = path.replace("\\", "/")
    return path.rstrip("/") + "/"


def join_path(directory: str, name: str) -> str:
    """디렉터리 경로 + 파일명."""
    return normalize_directory_path(directory) + name


def replace_last_segment(full_path: str, new_name: str) -> str:
    """
    경로의 마지막 세그먼트를 교체.

    /snippets/old.js + "new.js" → /snippets/new.js
    """
    head, _, _ = full_path.rpartition("/")
    return f"{head}/{new_name}" if head or full_path.startswith("/") else new_name
