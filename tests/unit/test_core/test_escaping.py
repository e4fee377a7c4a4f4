"""
test_escaping.py - 검색어 escape / 경로 문자열 유틸리티 테스트
"""

import re

from src.core.escaping import (
    compile_search,
    escape_pattern,
    join_path,
    normalize_directory_path,
    replace_last_segment,
)


class TestEscapePattern:
    """escape_pattern 테스트."""

    def test_metacharacters_match_literally(self):
        for text in [".", "a.b", "*", "+?", "^$", "{1}", "(x)", "[a]", "a|b", "/", "\\"]:
            assert re.fullmatch(escape_pattern(text), text)

    def test_dot_does_not_match_any_char(self):
        assert re.search(escape_pattern("a.b"), "aXb") is None

    def test_compile_search_ignores_case(self):
        assert compile_search("LoG").search("console.log")


class TestNormalizeDirectoryPath:
    """normalize_directory_path 테스트."""

    def test_adds_trailing_slash(self):
        assert normalize_directory_path("/home/user/snippets") == "/home/user/snippets/"

    def test_keeps_single_trailing_slash(self):
        assert normalize_directory_path("/home/user/snippets/") == "/home/user/snippets/"
        assert normalize_directory_path("/home/user/snippets///") == "/home/user/snippets/"

    def test_windows_separators(self):
        assert normalize_directory_path("C:\\Users\\me\\snippets") == "C:/Users/me/snippets/"

    def test_join(self):
        assert join_path("/snippets", "log") == "/snippets/log"
        assert join_path("/snippets/", "log") == "/snippets/log"


class TestReplaceLastSegment:
    """replace_last_segment 테스트."""

    def test_replaces_file_name(self):
        assert replace_last_segment("/snippets/old.js", "new.js") == "/snippets/new.js"

    def test_root_level(self):
        assert replace_last_segment("/old", "new") == "/new"

    def test_no_directory(self):
        assert replace_last_segment("old", "new") == "new"
