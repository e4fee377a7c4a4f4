"""
test_filesystem.py - 비동기 파일시스템 추상화 테스트

검증:
- OSError → SnippetError 코드 변환 (NOT_FOUND / ALREADY_EXISTS / IO_ERROR)
- 디렉터리 엔트리 경로는 "/"로 끝남
- 원자적 쓰기: temp 파일 남지 않음, 기존 권한 유지
- rename: 대상 존재 시 ALREADY_EXISTS
"""

import os
import stat
from pathlib import Path

import pytest

from src.core.filesystem import FileSystem, atomic_write_text
from src.domain.errors import ErrorCodes, SnippetError


class TestResolve:
    """FileSystem.resolve 테스트."""

    @pytest.mark.asyncio
    async def test_file_entry(self, fs: FileSystem, tmp_path: Path):
        target = tmp_path / "log"
        target.write_text("console.log()", encoding="utf-8")

        entry = await fs.resolve(target.as_posix())

        assert entry.is_file is True
        assert entry.is_directory is False
        assert entry.name == "log"
        assert entry.full_path == target.as_posix()

    @pytest.mark.asyncio
    async def test_directory_entry_has_trailing_slash(self, fs: FileSystem, tmp_path: Path):
        entry = await fs.resolve(tmp_path.as_posix())

        assert entry.is_directory is True
        assert entry.full_path == tmp_path.as_posix() + "/"
        assert entry.name == tmp_path.name

    @pytest.mark.asyncio
    async def test_missing_path_not_found(self, fs: FileSystem, tmp_path: Path):
        with pytest.raises(SnippetError) as exc_info:
            await fs.resolve((tmp_path / "missing").as_posix())

        assert exc_info.value.code == ErrorCodes.NOT_FOUND


class TestReadWrite:
    """read/write 테스트."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, fs: FileSystem, tmp_path: Path):
        path = (tmp_path / "snippet").as_posix()

        await fs.write_file(path, "line 1\r\nline 2\n")
        entry = await fs.resolve(path)

        assert await entry.read() == "line 1\r\nline 2\n"

    @pytest.mark.asyncio
    async def test_write_into_missing_directory_fails(self, fs: FileSystem, tmp_path: Path):
        path = (tmp_path / "nope" / "snippet").as_posix()

        with pytest.raises(SnippetError) as exc_info:
            await fs.write_file(path, "body")

        assert exc_info.value.code == ErrorCodes.NOT_FOUND

    @pytest.mark.asyncio
    async def test_binary_file_read_is_io_error(self, fs: FileSystem, tmp_path: Path):
        path = tmp_path / ".DS_Store"
        path.write_bytes(b"\x00\x05\x16\x07\xff\xfe\x80")

        with pytest.raises(SnippetError) as exc_info:
            await fs.read_file(path.as_posix())

        assert exc_info.value.code == ErrorCodes.IO_ERROR
        assert exc_info.value.context["path"] == path.as_posix()

    def test_atomic_write_leaves_no_temp_files(self, tmp_path: Path):
        target = tmp_path / "snippet"

        atomic_write_text(target, "a")
        atomic_write_text(target, "b")

        assert target.read_text(encoding="utf-8") == "b"
        assert [p.name for p in tmp_path.iterdir()] == ["snippet"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX 권한 전용")
    def test_atomic_write_keeps_existing_mode(self, tmp_path: Path):
        target = tmp_path / "snippet"
        target.write_text("old", encoding="utf-8")
        target.chmod(0o640)

        atomic_write_text(target, "new")

        assert stat.S_IMODE(target.stat().st_mode) == 0o640


class TestRenameUnlink:
    """rename/unlink 테스트."""

    @pytest.mark.asyncio
    async def test_rename(self, fs: FileSystem, tmp_path: Path):
        old = tmp_path / "old"
        old.write_text("body", encoding="utf-8")
        new = tmp_path / "new"

        entry = await fs.resolve(old.as_posix())
        await entry.rename(new.as_posix())

        assert not old.exists()
        assert new.read_text(encoding="utf-8") == "body"

    @pytest.mark.asyncio
    async def test_rename_onto_existing_fails(self, fs: FileSystem, tmp_path: Path):
        old = tmp_path / "old"
        old.write_text("old body", encoding="utf-8")
        new = tmp_path / "new"
        new.write_text("new body", encoding="utf-8")

        with pytest.raises(SnippetError) as exc_info:
            await fs.rename(old.as_posix(), new.as_posix())

        assert exc_info.value.code == ErrorCodes.ALREADY_EXISTS
        assert new.read_text(encoding="utf-8") == "new body"
        assert old.exists()

    @pytest.mark.asyncio
    async def test_unlink(self, fs: FileSystem, tmp_path: Path):
        target = tmp_path / "gone"
        target.write_text("x", encoding="utf-8")

        entry = await fs.resolve(target.as_posix())
        await entry.unlink()

        assert not target.exists()


class TestDirectories:
    """get_contents / make_directory 테스트."""

    @pytest.mark.asyncio
    async def test_get_contents_sorted_with_kinds(self, fs: FileSystem, tmp_path: Path):
        (tmp_path / "b").write_text("", encoding="utf-8")
        (tmp_path / "a").write_text("", encoding="utf-8")
        (tmp_path / "sub").mkdir()

        entries = await fs.get_contents(tmp_path.as_posix())

        assert [e.name for e in entries] == ["a", "b", "sub"]
        assert [e.is_file for e in entries] == [True, True, False]
        assert entries[2].full_path.endswith("/sub/")

    @pytest.mark.asyncio
    async def test_make_directory_with_parents(self, fs: FileSystem, tmp_path: Path):
        target = tmp_path / "a" / "b" / "snippets"

        await fs.make_directory(target.as_posix() + "/")

        assert target.is_dir()

    def test_is_absolute_path(self, fs: FileSystem, tmp_path: Path):
        assert fs.is_absolute_path(tmp_path.as_posix()) is True
        assert fs.is_absolute_path("relative/snippets/") is False
