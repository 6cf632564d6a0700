"""Tests for the local filesystem capability."""

import struct
from pathlib import Path

import pytest

from matrix_dump.errors import IOFailure, MalformedPartition
from matrix_dump.fs import LocalFileSystem, PartitionFile


class TestList:
    """Test cases for directory listing."""

    def test_lists_files_by_name(self, tmp_path: Path) -> None:
        for name in ("part-2", "part-0", "part-1"):
            (tmp_path / name).write_bytes(b"x" * len(name))

        files = LocalFileSystem().list(tmp_path)

        assert [f.path.name for f in files] == ["part-0", "part-1", "part-2"]
        assert all(f.size == 6 for f in files)

    def test_skips_sub_directories(self, tmp_path: Path) -> None:
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "inner").write_bytes(b"")
        (tmp_path / "part-0").write_bytes(b"")

        files = LocalFileSystem().list(tmp_path)

        assert [f.path.name for f in files] == ["part-0"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(IOFailure, match="cannot list"):
            LocalFileSystem().list(tmp_path / "absent")


class TestReadWrite:
    """Test cases for opening sources and sinks."""

    def test_open_read_returns_stream(self, tmp_path: Path) -> None:
        path = tmp_path / "part-0"
        path.write_bytes(struct.pack(">i", 42))

        with LocalFileSystem().open_read(PartitionFile(path, 4)) as source:
            assert source.read_i32() == 42
            assert source.name == str(path)

    def test_open_read_bounds_reads_by_file_size(self, tmp_path: Path) -> None:
        path = tmp_path / "part-0"
        path.write_bytes(struct.pack(">ii", 7, 0x7FFFFFFF))

        with LocalFileSystem().open_read(PartitionFile(path, 8)) as source:
            assert source.read_i32() == 7
            length = source.read_i32()
            with pytest.raises(MalformedPartition, match="0 left"):
                source.read_fully(length * 12)

    def test_touch_creates_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "3"
        LocalFileSystem().touch(path)
        assert path.read_bytes() == b""

    def test_open_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(IOFailure, match="cannot open"):
            LocalFileSystem().open_read(PartitionFile(tmp_path / "gone", 0))

    def test_create_write_uses_lf_and_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "0"
        with LocalFileSystem().create_write(path) as sink:
            sink.write("rowType α\nrowNum:1\n")

        assert path.read_bytes() == "rowType α\nrowNum:1\n".encode()

    def test_mkdirs_is_idempotent(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        fs = LocalFileSystem()

        fs.mkdirs(target)
        fs.mkdirs(target)

        assert target.is_dir()

    def test_mkdirs_over_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(IOFailure):
            LocalFileSystem().mkdirs(blocker)


def test_partition_file_str_names_path(tmp_path: Path) -> None:
    descriptor = PartitionFile(tmp_path / "part-3", 12)
    assert str(descriptor) == f"{tmp_path / 'part-3'} (12 bytes)"
