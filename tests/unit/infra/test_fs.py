from __future__ import annotations

"""
Unit tests for the filesystem infrastructure.

Verifies the local filesystem capability (typed errors, sorted listings,
strict UTF-8 reads) and the path helpers.
"""

import os
from pathlib import Path

import pytest

from context4ai.domain.errors import FileReadError, PathAccessError
from context4ai.infra.fs import (
    LocalFileSystem,
    format_file_size,
    is_within_root,
    normalize_path,
    to_relative_posix,
)


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


def test_stat_reports_kind_and_size(fs, tmp_path: Path) -> None:
    f = tmp_path / "a.txt"
    f.write_text("hello", encoding="utf-8")

    file_stat = fs.stat(str(f))
    dir_stat = fs.stat(str(tmp_path))

    assert file_stat.is_file and not file_stat.is_directory
    assert file_stat.size == 5
    assert dir_stat.is_directory and not dir_stat.is_file


def test_stat_missing_path_raises(fs, tmp_path: Path) -> None:
    with pytest.raises(PathAccessError) as exc:
        fs.stat(str(tmp_path / "missing"))

    assert exc.value.path.endswith("missing")
    assert "during collection" in str(exc.value)


def test_read_directory_is_sorted(fs, tmp_path: Path) -> None:
    for name in ("b.txt", "a.txt", "c"):
        if name == "c":
            (tmp_path / name).mkdir()
        else:
            (tmp_path / name).write_text("", encoding="utf-8")

    listing = fs.read_directory(str(tmp_path))

    assert [e.name for e in listing] == ["a.txt", "b.txt", "c"]
    assert listing[2].is_directory is True


def test_read_directory_on_file_raises(fs, tmp_path: Path) -> None:
    f = tmp_path / "a.txt"
    f.write_text("", encoding="utf-8")

    with pytest.raises(PathAccessError):
        fs.read_directory(str(f))


def test_read_file_utf8(fs, tmp_path: Path) -> None:
    f = tmp_path / "u.txt"
    f.write_text("café ✓", encoding="utf-8")

    assert fs.read_file(str(f)) == "café ✓"


def test_read_file_binary_raises(fs, tmp_path: Path) -> None:
    f = tmp_path / "blob.bin"
    f.write_bytes(b"\xff\xfe\x00\x81")

    with pytest.raises(FileReadError):
        fs.read_file(str(f))


def test_read_file_missing_raises(fs, tmp_path: Path) -> None:
    with pytest.raises(FileReadError) as exc:
        fs.read_file(str(tmp_path / "gone.txt"))

    assert "for content" in str(exc.value)


def test_relative_posix_and_containment(tmp_path: Path) -> None:
    root = str(tmp_path)
    nested = os.path.join(root, "src", "a.py")

    assert to_relative_posix(root, root) == ""
    assert to_relative_posix(nested, root) == "src/a.py"
    assert is_within_root(nested, root) is True
    assert is_within_root(root, root) is True
    assert is_within_root(os.path.dirname(root), root) is False


def test_normalize_path_fallback(tmp_path: Path) -> None:
    assert normalize_path("", str(tmp_path)) == os.path.abspath(str(tmp_path))
    assert normalize_path(None, str(tmp_path)) == os.path.abspath(str(tmp_path))


@pytest.mark.parametrize("size,expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1536, "1.50 KB"),
    (2 * 1024 * 1024, "2.00 MB"),
])
def test_format_file_size(size, expected) -> None:
    assert format_file_size(size) == expected


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs require a POSIX platform")
def test_stat_reports_fifo_as_neither(fs, tmp_path: Path) -> None:
    fifo = tmp_path / "pipe"
    os.mkfifo(str(fifo))

    fifo_stat = fs.stat(str(fifo))

    assert fifo_stat.is_file is False
    assert fifo_stat.is_directory is False
