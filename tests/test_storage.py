from __future__ import annotations

from pathlib import Path

import pytest

from minivim.storage import (
    DiskFileStore,
    FileUnavailable,
    MemoryFileStore,
    join_lines,
    split_lines,
)


def test_split_and_join_lines() -> None:
    assert split_lines("") == [""]
    assert split_lines("a\nb\n") == ["a", "b"]
    assert join_lines(["a", "b"]) == "a\nb\n"
    assert join_lines([""]) == "\n"


def test_disk_store_round_trip(tmp_path: Path) -> None:
    store = DiskFileStore()
    target = tmp_path / "notes.txt"

    store.save(str(target), ["first", "", "third"])

    assert target.read_text(encoding="utf-8") == "first\n\nthird\n"
    assert store.load(str(target)) == ["first", "", "third"]


def test_disk_store_missing_file_reads_empty(tmp_path: Path) -> None:
    assert DiskFileStore().load(str(tmp_path / "absent.txt")) == [""]


def test_disk_store_directory_is_unavailable(tmp_path: Path) -> None:
    store = DiskFileStore()

    with pytest.raises(FileUnavailable) as excinfo:
        store.load(str(tmp_path))
    assert excinfo.value.path == str(tmp_path)

    with pytest.raises(FileUnavailable):
        store.save(str(tmp_path), ["x"])


def test_disk_store_rejects_undecodable_bytes(tmp_path: Path) -> None:
    target = tmp_path / "binary.dat"
    target.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(FileUnavailable):
        DiskFileStore().load(str(target))


def test_memory_store_read_only_path() -> None:
    store = MemoryFileStore({"a": ["x"]}, read_only=["a"])

    assert store.load("a") == ["x"]
    assert store.load("missing") == [""]
    with pytest.raises(FileUnavailable):
        store.save("a", ["y"])


def test_split_lines_only_breaks_on_line_feed() -> None:
    assert split_lines("a\x0cb\r\nc\x1ed e\n") == ["a\x0cb\r", "c\x1ed e"]
    assert split_lines("tail") == ["tail"]
    assert split_lines("\n") == [""]


def test_disk_store_preserves_control_characters_and_crlf(tmp_path: Path) -> None:
    store = DiskFileStore()
    target = tmp_path / "mixed.txt"
    original = b"a\x0cb\r\nc\x1ed\rx\n"
    target.write_bytes(original)

    lines = store.load(str(target))
    store.save(str(target), lines)

    assert lines == ["a\x0cb\r", "c\x1ed\rx"]
    assert target.read_bytes() == original


def test_disk_store_unreachable_parent_is_unavailable(tmp_path: Path) -> None:
    parent = tmp_path / "plain.txt"
    parent.write_text("not a directory\n", encoding="utf-8")

    with pytest.raises(FileUnavailable):
        DiskFileStore().load(str(parent / "child.txt"))
