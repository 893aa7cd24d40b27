from __future__ import annotations

from typing import Dict, List

import pytest

from minivim.buffer import Buffer, BufferSet


def make_bufferset(*names: str, files: Dict[str, List[str]] | None = None):
    contents = files or {}
    loads: List[str] = []

    def loader(name: str) -> Buffer:
        loads.append(name)
        return Buffer.from_lines(contents.get(name, [""]), name=name)

    return BufferSet(names, loader=loader), loads


def test_requires_a_filename() -> None:
    with pytest.raises(ValueError):
        make_bufferset()


def test_first_file_is_loaded_on_creation() -> None:
    buffers, loads = make_bufferset("a.txt", "b.txt", files={"a.txt": ["hi"]})

    assert buffers.current_filename == "a.txt"
    assert buffers.current.document.snapshot() == ("hi",)
    assert loads == ["a.txt"]


def test_next_and_previous_stop_at_the_ends() -> None:
    buffers, _ = make_bufferset("a", "b")

    assert buffers.previous() is False
    assert buffers.next() is True
    assert buffers.current_filename == "b"
    assert buffers.next() is False
    assert buffers.previous() is True
    assert buffers.current_index == 0


def test_open_appends_to_history_and_switches() -> None:
    buffers, loads = make_bufferset("a")

    buffers.open("c")
    buffers.open("a")

    assert buffers.history == ("a", "c", "a")
    assert buffers.current_index == 2
    assert loads == ["a", "c", "a"]


def test_switch_to_ignores_out_of_range() -> None:
    buffers, _ = make_bufferset("a", "b", "c")

    assert buffers.switch_to(5) is False
    assert buffers.switch_to(-1) is False
    assert buffers.switch_to(2) is True
    assert buffers.current_filename == "c"


def test_switch_reloads_with_fresh_state() -> None:
    buffers, _ = make_bufferset("a", "b", files={"a": ["x", "y"]})
    buffers.current.move_cursor(1, 1)
    buffers.current.delete_line(0)

    buffers.next()
    buffers.previous()

    current = buffers.current
    assert current.cursor == (0, 0)
    assert current.document.snapshot() == ("x", "y")
    assert current.undo_log.can_undo() is False


def test_listing_is_one_based_and_restartable() -> None:
    buffers, _ = make_bufferset("a", "b")
    listing = buffers.entries()

    assert list(listing) == [(1, "a"), (2, "b")]
    assert list(listing) == [(1, "a"), (2, "b")]
    assert len(listing) == 2


def test_list_is_the_same_listing_as_entries() -> None:
    buffers, _ = make_bufferset("a", "b")
    buffers.open("c")

    assert list(buffers.list()) == list(buffers.entries())
    assert list(buffers.list()) == [(1, "a"), (2, "b"), (3, "c")]
