"""Line storage for one open file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .state import Cursor
from .validation import ensure_col, ensure_row


@dataclass(slots=True)
class TextBuffer:
    """Mutable list-of-lines document.

    The buffer is never empty: deleting the last remaining line leaves a
    single empty line behind. Row and column arguments are expected to be
    clamped by the caller; anything outside the document raises
    :class:`~minivim.buffer.validation.OutOfRange`.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TextBuffer":
        return cls(_lines=list(lines))

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        pieces = text.split("\n")
        if len(pieces) > 1 and pieces[-1] == "":
            pieces.pop()
        return cls.from_lines(pieces)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def slice(self, start: int, stop: int) -> Sequence[str]:
        return tuple(self._lines[start:stop])

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> str:
        ensure_row(self.line_count, row)
        return self._lines[row]

    def insert_char(self, pos: Cursor, char: str) -> Cursor:
        row, col = pos
        line = self.line(row)
        ensure_col(line, col, row=row)
        self._lines[row] = line[:col] + char + line[col:]
        self._touch()
        return (row, col + len(char))

    def delete_char_before(self, pos: Cursor) -> Cursor:
        """Remove the character left of ``pos``; a no-op at column 0."""

        row, col = pos
        line = self.line(row)
        ensure_col(line, col, row=row)
        if col == 0:
            return pos
        self._lines[row] = line[: col - 1] + line[col:]
        self._touch()
        return (row, col - 1)

    def split_line(self, pos: Cursor) -> Cursor:
        row, col = pos
        line = self.line(row)
        ensure_col(line, col, row=row)
        self._lines[row : row + 1] = [line[:col], line[col:]]
        self._touch()
        return (row + 1, 0)

    def join_with_next(self, row: int) -> Cursor:
        """Append line ``row + 1`` to line ``row``; returns the join point."""

        ensure_row(self.line_count, row + 1)
        head = self._lines[row]
        self._lines[row : row + 2] = [head + self._lines[row + 1]]
        self._touch()
        return (row, len(head))

    def delete_line(self, row: int) -> str:
        ensure_row(self.line_count, row)
        removed = self._lines.pop(row)
        if not self._lines:
            self._lines.append("")
        self._touch()
        return removed

    def insert_line(self, row: int, text: str) -> None:
        ensure_row(self.line_count, row, allow_end=True)
        self._lines.insert(row, text)
        self._touch()

    def replace_line(self, row: int, text: str) -> None:
        ensure_row(self.line_count, row)
        if self._lines[row] == text:
            return
        self._lines[row] = text
        self._touch()

    def mark_clean(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
