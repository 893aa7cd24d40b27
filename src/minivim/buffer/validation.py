"""Bounds checks and cursor clamping shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .state import Cursor

if TYPE_CHECKING:  # pragma: no cover
    from .document import TextBuffer


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer layer an impossible position."""

    def __init__(
        self, message: str, *, row: Optional[int] = None, col: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.row = row
        self.col = col


class OutOfRange(BufferValidationError):
    """Row or column outside the buffer. Callers clamp first, so this is a bug."""


def ensure_row(line_count: int, row: int, *, allow_end: bool = False) -> int:
    limit = line_count if allow_end else line_count - 1
    if row < 0 or row > limit:
        raise OutOfRange(f"Row {row} out of range (0..{limit})", row=row)
    return row


def ensure_col(line: str, col: int, *, row: Optional[int] = None) -> int:
    if col < 0 or col > len(line):
        raise OutOfRange(
            f"Column {col} out of range (0..{len(line)})", row=row, col=col
        )
    return col


def clamp_cursor(document: "TextBuffer", row: int, col: int) -> Cursor:
    """Pull ``(row, col)`` back inside ``document``; never raises."""

    row = max(0, min(row, document.line_count - 1))
    col = max(0, min(col, len(document.line(row))))
    return (row, col)


__all__ = [
    "BufferValidationError",
    "OutOfRange",
    "ensure_row",
    "ensure_col",
    "clamp_cursor",
]
