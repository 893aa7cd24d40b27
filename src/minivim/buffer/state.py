"""Cursor state tied to a single open buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class BufferState:
    """Cursor position for one buffer.

    ``col`` may equal the line length: that is the append position.
    """

    cursor: Cursor = (0, 0)

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def reset(self) -> None:
        self.cursor = (0, 0)
