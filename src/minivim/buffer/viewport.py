"""Scroll window derived from the cursor and the terminal size."""

from __future__ import annotations

from dataclasses import dataclass

from minivim.config import DEFAULT_LAYOUT

from .state import Cursor


@dataclass(frozen=True, slots=True)
class ScreenSize:
    rows: int = 24
    cols: int = 80


def text_height(
    screen_rows: int, reserved_rows: int = DEFAULT_LAYOUT.reserved_rows
) -> int:
    return max(1, screen_rows - reserved_rows)


def text_width(screen_cols: int, gutter_width: int) -> int:
    return max(1, screen_cols - gutter_width)


@dataclass(frozen=True, slots=True)
class Viewport:
    """First buffer row and column rendered in the editing area."""

    top_row: int = 0
    left_col: int = 0

    def reclamp(
        self,
        cursor: Cursor,
        screen_rows: int,
        screen_cols: int,
        line_number_gutter_width: int,
        *,
        reserved_rows: int = DEFAULT_LAYOUT.reserved_rows,
    ) -> "Viewport":
        """Return the smallest scroll that brings ``cursor`` into view.

        Returns ``self`` unchanged when the cursor is already visible.
        """

        row, col = cursor
        height = text_height(screen_rows, reserved_rows)
        width = text_width(screen_cols, line_number_gutter_width)

        top = self.top_row
        if row < top:
            top = row
        elif row >= top + height:
            top = row - height + 1

        left = self.left_col
        if col < left:
            left = col
        elif col >= left + width:
            left = col - width + 1

        if (top, left) == (self.top_row, self.left_col):
            return self
        return Viewport(top_row=top, left_col=left)

    def contains(
        self,
        cursor: Cursor,
        screen_rows: int,
        screen_cols: int,
        line_number_gutter_width: int,
        *,
        reserved_rows: int = DEFAULT_LAYOUT.reserved_rows,
    ) -> bool:
        row, col = cursor
        height = text_height(screen_rows, reserved_rows)
        width = text_width(screen_cols, line_number_gutter_width)
        return (
            self.top_row <= row < self.top_row + height
            and self.left_col <= col < self.left_col + width
        )


__all__ = ["ScreenSize", "Viewport", "text_height", "text_width"]
