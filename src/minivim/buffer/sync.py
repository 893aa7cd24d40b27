"""Snapshot handed to whatever paints the screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from minivim.config import DEFAULT_LAYOUT, LayoutConfig, mode_label

from .buffer import Buffer
from .viewport import ScreenSize, text_height, text_width


@dataclass(slots=True)
class ScreenMirror:
    """Everything a renderer needs; it never reads engine internals."""

    filename: str
    mode: str
    mode_label: str
    lines: Tuple[str, ...]
    first_row: int
    gutter_width: int
    cursor_screen: Tuple[int, int]
    command_text: str = ""
    status: str = ""
    dirty: bool = False
    listing: Optional[Tuple[Tuple[int, str], ...]] = None

    def numbered_lines(self) -> Sequence[Tuple[int, str]]:
        """Visible lines paired with their 1-based line numbers."""

        return [(self.first_row + i + 1, text) for i, text in enumerate(self.lines)]


def mirror_buffer(
    buffer: Buffer,
    *,
    screen: ScreenSize,
    mode: str,
    command_text: str = "",
    status: str = "",
    listing: Optional[Sequence[Tuple[int, str]]] = None,
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> ScreenMirror:
    viewport = buffer.viewport
    height = text_height(screen.rows, layout.reserved_rows)
    width = text_width(screen.cols, layout.gutter_width)
    visible = buffer.document.slice(viewport.top_row, viewport.top_row + height)
    left = viewport.left_col
    row, col = buffer.cursor
    return ScreenMirror(
        filename=buffer.name,
        mode=mode,
        mode_label=mode_label(mode),
        lines=tuple(line[left : left + width] for line in visible),
        first_row=viewport.top_row,
        gutter_width=layout.gutter_width,
        cursor_screen=(
            row - viewport.top_row,
            min(col - left + layout.gutter_width, max(0, screen.cols - 1)),
        ),
        command_text=command_text,
        status=status,
        dirty=buffer.dirty,
        listing=tuple(listing) if listing is not None else None,
    )


__all__ = ["ScreenMirror", "mirror_buffer"]
