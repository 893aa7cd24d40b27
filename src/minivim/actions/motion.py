"""Cursor motions shared by Normal and Insert modes.

Every motion goes through ``Buffer.move_cursor``, which clamps the target
into the document, so no motion can leave the cursor out of bounds.
"""

from __future__ import annotations

from minivim.modes.base_mode import ModeContext, ModeResult


def _move(context: ModeContext, row: int, col: int) -> ModeResult:
    context.buffer.move_cursor(row, col)
    return ModeResult(consumed=True, status="motion")


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    row, col = context.buffer.cursor
    return _move(context, row, col - 1)


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    row, col = context.buffer.cursor
    return _move(context, row, col + 1)


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    row, col = context.buffer.cursor
    return _move(context, row + 1, col)


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    row, col = context.buffer.cursor
    return _move(context, row - 1, col)


def line_start(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, context.buffer.cursor[0], 0)


def line_end(context: ModeContext, match) -> ModeResult:
    """``$``: the append position just past the last character."""

    del match
    buffer = context.buffer
    return _move(context, buffer.cursor[0], len(buffer.current_line))


def first_line(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, 0, 0)


def last_line(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, context.buffer.document.line_count - 1, 0)


__all__ = [
    "move_left",
    "move_right",
    "move_down",
    "move_up",
    "line_start",
    "line_end",
    "first_line",
    "last_line",
]
