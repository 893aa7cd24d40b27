"""Line-level edits, undo/redo, and the Insert-mode editing keys."""

from __future__ import annotations

from minivim.modes.base_mode import ModeContext, ModeResult


def delete_line(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    text = buffer.delete_line(buffer.cursor[0])
    return ModeResult(consumed=True, status="delete_line", message=text)


def yank_line(context: ModeContext, match) -> ModeResult:
    del match
    text = context.buffer.current_line
    context.registers.yank_line(text)
    return ModeResult(consumed=True, status="yank_line", message=text)


def paste_below(context: ModeContext, match) -> ModeResult:
    del match
    if not context.registers.has_line:
        return ModeResult(consumed=True, status="paste_empty")
    buffer = context.buffer
    buffer.paste_below(buffer.cursor[0], context.registers.get().text)
    return ModeResult(consumed=True, status="paste_line")


def undo(context: ModeContext, match) -> ModeResult:
    del match
    entry = context.buffer.undo()
    if entry is None:
        return ModeResult(consumed=True, status="undo_empty")
    return ModeResult(consumed=True, status="undo", message=entry.kind.value)


def redo(context: ModeContext, match) -> ModeResult:
    del match
    entry = context.buffer.redo()
    if entry is None:
        return ModeResult(consumed=True, status="redo_empty")
    return ModeResult(consumed=True, status="redo", message=entry.kind.value)


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.split_line()
    return ModeResult(consumed=True, status="split_line")


def insert_backspace(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.backspace()
    return ModeResult(consumed=True, status="backspace")


__all__ = [
    "delete_line",
    "yank_line",
    "paste_below",
    "undo",
    "redo",
    "insert_newline",
    "insert_backspace",
]
