"""Buffer façade combining document, cursor, viewport, and undo log."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional

from minivim.config import DEFAULT_LAYOUT, LayoutConfig
from minivim.runtime import telemetry

from .document import TextBuffer
from .state import BufferState, Cursor
from .undo import UndoKind, UndoLog, UndoRecord
from .validation import clamp_cursor
from .viewport import ScreenSize, Viewport


class Buffer:
    """One open file: its lines, cursor, scroll position, and undo history."""

    def __init__(
        self,
        *,
        name: str = "[No Name]",
        document: Optional[TextBuffer] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoLog] = None,
    ) -> None:
        self.name = name
        self.document = document or TextBuffer()
        self.state = state or BufferState()
        self.undo_log = undo or UndoLog()
        self.viewport = Viewport()

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, name: str = "[No Name]"
    ) -> "Buffer":
        return cls(name=name, document=TextBuffer.from_lines(lines))

    @classmethod
    def from_text(cls, text: str, *, name: str = "[No Name]") -> "Buffer":
        return cls(name=name, document=TextBuffer.from_text(text))

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def current_line(self) -> str:
        return self.document.line(self.cursor[0])

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    def move_cursor(self, row: int, col: int) -> Cursor:
        """Place the cursor at ``(row, col)`` clamped into the document."""

        self.state.set_cursor(*clamp_cursor(self.document, row, col))
        return self.state.cursor

    def clamp_cursor(self) -> Cursor:
        return self.move_cursor(*self.state.cursor)

    def reset_view(self) -> None:
        self.state.reset()
        self.viewport = Viewport()

    def reclamp(
        self, screen: ScreenSize, layout: LayoutConfig = DEFAULT_LAYOUT
    ) -> Viewport:
        self.viewport = self.viewport.reclamp(
            self.cursor,
            screen.rows,
            screen.cols,
            layout.gutter_width,
            reserved_rows=layout.reserved_rows,
        )
        return self.viewport

    # -- undoable line operations -------------------------------------------

    def delete_line(self, row: int) -> str:
        with Transaction(self, "delete_line") as tx:
            sole = self.document.line_count == 1
            text = self.document.delete_line(row)
            tx.record(UndoKind.DELETE, row, text, sole_line=sole)
        return text

    def paste_below(self, row: int, text: str) -> None:
        with Transaction(self, "paste_line") as tx:
            self.document.insert_line(row + 1, text)
            tx.record(UndoKind.PASTE, row + 1, text)
            self.move_cursor(row + 1, self.cursor[1])

    def undo(self) -> Optional[UndoRecord]:
        with Transaction(self, "undo"):
            return self.undo_log.undo(self.document)

    def redo(self) -> Optional[UndoRecord]:
        with Transaction(self, "redo"):
            return self.undo_log.redo(self.document)

    # -- character edits (not recorded) --------------------------------------

    def insert_text(self, text: str) -> Cursor:
        with Transaction(self, "insert_char"):
            cursor = self.cursor
            for char in text:
                cursor = self.document.insert_char(cursor, char)
            self.state.set_cursor(*cursor)
        return self.cursor

    def split_line(self) -> Cursor:
        with Transaction(self, "split_line"):
            self.state.set_cursor(*self.document.split_line(self.cursor))
        return self.cursor

    def backspace(self) -> Cursor:
        """Delete left of the cursor, joining onto the previous line at col 0."""

        row, col = self.cursor
        if col == 0 and row == 0:
            return self.cursor
        with Transaction(self, "backspace"):
            if col > 0:
                cursor = self.document.delete_char_before(self.cursor)
            else:
                cursor = self.document.join_with_next(row - 1)
            self.state.set_cursor(*cursor)
        return self.cursor

    def substitute(self, row: int, old: str, new: str, *, replace_all: bool) -> int:
        """Literal replace on line ``row``; returns the number of replacements."""

        line = self.document.line(row)
        hits = line.count(old) if replace_all else min(1, line.count(old))
        if not hits:
            return 0
        with Transaction(self, "substitute"):
            count = -1 if replace_all else 1
            self.document.replace_line(row, line.replace(old, new, count))
        return hits


class Transaction(AbstractContextManager["Transaction"]):
    """Profiles one buffer edit and re-clamps the cursor when it ends."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def record(
        self, kind: UndoKind, row: int, text: str, *, sole_line: bool = False
    ) -> UndoRecord:
        return self.buffer.undo_log.record(kind, row, text, sole_line=sole_line)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.clamp_cursor()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
