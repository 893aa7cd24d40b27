"""Paired undo/redo stacks for whole-line deletes and pastes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from minivim.runtime import telemetry

from .document import TextBuffer


class UndoKind(str, Enum):
    DELETE = "delete"  # a line with this text existed at this row
    PASTE = "paste"  # a line with this text was inserted at this row


@dataclass(frozen=True, slots=True)
class UndoRecord:
    kind: UndoKind
    row: int
    text: str
    # The delete emptied the buffer and left a placeholder line behind.
    sole_line: bool = False


class UndoLog:
    """Two LIFO stacks of :class:`UndoRecord`.

    Recording a new edit clears the redo stack. Character-level edits are
    never recorded.
    """

    def __init__(self) -> None:
        self._undo: List[UndoRecord] = []
        self._redo: List[UndoRecord] = []

    def record(
        self, kind: UndoKind, row: int, text: str, *, sole_line: bool = False
    ) -> UndoRecord:
        entry = UndoRecord(
            kind=UndoKind(kind), row=row, text=text, sole_line=sole_line
        )
        self._undo.append(entry)
        self._redo.clear()
        return entry

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def undo(self, document: TextBuffer) -> Optional[UndoRecord]:
        if not self._undo:
            return None
        entry = self._undo.pop()
        if entry.kind is UndoKind.DELETE:
            applied = self._restore(document, entry)
        else:
            applied = self._remove(document, entry)
        if not applied:
            self._drop_stale(entry, "undo")
            return None
        self._redo.append(entry)
        return entry

    def redo(self, document: TextBuffer) -> Optional[UndoRecord]:
        if not self._redo:
            return None
        entry = self._redo.pop()
        if entry.kind is UndoKind.DELETE:
            applied = self._remove(document, entry)
        else:
            applied = self._restore(document, entry)
        if not applied:
            self._drop_stale(entry, "redo")
            return None
        self._undo.append(entry)
        return entry

    @staticmethod
    def _restore(document: TextBuffer, entry: UndoRecord) -> bool:
        if entry.sole_line and document.snapshot() == ("",):
            document.replace_line(0, entry.text)
            return True
        if not 0 <= entry.row <= document.line_count:
            return False
        document.insert_line(entry.row, entry.text)
        return True

    @staticmethod
    def _remove(document: TextBuffer, entry: UndoRecord) -> bool:
        if not 0 <= entry.row < document.line_count:
            return False
        document.delete_line(entry.row)
        return True

    def _drop_stale(self, entry: UndoRecord, direction: str) -> None:
        telemetry.record_event(
            "undo.stale",
            level="warning",
            data={"direction": direction, "kind": entry.kind.value, "row": entry.row},
            logger_name="minivim.buffer.undo",
        )


__all__ = ["UndoKind", "UndoRecord", "UndoLog"]
