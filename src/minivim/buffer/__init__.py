"""Text storage, cursor/viewport state, undo log, and open-file history."""

from .buffer import Buffer, Transaction
from .bufferset import BufferListing, BufferSet
from .document import TextBuffer
from .registers import RegisterBank, RegisterValue
from .state import BufferState, Cursor
from .sync import ScreenMirror, mirror_buffer
from .undo import UndoKind, UndoLog, UndoRecord
from .validation import BufferValidationError, OutOfRange, clamp_cursor
from .viewport import ScreenSize, Viewport

__all__ = [
    "Buffer",
    "Transaction",
    "BufferSet",
    "BufferListing",
    "TextBuffer",
    "RegisterBank",
    "RegisterValue",
    "BufferState",
    "Cursor",
    "ScreenMirror",
    "mirror_buffer",
    "UndoKind",
    "UndoLog",
    "UndoRecord",
    "BufferValidationError",
    "OutOfRange",
    "clamp_cursor",
    "ScreenSize",
    "Viewport",
]
