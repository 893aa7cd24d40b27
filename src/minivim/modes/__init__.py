"""Modal state machine: Normal, Insert, and Command modes."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_helpers import KeymapMode
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "CommandMode",
]
