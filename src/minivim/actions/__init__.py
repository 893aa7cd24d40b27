"""Editing verbs bound to keys by the default keymaps."""

from .command import MalformedCommand, Substitution, parse_command, submit_command_line
from .core import (
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
    quit_editor,
)
from .edit import (
    delete_line,
    insert_backspace,
    insert_newline,
    paste_below,
    redo,
    undo,
    yank_line,
)
from .motion import (
    first_line,
    last_line,
    line_end,
    line_start,
    move_down,
    move_left,
    move_right,
    move_up,
)

__all__ = [
    "MalformedCommand",
    "Substitution",
    "parse_command",
    "submit_command_line",
    "enter_command_mode",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "quit_editor",
    "delete_line",
    "insert_backspace",
    "insert_newline",
    "paste_below",
    "redo",
    "undo",
    "yank_line",
    "first_line",
    "last_line",
    "line_end",
    "line_start",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
]
