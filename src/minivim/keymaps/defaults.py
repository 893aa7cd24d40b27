"""Built-in keymaps for the Normal, Insert, and Command modes."""

from __future__ import annotations

from typing import Iterable, Sequence

from minivim.actions import command as command_actions
from minivim.actions import core as core_actions
from minivim.actions import edit as edit_actions
from minivim.actions import motion as motion_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef(
        "core.exit_to_normal", core_actions.exit_to_normal_mode, "Return to normal mode"
    ),
    ActionRef(
        "core.enter_command", core_actions.enter_command_mode, "Enter command-line mode"
    ),
    ActionRef("core.quit", core_actions.quit_editor, "Quit without saving"),
    ActionRef("motion.left", motion_actions.move_left, "Cursor left"),
    ActionRef("motion.right", motion_actions.move_right, "Cursor right"),
    ActionRef("motion.down", motion_actions.move_down, "Cursor down"),
    ActionRef("motion.up", motion_actions.move_up, "Cursor up"),
    ActionRef("motion.line_start", motion_actions.line_start, "Start of line"),
    ActionRef("motion.line_end", motion_actions.line_end, "End of line"),
    ActionRef("motion.first_line", motion_actions.first_line, "First line"),
    ActionRef("motion.last_line", motion_actions.last_line, "Last line"),
    ActionRef("edit.delete_line", edit_actions.delete_line, "Delete current line"),
    ActionRef("edit.yank_line", edit_actions.yank_line, "Copy current line"),
    ActionRef("edit.paste_below", edit_actions.paste_below, "Paste line below"),
    ActionRef("edit.undo", edit_actions.undo, "Undo line edit"),
    ActionRef("edit.redo", edit_actions.redo, "Redo line edit"),
    ActionRef("edit.newline", edit_actions.insert_newline, "Split line at cursor"),
    ActionRef("edit.backspace", edit_actions.insert_backspace, "Delete left"),
    ActionRef(
        "command.submit_line",
        command_actions.submit_command_line,
        "Evaluate the active command line",
    ),
)


def _bind(mode: str, action_id: str, *keys: str, name: str | None = None) -> Binding:
    suffix = name or "".join(keys).lower().replace("+", "_")
    return Binding(
        id=f"{mode}.{suffix}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
    )


# Arrow keys and their control-key stand-ins, usable in Normal and Insert.
_CURSOR_KEYS: tuple[tuple[str, str, str], ...] = (
    ("motion.left", "LEFT", "ctrl+d"),
    ("motion.right", "RIGHT", "ctrl+e"),
    ("motion.down", "DOWN", "ctrl+b"),
    ("motion.up", "UP", "ctrl+c"),
)


def _cursor_bindings(mode: str) -> tuple[Binding, ...]:
    bindings = []
    for action_id, arrow, control in _CURSOR_KEYS:
        bindings.append(_bind(mode, action_id, arrow))
        bindings.append(_bind(mode, action_id, control))
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "motion.left", "h"),
    _bind("normal", "motion.right", "l"),
    _bind("normal", "motion.down", "j"),
    _bind("normal", "motion.up", "k"),
    *_cursor_bindings("normal"),
    _bind("normal", "motion.line_start", "0"),
    _bind("normal", "motion.line_end", "$", name="dollar"),
    _bind("normal", "motion.first_line", "g", "g"),
    _bind("normal", "motion.last_line", "G", name="shift_g"),
    _bind("normal", "edit.delete_line", "d", "d"),
    _bind("normal", "edit.yank_line", "y", "y"),
    _bind("normal", "edit.paste_below", "p"),
    _bind("normal", "edit.undo", "u"),
    _bind("normal", "edit.redo", "ctrl+r"),
    _bind("normal", "core.enter_insert", "i"),
    _bind("normal", "core.enter_command", ":", name="colon"),
    _bind("normal", "core.quit", "q"),
    _bind("insert", "core.exit_to_normal", "ESC"),
    *_cursor_bindings("insert"),
    _bind("insert", "edit.newline", "ENTER"),
    _bind("insert", "edit.newline", "RETURN"),
    _bind("insert", "edit.backspace", "BACKSPACE"),
    _bind("command", "core.exit_to_normal", "ESC"),
    _bind("command", "command.submit_line", "ENTER"),
    _bind("command", "command.submit_line", "RETURN"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register every built-in action and the selected built-in bindings.

    ``extra_bindings`` are registered last and always replace a built-in
    binding with the same key signature.
    """

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    include = set(include_bindings) if include_bindings is not None else None
    exclude = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
