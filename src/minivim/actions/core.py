"""Mode transitions and quitting."""

from __future__ import annotations

from minivim.modes.base_mode import ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_to_normal")


def enter_command_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="command", message="enter_command")


def quit_editor(context: ModeContext, match) -> ModeResult:
    del match
    context.bus.emit("command.quit", {"save": False})
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "enter_insert_mode",
    "exit_to_normal_mode",
    "enter_command_mode",
    "quit_editor",
]
