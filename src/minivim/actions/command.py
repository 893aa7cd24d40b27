"""Actions that evaluate the ``:`` command line.

Grammar (matched exactly, no trimming of the command word)::

    q | w | wq | n | N | ls
    s/<old>/<new>/ | s/<old>/<new>/g | s/<old>/<new>
    <decimal line number>
    e <path> | b <buffer number>

Anything else is a :class:`MalformedCommand`, which the dispatcher logs and
otherwise ignores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, MutableMapping, cast

from minivim.modes.base_mode import ModeContext, ModeResult
from minivim.runtime import telemetry

CommandHandler = Callable[[ModeContext, str], ModeResult]


class MalformedCommand(ValueError):
    """Command text that matches nothing in the grammar."""

    def __init__(self, text: str, reason: str = "unrecognized command") -> None:
        super().__init__(f"{reason}: {text!r}")
        self.text = text
        self.reason = reason


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    name: str
    argument: str = ""


@dataclass(frozen=True, slots=True)
class Substitution:
    pattern: str
    replacement: str
    replace_all: bool

    @classmethod
    def parse(cls, text: str) -> "Substitution":
        """Split ``s/old/new/[g]``; the closing slash is optional."""

        first = text.find("/")
        second = text.find("/", first + 1) if first != -1 else -1
        if second == -1:
            raise MalformedCommand(text, "substitution needs two delimiters")
        third = text.find("/", second + 1)
        pattern = text[first + 1 : second]
        if not pattern:
            raise MalformedCommand(text, "empty substitution pattern")
        if third == -1:
            return cls(pattern, text[second + 1 :], replace_all=False)
        return cls(
            pattern,
            text[second + 1 : third],
            replace_all=text[third + 1 :] == "g",
        )


def _is_decimal(text: str) -> bool:
    return text.isascii() and text.isdigit()


def parse_command(text: str) -> ParsedCommand:
    if text.startswith("s/"):
        return ParsedCommand("s", text)
    if _is_decimal(text):
        return ParsedCommand("goto", text)
    name, separator, argument = text.partition(" ")
    if name not in _TYPED_COMMANDS:
        raise MalformedCommand(text)
    if bool(separator) != (name in _TAKES_ARGUMENT):
        raise MalformedCommand(text, "wrong number of arguments")
    return ParsedCommand(name, argument.strip())


def _command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    return state


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = _command_state(context)
    text = str(state.get("text", ""))
    state["text"] = ""
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to="normal", status="command_empty")

    try:
        command = parse_command(text)
        result = _COMMAND_HANDLERS[command.name](context, command.argument)
    except MalformedCommand as exc:
        telemetry.record_event(
            "command.malformed",
            level="debug",
            data={"text": text, "reason": exc.reason},
            logger_name="minivim.commands",
        )
        return ModeResult(
            consumed=True, switch_to="normal", status="command_error", message=text
        )

    telemetry.record_event(
        "command.dispatch",
        level="debug",
        data={"command": command.name, "status": result.status},
        logger_name="minivim.commands",
    )
    return result


def _done(status: str, message: str | None = None) -> ModeResult:
    return ModeResult(consumed=True, switch_to="normal", status=status, message=message)


def _handle_quit(context: ModeContext, argument: str) -> ModeResult:
    del argument
    context.bus.emit("command.quit", {"save": False})
    return _done("command_quit")


def _handle_write(context: ModeContext, argument: str) -> ModeResult:
    del argument
    context.bus.emit("command.write", {"filename": context.buffers.current_filename})
    return _done("command_write")


def _handle_wq(context: ModeContext, argument: str) -> ModeResult:
    del argument
    context.bus.emit("command.quit", {"save": True})
    return _done("command_wq")


def _handle_substitute(context: ModeContext, argument: str) -> ModeResult:
    sub = Substitution.parse(argument)
    buffer = context.buffer
    hits = buffer.substitute(
        buffer.cursor[0], sub.pattern, sub.replacement, replace_all=sub.replace_all
    )
    return _done("command_substitute", str(hits))


def _handle_goto(context: ModeContext, argument: str) -> ModeResult:
    buffer = context.buffer
    target = int(argument)
    if not 1 <= target <= buffer.document.line_count:
        return _done("command_ignored", argument)
    buffer.move_cursor(target - 1, buffer.cursor[1])
    return _done("command_goto", argument)


def _leave_current(context: ModeContext) -> None:
    buffer = context.buffer
    if buffer.dirty:
        context.bus.emit(
            "buffer.dropped", {"filename": context.buffers.current_filename}
        )


def _switched(context: ModeContext, status: str) -> ModeResult:
    filename = context.buffers.current_filename
    context.bus.emit("buffer.switched", {"filename": filename})
    return _done(status, filename)


def _handle_edit(context: ModeContext, argument: str) -> ModeResult:
    if not argument:
        raise MalformedCommand("e", "missing path")
    _leave_current(context)
    context.buffers.open(argument)
    return _switched(context, "command_edit")


def _handle_next(context: ModeContext, argument: str) -> ModeResult:
    del argument
    buffers = context.buffers
    if buffers.current_index >= len(buffers.history) - 1:
        return _done("command_ignored")
    _leave_current(context)
    buffers.next()
    return _switched(context, "command_next")


def _handle_previous(context: ModeContext, argument: str) -> ModeResult:
    del argument
    buffers = context.buffers
    if buffers.current_index == 0:
        return _done("command_ignored")
    _leave_current(context)
    buffers.previous()
    return _switched(context, "command_previous")


def _handle_buffer(context: ModeContext, argument: str) -> ModeResult:
    if not _is_decimal(argument):
        raise MalformedCommand(f"b {argument}", "buffer number expected")
    index = int(argument) - 1
    if not 0 <= index < len(context.buffers.history):
        return _done("command_ignored", argument)
    _leave_current(context)
    context.buffers.switch_to(index)
    return _switched(context, "command_buffer")


def _handle_list(context: ModeContext, argument: str) -> ModeResult:
    del argument
    context.bus.emit("command.list", tuple(context.buffers.entries()))
    return _done("command_list")


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "w": _handle_write,
    "wq": _handle_wq,
    "s": _handle_substitute,
    "goto": _handle_goto,
    "e": _handle_edit,
    "n": _handle_next,
    "N": _handle_previous,
    "b": _handle_buffer,
    "ls": _handle_list,
}

# "s" and "goto" are recognised by shape, never typed as a command word.
_TYPED_COMMANDS = frozenset(_COMMAND_HANDLERS) - {"s", "goto"}
_TAKES_ARGUMENT = frozenset({"e", "b"})


__all__ = [
    "MalformedCommand",
    "ParsedCommand",
    "Substitution",
    "parse_command",
    "submit_command_line",
]
