"""Command-line mode with inline editing of the ``:`` buffer."""

from __future__ import annotations

from typing import List, MutableMapping, cast

from minivim.config import EditorMode

from .base_mode import KeyInput, ModeContext, ModeResult
from .keymap_helpers import KeymapMode


class CommandMode(KeymapMode):
    """Collects the command text; ENTER and ESC are bindings.

    The typed text is mirrored into ``extras["command_state"]["text"]`` so the
    submit action and the renderer can read it.
    """

    name = EditorMode.COMMAND.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._typed: List[str] = []

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._typed.clear()
        self.context.bus.emit("command.start", None)
        self._sync_command_state()

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.bus.emit("command.end", self.current_command)
        self._typed.clear()
        self._sync_command_state()

    @property
    def current_command(self) -> str:
        return "".join(self._typed)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if key.key == "BACKSPACE":
            if self._typed:
                self._typed.pop()
                self._sync_command_state()
            return ModeResult(consumed=True, status="editing")

        if key.text and not key.modifiers:
            self._typed.append(key.text)
            self._sync_command_state()
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _sync_command_state(self) -> None:
        state = cast(
            MutableMapping[str, object],
            self.context.extras.setdefault("command_state", {}),
        )
        state["text"] = self.current_command
