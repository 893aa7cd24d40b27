"""Minimal Textual adapter that wires engine events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from minivim.buffer import ScreenMirror
from minivim.engine import EditorEngine, RunState
from minivim.modes import KeyInput


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[ScreenMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


_RELAYED_EVENTS = (
    "command.start",
    "command.end",
    "command.submit",
    "command.write",
    "command.quit",
    "command.list",
    "buffer.switched",
    "buffer.dropped",
)


class TextualEditorAdapter:
    """Bridges an EditorEngine and its bus events to a Textual surface."""

    def __init__(self, engine: EditorEngine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> RunState:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        state = self.engine.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self.refresh()
        self._log_state("state <-", run_state=state.value)
        return state

    def resize(self, rows: int, cols: int) -> None:
        self.engine.resize(rows, cols)
        self.refresh()

    def finish(self) -> RunState:
        """Complete a save-and-exit; the status shows why if it was refused."""

        state = self.engine.finish()
        self.refresh()
        return state

    def refresh(self) -> None:
        mirror = self.engine.view()
        self.hooks.update_view(mirror)
        self.hooks.update_status(mirror.status)
        self.hooks.show_command(mirror.command_text)

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in _RELAYED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.engine.buffer
        return {
            "mode": self.engine.mode,
            "cursor": buffer.cursor,
            "command": self.engine.command_text,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
