"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from minivim.buffer import Buffer, BufferSet, RegisterBank


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    Named keys are upper case (``ESC``, ``ENTER``, ``BACKSPACE``, ``LEFT``);
    printable keys carry their character in ``text``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, character: str) -> "KeyInput":
        return cls(key=character, text=character)

    @classmethod
    def ctrl(cls, key: str) -> "KeyInput":
        return cls(key=key, modifiers=("ctrl",))


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Services every mode and action can reach.

    ``buffer`` always follows the BufferSet's current entry, so actions never
    hold on to a buffer across a file switch.
    """

    buffers: BufferSet
    registers: RegisterBank
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def buffer(self) -> Buffer:
        return self.buffers.current


class ModeBus:
    """Minimal event bus letting modes and actions signal the engine."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
