"""Shared plumbing for modes that dispatch through the keymap resolver."""

from __future__ import annotations

from typing import List

from minivim.keymaps import KeymapResolver, ResolutionMatch, stroke_token
from minivim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return stroke_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


class KeymapMode(Mode):
    """Resolves each key against the mode's bindings before falling back.

    A key that extends a bound prefix (``g`` of ``gg``) is held until the
    next key arrives; there is no timeout. If the next key completes no
    binding, both keys are dropped.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    @property
    def pending_keys(self) -> str:
        return "".join(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message="awaiting_sequence"
            )

        abandoned = len(self._pending) > 1
        self._pending.clear()
        if abandoned:
            return ModeResult(consumed=True, status="sequence_abandoned")
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "KeymapMode",
    "key_to_token",
    "require_keymap_resolver",
]
