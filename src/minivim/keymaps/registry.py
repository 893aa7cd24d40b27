"""Registry of editing actions and the key bindings that reach them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from minivim.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding reuses a key signature already taken in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and bindings, indexed by mode and signature.

    ``revision`` bumps on every binding change so resolvers know when their
    cached tries are stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_signature: Dict[tuple[str, str], str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            conflict = self.detect_conflict(binding)
            if not replace:
                if conflict is not None:
                    handle.add_metadata("conflict", conflict.id)
                    raise KeymapConflictError(binding, (conflict,))
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            else:
                if conflict is not None:
                    self._drop(conflict.id)
                if binding.id in self._bindings:
                    self._drop(binding.id)

            self._bindings[binding.id] = binding
            self._by_signature[(binding.mode, binding.key_signature)] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        if binding_id not in self._bindings:
            return None
        binding = self._drop(binding_id)
        self._revision += 1
        return binding

    def detect_conflict(self, binding: Binding) -> Optional[Binding]:
        existing = self._by_signature.get((binding.mode, binding.key_signature))
        if existing is None or existing == binding.id:
            return None
        return self._bindings[existing]

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({b.mode for b in self._bindings.values()})),
        )

    def _drop(self, binding_id: str) -> Binding:
        binding = self._bindings.pop(binding_id)
        self._by_signature.pop((binding.mode, binding.key_signature), None)
        return binding


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
