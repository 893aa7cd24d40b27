"""Declarative keymap registry and trie resolver.

The built-in bindings live in :mod:`minivim.keymaps.defaults`, which depends
on the action modules and is imported separately.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke, stroke_token
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "stroke_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
