"""Insert mode: unbound printable keys go straight into the buffer."""

from __future__ import annotations

from minivim.config import EditorMode

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode

_CHORD_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


def _insertable(key: KeyInput) -> bool:
    if not key.text or len(key.text) != 1:
        return False
    if _CHORD_MODIFIERS.intersection(m.lower() for m in key.modifiers):
        return False
    return key.text.isprintable() or key.text == "\t"


class InsertMode(KeymapMode):
    name = EditorMode.INSERT.value

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if not _insertable(key):
            return ModeResult(consumed=False, status="miss", message="unhandled")
        assert key.text is not None
        self.context.buffer.insert_text(key.text)
        return ModeResult(consumed=True, status="insert_text")
