"""Normal mode: motions, line edits, and the gateways to the other modes."""

from __future__ import annotations

from minivim.config import EditorMode

from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = EditorMode.NORMAL.value
