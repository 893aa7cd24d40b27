"""Editor modes, status-line labels and screen layout constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EditorMode(str, Enum):
    """Available editor modes."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


@dataclass(frozen=True)
class ModeConfig:
    """Presentation settings for a mode."""

    label: str
    color: str


MODE_CONFIGS = {
    EditorMode.NORMAL: ModeConfig("NORMAL", "#98C379"),
    EditorMode.INSERT: ModeConfig("INSERT", "#E8B86D"),
    EditorMode.COMMAND: ModeConfig("COMMAND", "#E06C75"),
}


@dataclass(frozen=True)
class LayoutConfig:
    """Fixed screen geometry around the text area.

    ``reserved_rows`` covers the status line and the command line below the
    text. ``line_number_width`` digits plus the ``" | "`` separator make up
    the gutter.
    """

    reserved_rows: int = 2
    line_number_width: int = 5
    separator: str = " | "

    @property
    def gutter_width(self) -> int:
        return self.line_number_width + len(self.separator)


DEFAULT_LAYOUT = LayoutConfig()


def mode_label(mode: str) -> str:
    try:
        return MODE_CONFIGS[EditorMode(mode)].label
    except ValueError:
        return mode.upper()


__all__ = [
    "EditorMode",
    "ModeConfig",
    "MODE_CONFIGS",
    "LayoutConfig",
    "DEFAULT_LAYOUT",
    "mode_label",
]
