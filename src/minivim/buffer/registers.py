"""Single-line clipboard shared by every open buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str
    type: str = "line"


class RegisterBank:
    """Holds at most one yanked line.

    A yank overwrites it; a paste reads it without clearing. The bank is
    owned by the engine, so the line survives a buffer switch.
    """

    def __init__(self) -> None:
        self._unnamed: Optional[RegisterValue] = None

    def get(self) -> RegisterValue:
        return self._unnamed or RegisterValue(text="")

    def yank_line(self, text: str) -> None:
        self._unnamed = RegisterValue(text=text)

    @property
    def has_line(self) -> bool:
        return bool(self.get().text)

    def clear(self) -> None:
        self._unnamed = None
