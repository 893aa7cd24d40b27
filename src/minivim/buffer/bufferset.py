"""Ordered history of opened files with a current-index pointer."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Sequence, Tuple

from minivim.runtime import telemetry

from .buffer import Buffer

BufferLoader = Callable[[str], Buffer]


class BufferListing:
    """Restartable ``(1-based index, filename)`` view over the history."""

    def __init__(self, history: Sequence[str]) -> None:
        self._history = history

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        for index, filename in enumerate(self._history):
            yield index + 1, filename

    def __len__(self) -> int:
        return len(self._history)


class BufferSet:
    """Files the session has visited, in order, and the one being edited.

    Every switch goes through ``loader``, so the active :class:`Buffer` is
    rebuilt from storage with a fresh cursor, viewport, and undo log.
    """

    def __init__(self, filenames: Iterable[str], *, loader: BufferLoader) -> None:
        self._history: List[str] = list(filenames)
        if not self._history:
            raise ValueError("BufferSet needs at least one filename")
        self._loader = loader
        self._index = 0
        self._current = self._load()

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(self._history)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current(self) -> Buffer:
        return self._current

    @property
    def current_filename(self) -> str:
        return self._history[self._index]

    def open(self, filename: str) -> Buffer:
        self._history.append(filename)
        return self._switch(len(self._history) - 1)

    def next(self) -> bool:
        if self._index >= len(self._history) - 1:
            return False
        self._switch(self._index + 1)
        return True

    def previous(self) -> bool:
        if self._index == 0:
            return False
        self._switch(self._index - 1)
        return True

    def switch_to(self, index: int) -> bool:
        """Jump to the 0-based ``index``; out-of-range requests are ignored."""

        if not 0 <= index < len(self._history):
            return False
        self._switch(index)
        return True

    def entries(self) -> BufferListing:
        """Every visited file with its 1-based index, as shown by ``:ls``."""

        return BufferListing(self._history)

    list = entries

    def _switch(self, index: int) -> Buffer:
        self._index = index
        self._current = self._load()
        telemetry.record_event(
            "buffer.switch",
            data={"index": index, "filename": self.current_filename},
            logger_name="minivim.buffer",
        )
        return self._current

    def _load(self) -> Buffer:
        buffer = self._loader(self.current_filename)
        buffer.reset_view()
        return buffer


__all__ = ["BufferSet", "BufferListing", "BufferLoader"]
