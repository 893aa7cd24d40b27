"""Reading and writing files as ordered lists of lines."""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence

from minivim.runtime import telemetry


class FileUnavailable(OSError):
    """A path could not be read or written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileStore(Protocol):
    """How the engine reaches persistent storage."""

    def load(self, path: str) -> List[str]:
        """Return the lines of ``path``; a missing file reads as ``[""]``."""
        ...

    def save(self, path: str, lines: Sequence[str]) -> None:
        """Overwrite ``path`` with ``lines``, each newline-terminated."""
        ...


def split_lines(text: str) -> List[str]:
    """Split on line feeds only; a trailing one does not start another line."""

    pieces = text.split("\n")
    if len(pieces) > 1 and pieces[-1] == "":
        pieces.pop()
    return pieces


def join_lines(lines: Sequence[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


class DiskFileStore:
    """UTF-8 text files on the local filesystem."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def load(self, path: str) -> List[str]:
        with telemetry.span(
            "storage::load", component="storage", metadata={"path": path}
        ) as handle:
            try:
                with open(path, encoding=self.encoding, newline="") as stream:
                    text = stream.read()
            except FileNotFoundError:
                handle.add_metadata("missing", True)
                return [""]
            except (OSError, UnicodeDecodeError) as exc:
                raise FileUnavailable(path, str(exc)) from exc
            lines = split_lines(text)
            handle.add_metadata("lines", len(lines))
            return lines

    def save(self, path: str, lines: Sequence[str]) -> None:
        with telemetry.span(
            "storage::save",
            component="storage",
            metadata={"path": path, "lines": len(lines)},
        ):
            try:
                with open(path, "w", encoding=self.encoding, newline="") as stream:
                    stream.write(join_lines(lines))
            except (OSError, UnicodeEncodeError) as exc:
                raise FileUnavailable(path, str(exc)) from exc


class MemoryFileStore:
    """Dict-backed store for embedding and tests."""

    def __init__(
        self,
        files: Optional[Dict[str, Sequence[str]]] = None,
        *,
        read_only: Sequence[str] = (),
    ) -> None:
        self.files: Dict[str, List[str]] = {
            path: list(lines) for path, lines in (files or {}).items()
        }
        self.read_only = set(read_only)

    def load(self, path: str) -> List[str]:
        return list(self.files.get(path) or [""])

    def save(self, path: str, lines: Sequence[str]) -> None:
        if path in self.read_only:
            raise FileUnavailable(path, "read-only")
        self.files[path] = list(lines)


__all__ = [
    "FileUnavailable",
    "FileStore",
    "DiskFileStore",
    "MemoryFileStore",
    "split_lines",
    "join_lines",
]
