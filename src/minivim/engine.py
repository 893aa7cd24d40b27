"""The editor engine: one key in, one state transition out.

``EditorEngine`` owns the open files, the shared clipboard, and the mode
state machine. It never touches the terminal; a host feeds it
:class:`~minivim.modes.KeyInput` values and paints :meth:`EditorEngine.view`.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, MutableMapping, Optional, Protocol, Tuple

from minivim.buffer import (
    Buffer,
    BufferSet,
    RegisterBank,
    ScreenMirror,
    ScreenSize,
    mirror_buffer,
)
from minivim.config import DEFAULT_LAYOUT, LayoutConfig
from minivim.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from minivim.modes.mode_manager import ModeManager
from minivim.runtime import telemetry
from minivim.storage import DiskFileStore, FileStore, FileUnavailable


class RunState(str, Enum):
    """What the host should do after a key."""

    CONTINUE = "continue"
    SAVE_AND_EXIT = "save_and_exit"
    EXIT_WITHOUT_SAVE = "exit_without_save"


class KeySource(Protocol):
    def read_key(self) -> Optional[KeyInput]:
        """Block for the next key; ``None`` means input has ended."""
        ...


class EditorEngine:
    """Modal editor over one or more files."""

    def __init__(
        self,
        filenames: Iterable[str],
        *,
        store: Optional[FileStore] = None,
        screen: ScreenSize = ScreenSize(),
        layout: LayoutConfig = DEFAULT_LAYOUT,
    ) -> None:
        self.store: FileStore = store or DiskFileStore()
        self.screen = screen
        self.layout = layout
        self.state = RunState.CONTINUE
        self.status = ""
        self.listing: Optional[Tuple[Tuple[int, str], ...]] = None
        self.registers = RegisterBank()
        self.bus = ModeBus()
        self.buffers = BufferSet(filenames, loader=self._load_buffer)
        self.context = ModeContext(
            buffers=self.buffers, registers=self.registers, bus=self.bus
        )
        self.modes = ModeManager(self.context)
        self.modes.register_mode(NormalMode)
        self.modes.register_mode(InsertMode)
        self.modes.register_mode(CommandMode)
        self._subscribe()
        self.buffer.reclamp(self.screen, self.layout)

    @classmethod
    def open(cls, filenames: Iterable[str], **kwargs) -> "EditorEngine":
        return cls(filenames, **kwargs)

    # -- queries ---------------------------------------------------------------

    @property
    def buffer(self) -> Buffer:
        return self.buffers.current

    @property
    def filename(self) -> str:
        return self.buffers.current_filename

    @property
    def mode(self) -> str:
        return self.modes.active_name

    @property
    def command_text(self) -> str:
        state = self.context.extras.get("command_state")
        if isinstance(state, MutableMapping):
            return str(state.get("text", ""))
        return ""

    def view(self) -> ScreenMirror:
        return mirror_buffer(
            self.buffer,
            screen=self.screen,
            mode=self.mode,
            command_text=self.command_text,
            status=self.status,
            listing=self.listing,
            layout=self.layout,
        )

    # -- input -----------------------------------------------------------------

    def handle_key(self, key: KeyInput) -> RunState:
        """Apply one key and report whether the session should end.

        While the ``ls`` listing is showing, the key only dismisses it.
        """

        if self.state is not RunState.CONTINUE:
            return self.state
        self.status = ""
        if self.listing is not None:
            self.listing = None
            return self.state
        result = self.modes.handle_key(key)
        self._note_result(result)
        self.buffer.reclamp(self.screen, self.layout)
        return self.state

    def finish(self) -> RunState:
        """Carry out a pending save-and-exit.

        A failed write cancels the exit so the edits are not lost.
        """

        if self.state is RunState.SAVE_AND_EXIT and not self.save():
            self.state = RunState.CONTINUE
        return self.state

    def run(self, keys: KeySource) -> RunState:
        while True:
            key = keys.read_key()
            if key is None:
                return self.state
            if self.handle_key(key) is RunState.CONTINUE:
                continue
            if self.finish() is not RunState.CONTINUE:
                return self.state

    def resize(self, rows: int, cols: int) -> None:
        self.screen = ScreenSize(rows=rows, cols=cols)
        self.buffer.reclamp(self.screen, self.layout)

    # -- storage ---------------------------------------------------------------

    def save(self) -> bool:
        """Write the current buffer; failures become a status message."""

        filename = self.filename
        lines = self.buffer.document.snapshot()
        try:
            self.store.save(filename, lines)
        except FileUnavailable as exc:
            telemetry.record_event(
                "storage.error",
                level="warning",
                data={"path": filename, "op": "save", "reason": exc.reason},
                logger_name="minivim.storage",
            )
            self.status = f"cannot write {filename}: {exc.reason}"
            return False
        self.buffer.document.mark_clean()
        self.status = f'"{filename}" {len(lines)}L written'
        return True

    def _load_buffer(self, filename: str) -> Buffer:
        try:
            lines = self.store.load(filename)
        except FileUnavailable as exc:
            telemetry.record_event(
                "storage.error",
                level="warning",
                data={"path": filename, "op": "load", "reason": exc.reason},
                logger_name="minivim.storage",
            )
            self.status = f"cannot read {filename}: {exc.reason}"
            lines = [""]
        return Buffer.from_lines(lines, name=filename)

    # -- bus -------------------------------------------------------------------

    def _subscribe(self) -> None:
        self.bus.subscribe("command.write", self._on_write)
        self.bus.subscribe("command.quit", self._on_quit)
        self.bus.subscribe("command.list", self._on_list)
        self.bus.subscribe("buffer.dropped", self._on_dropped)
        self.bus.subscribe("buffer.switched", self._on_switched)

    def _on_write(self, payload: object) -> None:
        del payload
        self.save()

    def _on_quit(self, payload: object) -> None:
        save = isinstance(payload, dict) and bool(payload.get("save"))
        self.state = RunState.SAVE_AND_EXIT if save else RunState.EXIT_WITHOUT_SAVE

    def _on_list(self, payload: object) -> None:
        self.listing = tuple(payload) if isinstance(payload, tuple) else ()

    def _on_dropped(self, payload: object) -> None:
        filename = payload.get("filename") if isinstance(payload, dict) else None
        telemetry.record_event(
            "buffer.dropped",
            level="warning",
            data={"filename": filename},
            logger_name="minivim.buffer",
        )
        self.status = f"unsaved changes to {filename} discarded"

    def _on_switched(self, payload: object) -> None:
        if self.status or not isinstance(payload, dict):
            return
        self.status = f'"{payload.get("filename")}"'

    def _note_result(self, result: ModeResult) -> None:
        if result.status == "command_substitute" and result.message == "0":
            self.status = "pattern not found"


__all__ = ["EditorEngine", "KeySource", "RunState"]
