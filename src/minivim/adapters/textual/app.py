"""Executable Textual app that hosts the editor engine."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use minivim.adapters.textual.app"
    ) from exc

from minivim.buffer import ScreenMirror
from minivim.config import MODE_CONFIGS, EditorMode
from minivim.engine import EditorEngine, RunState
from minivim.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "RETURN",
    "backspace": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}

KeyTriple = Tuple[str, Optional[str], Tuple[str, ...]]


def normalize_key(key: str, character: Optional[str]) -> Optional[KeyTriple]:
    """Map a Textual key name onto the engine's ``(key, text, modifiers)``."""

    if key in _NAMED_KEYS:
        return (_NAMED_KEYS[key], None, ())
    if key == "tab":
        return ("TAB", "\t", ())
    if key.startswith("ctrl+") and len(key) > len("ctrl+"):
        return (key[len("ctrl+") :], None, ("ctrl",))
    if character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return None


def render_text_area(mirror: ScreenMirror) -> Text:
    """Numbered visible lines with the cursor cell shown in reverse video."""

    if mirror.listing is not None:
        listing = Text()
        for index, name in mirror.listing:
            listing.append(f"{index:3d} {name}\n")
        listing.append("Press any key to continue")
        return listing

    text = Text(no_wrap=True)
    cursor_row, cursor_col = mirror.cursor_screen
    for offset, (number, line) in enumerate(mirror.numbered_lines()):
        if offset:
            text.append("\n")
        text.append(f"{number:5d} | ", style="dim")
        if offset != cursor_row:
            text.append(line)
            continue
        col = cursor_col - mirror.gutter_width
        text.append(line[:col])
        text.append(line[col : col + 1] or " ", style="reverse")
        text.append(line[col + 1 :])
    return text


def render_status_line(mirror: ScreenMirror) -> Text:
    color = MODE_CONFIGS[EditorMode(mirror.mode)].color
    status = Text()
    status.append(f" {mirror.mode_label} ", style=f"bold black on {color}")
    status.append(f" | {mirror.filename}")
    if mirror.dirty:
        status.append(" [+]")
    return status


class MiniVimApp(App[RunState]):
    """Full-screen editor: text area, status line, command line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#text-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}

	#command-line {
		height: 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, engine: EditorEngine) -> None:
        super().__init__()
        self.engine = engine
        self.adapter: TextualEditorAdapter | None = None
        self._text_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None
        self._message = ""

    def compose(self) -> ComposeResult:
        self._text_widget = Static("", id="text-view")
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._text_widget
        yield self._status_widget
        yield self._command_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_command=self._show_command,
            log=self._log_line,
        )
        self.engine.resize(self.size.height, self.size.width)
        self.adapter = TextualEditorAdapter(self.engine, hooks)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.height, event.size.width)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        normalized = normalize_key(event.key, event.character)
        event.stop()
        event.prevent_default()
        if normalized is None:
            return
        key, text, modifiers = normalized
        state = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if state is RunState.CONTINUE:
            return
        state = self.adapter.finish()
        if state is not RunState.CONTINUE:
            self.exit(state)

    def _update_view(self, mirror: ScreenMirror) -> None:
        if self._text_widget:
            self._text_widget.update(render_text_area(mirror))
        if self._status_widget:
            self._status_widget.update(render_status_line(mirror))

    def _update_status(self, status: str) -> None:
        self._message = status

    def _show_command(self, command: str) -> None:
        if not self._command_widget:
            return
        if self.engine.mode == EditorMode.COMMAND.value:
            self._command_widget.update(Text(f":{command}"))
        else:
            self._command_widget.update(Text(self._message))

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "textual.adapter",
            level="debug",
            data={"line": line},
            logger_name="minivim.adapters",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minivim", description="Modal terminal text editor."
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="files to edit")
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file (default: $MINIVIM_LOG_FILE)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum log level (default: $MINIVIM_LOG_LEVEL or info)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("debug", "quiet", "profile"),
        default=None,
        help="Use a canned logging setup instead of --log-level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.files:
        parser.print_usage(sys.stdout)
        return 1
    telemetry.configure(
        preset=args.log_preset, level=args.log_level, log_file=args.log_file
    )
    engine = EditorEngine(args.files)
    MiniVimApp(engine).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
