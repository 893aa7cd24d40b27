from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from minivim.buffer import ScreenSize
from minivim.engine import EditorEngine, RunState
from minivim.modes import KeyInput
from minivim.storage import FileUnavailable, MemoryFileStore

NAMED_KEYS = {"ESC", "ENTER", "RETURN", "BACKSPACE", "LEFT", "RIGHT", "UP", "DOWN"}


def make_engine(
    files: Optional[Dict[str, Sequence[str]]] = None,
    names: Sequence[str] = ("a.txt",),
    *,
    read_only: Sequence[str] = (),
    screen: ScreenSize = ScreenSize(),
) -> EditorEngine:
    store = MemoryFileStore(files or {}, read_only=read_only)
    return EditorEngine(names, store=store, screen=screen)


def to_key(name: str) -> KeyInput:
    if name in NAMED_KEYS:
        return KeyInput(key=name)
    if name.startswith("ctrl+"):
        return KeyInput.ctrl(name[len("ctrl+") :])
    return KeyInput.char(name)


def press(engine: EditorEngine, *names: str) -> RunState:
    state = RunState.CONTINUE
    for name in names:
        state = engine.handle_key(to_key(name))
    return state


def type_text(engine: EditorEngine, text: str) -> RunState:
    return press(engine, *text)


def command(engine: EditorEngine, text: str) -> RunState:
    press(engine, ":")
    type_text(engine, text)
    return press(engine, "ENTER")


def lines(engine: EditorEngine) -> tuple[str, ...]:
    return tuple(engine.buffer.document.snapshot())


class ScriptedKeys:
    def __init__(self, names: Iterable[str]) -> None:
        self._keys: List[KeyInput] = [to_key(name) for name in names]

    def read_key(self) -> Optional[KeyInput]:
        return self._keys.pop(0) if self._keys else None


class UnreadableStore(MemoryFileStore):
    def load(self, path: str) -> List[str]:
        raise FileUnavailable(path, "permission denied")


# -- construction ---------------------------------------------------------------


def test_engine_requires_a_filename() -> None:
    with pytest.raises(ValueError):
        make_engine(names=())


def test_engine_opens_first_file_in_normal_mode() -> None:
    engine = EditorEngine.open(
        ["a.txt", "b.txt"], store=MemoryFileStore({"a.txt": ["hello"]})
    )

    assert engine.mode == "normal"
    assert engine.filename == "a.txt"
    assert lines(engine) == ("hello",)
    assert engine.buffer.cursor == (0, 0)


def test_unreadable_file_opens_empty_with_status() -> None:
    engine = EditorEngine(["locked.txt"], store=UnreadableStore())

    assert lines(engine) == ("",)
    assert "locked.txt" in engine.status


# -- normal mode ----------------------------------------------------------------


def test_motions_clamp_to_buffer() -> None:
    engine = make_engine({"a.txt": ["abc", "de"]})

    press(engine, "l", "l", "l", "l")
    assert engine.buffer.cursor == (0, 3)

    press(engine, "j")
    assert engine.buffer.cursor == (1, 2)

    press(engine, "j", "h", "h", "h", "k", "k")
    assert engine.buffer.cursor == (0, 0)


def test_control_keys_and_arrows_move_like_hjkl() -> None:
    engine = make_engine({"a.txt": ["abc", "def"]})

    press(engine, "ctrl+e", "ctrl+b")
    assert engine.buffer.cursor == (1, 1)

    press(engine, "ctrl+d", "ctrl+c")
    assert engine.buffer.cursor == (0, 0)

    press(engine, "RIGHT", "DOWN", "LEFT", "UP")
    assert engine.buffer.cursor == (0, 0)


def test_line_start_end_and_file_jumps() -> None:
    engine = make_engine({"a.txt": ["first", "second", "third"]})

    press(engine, "$")
    assert engine.buffer.cursor == (0, 5)
    press(engine, "0")
    assert engine.buffer.cursor == (0, 0)
    press(engine, "G")
    assert engine.buffer.cursor == (2, 0)
    press(engine, "l", "g", "g")
    assert engine.buffer.cursor == (0, 0)


def test_delete_line_yank_and_paste() -> None:
    engine = make_engine({"a.txt": ["one", "two", "three"]})

    press(engine, "y", "y", "j", "p")
    assert lines(engine) == ("one", "two", "one", "three")
    assert engine.buffer.cursor[0] == 2

    press(engine, "d", "d")
    assert lines(engine) == ("one", "two", "three")


def test_delete_line_does_not_fill_clipboard() -> None:
    engine = make_engine({"a.txt": ["one", "two"]})

    press(engine, "d", "d", "p")

    assert lines(engine) == ("two",)


def test_paste_of_empty_line_is_noop() -> None:
    engine = make_engine({"a.txt": ["", "x"]})

    press(engine, "y", "y", "p")

    assert lines(engine) == ("", "x")
    assert engine.buffer.dirty is False


def test_delete_sole_line_leaves_empty_buffer() -> None:
    engine = make_engine({"a.txt": ["only"]})

    press(engine, "d", "d")
    assert lines(engine) == ("",)

    press(engine, "u")
    assert lines(engine) == ("only",)


def test_undo_and_redo_keys() -> None:
    engine = make_engine({"a.txt": ["a", "b", "c"]})

    press(engine, "j", "d", "d", "d", "d")
    assert lines(engine) == ("a",)

    press(engine, "u", "u")
    assert lines(engine) == ("a", "b", "c")

    press(engine, "ctrl+r")
    assert lines(engine) == ("a", "c")


def test_normal_q_quits_without_saving() -> None:
    store = MemoryFileStore({"a.txt": ["x"]})
    engine = EditorEngine(["a.txt"], store=store)
    press(engine, "d", "d")

    assert press(engine, "q") is RunState.EXIT_WITHOUT_SAVE
    assert engine.finish() is RunState.EXIT_WITHOUT_SAVE
    assert store.files["a.txt"] == ["x"]
    # Once terminal, further keys are ignored.
    assert press(engine, "u") is RunState.EXIT_WITHOUT_SAVE
    assert lines(engine) == ("",)


# -- insert mode ----------------------------------------------------------------


def test_insert_typing_newline_and_backspace() -> None:
    engine = make_engine()

    press(engine, "i")
    type_text(engine, "hello")
    press(engine, "ENTER")
    type_text(engine, "wq")
    assert lines(engine) == ("hello", "wq")
    assert engine.buffer.cursor == (1, 2)

    press(engine, "BACKSPACE", "BACKSPACE", "BACKSPACE")
    assert lines(engine) == ("hello",)
    assert engine.buffer.cursor == (0, 5)

    press(engine, "ESC")
    assert engine.mode == "normal"


def test_insert_mode_letters_are_text_not_commands() -> None:
    engine = make_engine()

    press(engine, "i")
    state = type_text(engine, "qdd:")

    assert state is RunState.CONTINUE
    assert lines(engine) == ("qdd:",)


# -- command mode ---------------------------------------------------------------


def test_command_text_is_visible_while_typing() -> None:
    engine = make_engine()

    press(engine, ":")
    type_text(engine, "wq")
    view = engine.view()

    assert view.mode_label == "COMMAND"
    assert view.command_text == "wq"

    press(engine, "ESC")
    assert engine.mode == "normal"
    assert engine.command_text == ""


def test_write_saves_current_buffer() -> None:
    store = MemoryFileStore({"a.txt": ["old"]})
    engine = EditorEngine(["a.txt"], store=store)
    press(engine, "i")
    type_text(engine, "new ")
    press(engine, "ESC")

    assert command(engine, "w") is RunState.CONTINUE
    assert store.files["a.txt"] == ["new old"]
    assert engine.buffer.dirty is False
    assert engine.status == '"a.txt" 1L written'
    assert engine.mode == "normal"


def test_write_failure_sets_status_and_keeps_dirty() -> None:
    engine = make_engine({"a.txt": ["x"]}, read_only=["a.txt"])
    press(engine, "d", "d")

    command(engine, "w")

    assert engine.buffer.dirty is True
    assert "read-only" in engine.status


def test_quit_command() -> None:
    engine = make_engine()

    assert command(engine, "q") is RunState.EXIT_WITHOUT_SAVE


def test_write_quit_saves_on_finish() -> None:
    store = MemoryFileStore({"a.txt": ["a", "b"]})
    engine = EditorEngine(["a.txt"], store=store)
    press(engine, "d", "d")

    assert command(engine, "wq") is RunState.SAVE_AND_EXIT
    assert store.files["a.txt"] == ["a", "b"]
    assert engine.finish() is RunState.SAVE_AND_EXIT
    assert store.files["a.txt"] == ["b"]


def test_write_quit_failure_keeps_editing() -> None:
    engine = make_engine({"a.txt": ["a"]}, read_only=["a.txt"])
    command(engine, "wq")

    assert engine.finish() is RunState.CONTINUE
    assert press(engine, "j") is RunState.CONTINUE


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("s/foo/bar/", "bar foo"),
        ("s/foo/bar/g", "bar bar"),
        ("s/foo/bar", "bar foo"),
        ("s/o/0/g", "f00 f00"),
    ],
)
def test_substitute_on_current_line(text: str, expected: str) -> None:
    engine = make_engine({"a.txt": ["keep", "foo foo"]})
    press(engine, "j")

    command(engine, text)

    assert lines(engine) == ("keep", expected)


def test_substitute_without_match_reports_status() -> None:
    engine = make_engine({"a.txt": ["abc"]})

    command(engine, "s/zzz/y/")

    assert lines(engine) == ("abc",)
    assert engine.status == "pattern not found"


@pytest.mark.parametrize("text", ["s//x/", "s/only", "x", " q", "q ", "e", "b", "wqa"])
def test_malformed_commands_are_ignored(text: str) -> None:
    engine = make_engine({"a.txt": ["abc"]})

    state = command(engine, text)

    assert state is RunState.CONTINUE
    assert lines(engine) == ("abc",)
    assert engine.mode == "normal"


def test_goto_line_keeps_column_clamped() -> None:
    engine = make_engine({"a.txt": ["abcdef", "x", "ghijkl"]})
    press(engine, "$")

    command(engine, "2")
    assert engine.buffer.cursor == (1, 1)

    command(engine, "3")
    assert engine.buffer.cursor == (2, 1)


@pytest.mark.parametrize("target", ["0", "4", "99"])
def test_goto_out_of_range_is_ignored(target: str) -> None:
    engine = make_engine({"a.txt": ["a", "b", "c"]})
    press(engine, "j")

    command(engine, target)

    assert engine.buffer.cursor == (1, 0)


def test_edit_opens_file_and_extends_history() -> None:
    engine = make_engine({"a.txt": ["a"], "b.txt": ["b"]})

    command(engine, "e b.txt")

    assert engine.filename == "b.txt"
    assert lines(engine) == ("b",)
    assert engine.buffers.history == ("a.txt", "b.txt")
    assert engine.status == '"b.txt"'


def test_next_previous_and_buffer_number() -> None:
    engine = make_engine(
        {"a": ["1"], "b": ["2"], "c": ["3"]}, names=("a", "b", "c")
    )

    command(engine, "N")
    assert engine.filename == "a"

    command(engine, "n")
    command(engine, "n")
    assert engine.filename == "c"
    command(engine, "n")
    assert engine.filename == "c"

    command(engine, "b 2")
    assert engine.filename == "b"
    assert lines(engine) == ("2",)

    command(engine, "b 9")
    assert engine.filename == "b"


def test_switch_discards_unsaved_edits_with_status() -> None:
    store = MemoryFileStore({"a": ["1"], "b": ["2"]})
    engine = EditorEngine(["a", "b"], store=store)
    press(engine, "d", "d")

    command(engine, "n")
    assert "discarded" in engine.status

    command(engine, "N")
    assert lines(engine) == ("1",)
    assert engine.buffer.undo_log.can_undo() is False


def test_clipboard_survives_buffer_switch() -> None:
    engine = make_engine({"a": ["from a"], "b": ["in b"]}, names=("a", "b"))
    press(engine, "y", "y")

    command(engine, "n")
    press(engine, "p")

    assert lines(engine) == ("in b", "from a")


def test_listing_shows_until_next_key() -> None:
    engine = make_engine({"a": ["x", "y"]}, names=("a", "b"))

    command(engine, "ls")
    assert engine.view().listing == ((1, "a"), (2, "b"))

    press(engine, "j")
    assert engine.view().listing is None
    assert engine.buffer.cursor == (0, 0)

    press(engine, "j")
    assert engine.buffer.cursor == (1, 0)


# -- run loop and screen --------------------------------------------------------


def test_run_saves_and_exits_on_wq() -> None:
    store = MemoryFileStore({"a.txt": ["x"]})
    engine = EditorEngine(["a.txt"], store=store)

    state = engine.run(ScriptedKeys(["i", "y", "ESC", ":", "w", "q", "ENTER", "j"]))

    assert state is RunState.SAVE_AND_EXIT
    assert store.files["a.txt"] == ["yx"]


def test_run_stops_when_input_ends() -> None:
    engine = make_engine({"a.txt": ["a"]}, read_only=["a.txt"])

    state = engine.run(ScriptedKeys([":", "w", "q", "ENTER"]))

    assert state is RunState.CONTINUE
    assert "read-only" in engine.status


def test_viewport_follows_cursor_and_resize() -> None:
    engine = make_engine({"a.txt": [str(i) for i in range(30)]})

    press(engine, "G")
    assert engine.buffer.viewport.top_row == 29 - (24 - 3)

    engine.resize(10, 80)
    view = engine.view()
    assert view.first_row == 29 - (10 - 3)
    assert view.cursor_screen == (7, 8)
    assert view.lines[-1] == "29"

    press(engine, "g", "g")
    assert engine.view().first_row == 0


def test_view_cuts_long_lines_to_text_width() -> None:
    engine = make_engine({"a.txt": ["x" * 100]}, screen=ScreenSize(rows=5, cols=20))

    press(engine, "$")
    view = engine.view()

    assert view.cursor_screen[1] < 20
    assert len(view.lines[0]) <= 12


def test_yank_paste_duplicates_line_and_moves_down() -> None:
    engine = make_engine({"a.txt": ["abc"]})

    press(engine, "y", "y", "p")

    assert lines(engine) == ("abc", "abc")
    assert engine.buffer.cursor == (1, 0)


@pytest.mark.parametrize(
    ("text", "expected"),
    [("s/foo/bar/g", "barbarbar"), ("s/foo/bar/", "barfoofoo")],
)
def test_substitute_repeated_pattern(text: str, expected: str) -> None:
    engine = make_engine({"a.txt": ["foofoofoo"]})

    command(engine, text)

    assert lines(engine) == (expected,)


def test_next_then_previous_resets_cursor() -> None:
    engine = make_engine(
        {"a.txt": ["x", "y"], "b.txt": ["z"]}, names=("a.txt", "b.txt")
    )
    press(engine, "j", "l")

    command(engine, "n")
    assert engine.filename == "b.txt"
    assert engine.buffer.cursor == (0, 0)

    command(engine, "N")
    assert engine.filename == "a.txt"
    assert engine.buffer.cursor == (0, 0)
