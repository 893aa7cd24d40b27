from __future__ import annotations

import pytest

from minivim.adapters.textual.app import (
    main,
    normalize_key,
    render_status_line,
    render_text_area,
)
from minivim.buffer import Buffer, ScreenSize, mirror_buffer


def make_mirror(*lines: str, mode: str = "normal"):
    buffer = Buffer.from_lines(lines, name="notes.txt")
    return mirror_buffer(buffer, screen=ScreenSize(rows=6, cols=30), mode=mode)


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("escape", None, ("ESC", None, ())),
        ("enter", "\r", ("ENTER", None, ())),
        ("backspace", None, ("BACKSPACE", None, ())),
        ("up", None, ("UP", None, ())),
        ("tab", "\t", ("TAB", "\t", ())),
        ("ctrl+r", "\x12", ("r", None, ("ctrl",))),
        ("dollar_sign", "$", ("$", "$", ())),
        ("G", "G", ("G", "G", ())),
        ("f1", None, None),
    ],
)
def test_normalize_key(key, character, expected) -> None:
    assert normalize_key(key, character) == expected


def test_render_text_area_numbers_lines_and_marks_cursor() -> None:
    text = render_text_area(make_mirror("alpha", "beta"))

    assert text.plain == "    1 | alpha\n    2 | beta"
    assert any(str(span.style) == "reverse" for span in text.spans)


def test_render_text_area_shows_listing() -> None:
    mirror = make_mirror("x")
    mirror.listing = ((1, "a.txt"), (2, "b.txt"))

    plain = render_text_area(mirror).plain

    assert "  1 a.txt" in plain
    assert "  2 b.txt" in plain
    assert plain.endswith("Press any key to continue")


def test_render_status_line_shows_mode_and_file() -> None:
    plain = render_status_line(make_mirror("x", mode="insert")).plain

    assert "INSERT" in plain
    assert "notes.txt" in plain


def test_main_without_files_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1

    assert capsys.readouterr().out.startswith("usage: minivim")


def test_main_passes_log_preset_to_telemetry(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from minivim.adapters.textual import app as app_module
    from minivim.runtime import telemetry

    calls: list[dict] = []
    monkeypatch.setattr(telemetry, "configure", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(app_module.MiniVimApp, "run", lambda self: None)
    target = tmp_path / "notes.txt"
    log_file = str(tmp_path / "editor.log")

    assert main(["--log-preset", "quiet", "--log-file", log_file, str(target)]) == 0
    assert calls == [{"preset": "quiet", "level": None, "log_file": log_file}]


def test_main_rejects_unknown_log_preset(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main(["--log-preset", "loud", str(tmp_path / "notes.txt")])
