# tests/test_core/test_tedit.py
"""Tests for the `Tedit` edit command dispatcher.
================================================

The editor is built headless (``stdscr=None``) so no terminal is needed.
Key codes go through the real `InputDecoder`, which exercises the whole
key -> command -> buffer path.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock, patch

import pyperclip
import pytest

from tedit.core.Tedit import Tedit
from tedit.ui.InputDecoder import Command

ESC = 27


def feed(editor: Tedit, keys: str | list[int]) -> None:
    for key in keys:
        editor.handle_input(ord(key) if isinstance(key, str) else key)


# --- Construction -----------------------------------------------------------
def test_missing_file_opens_empty_document(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    assert editor.document.lines == ("",)
    assert editor.cursor.position == (0, 0)
    assert editor.saved is True
    assert editor.drawer is None


def test_existing_file_is_loaded(mock_config: dict, tmp_path: Path) -> None:
    target = tmp_path / "a.cpp"
    target.write_text("int a;\nint b;\n")
    editor = Tedit(None, mock_config, target)
    assert editor.document.lines == ("int a;", "int b;")
    assert editor.filename == str(target)


# --- Editing commands -------------------------------------------------------
def test_typing_inserts_and_clears_saved(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    feed(editor, "hi")
    assert editor.document.line(0) == "hi"
    assert editor.cursor.position == (0, 2)
    assert editor.saved is False


def test_enter_splits_line(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["abcd"])
    editor.cursor.move_to(0, 2)
    feed(editor, [10])
    assert editor.document.lines == ("ab", "cd")
    assert editor.cursor.position == (1, 0)


def test_carriage_return_also_splits(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["ab"])
    feed(editor, [13])
    assert editor.document.lines == ("", "ab")


def test_tab_inserts_tab_width_spaces(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["x"])
    editor.settings.tab_width = 3
    feed(editor, [9])
    assert editor.document.line(0) == "   x"
    assert editor.cursor.x == 3


def test_backspace_uses_tab_width_policy(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["foo    bar"])
    editor.cursor.move_to(0, 7)
    feed(editor, [127])
    assert editor.document.line(0) == "foobar"
    assert editor.cursor.position == (0, 3)
    assert editor.saved is False


def test_split_then_backspace_restores(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["hello world"])
    editor.cursor.move_to(0, 5)
    feed(editor, [10, 127])
    assert editor.document.lines == ("hello world",)
    assert editor.cursor.position == (0, 5)


def test_backspace_at_origin_changes_nothing(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["abc"])
    assert editor.apply(Command("backspace")) is False
    assert editor.document.lines == ("abc",)
    assert editor.cursor.position == (0, 0)


def test_comment_line_keeps_cursor_column(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["int a;", "int b;"])
    editor.cursor.move_to(1, 4)
    feed(editor, [31])
    assert editor.document.lines == ("int a;", " //int b;")
    assert editor.cursor.position == (1, 4)
    assert editor.saved is False


def test_arrow_keys_move_cursor(make_editor: Callable[..., Tedit]) -> None:
    import curses

    editor = make_editor(["abc", "de"])
    editor.cursor.move_to(0, 3)
    feed(editor, [curses.KEY_RIGHT])
    assert editor.cursor.position == (1, 0)
    feed(editor, [curses.KEY_LEFT])
    assert editor.cursor.position == (0, 3)
    feed(editor, [curses.KEY_DOWN])
    assert editor.cursor.position == (1, 2)
    feed(editor, [curses.KEY_UP])
    assert editor.cursor.position == (0, 2)
    assert editor.saved is True


# --- Save -------------------------------------------------------------------
def test_ctrl_s_saves_and_sets_flag(make_editor: Callable[..., Tedit], tmp_path: Path) -> None:
    editor = make_editor(filename="out.cpp")
    feed(editor, "x")
    assert editor.saved is False
    feed(editor, [19])
    assert editor.saved is True
    assert editor.saved_message_pending is True
    assert (tmp_path / "out.cpp").read_text() == "x\n"


def test_failed_save_reports_in_status_and_keeps_flag(
    make_editor: Callable[..., Tedit], tmp_path: Path
) -> None:
    editor = make_editor(filename="missing_dir/out.cpp")
    feed(editor, "x")
    assert editor.apply(Command("save")) is True
    assert editor.saved is False
    assert editor.saved_message_pending is False
    assert editor.status_message.startswith("Error saving")


# --- Escape sequences -------------------------------------------------------
def test_double_escape_quits(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    editor.running = True
    feed(editor, [ESC, ESC])
    assert editor.running is False


def test_escape_then_other_byte_is_discarded(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    editor.running = True
    feed(editor, [ESC, ord("x")])
    assert editor.running is True
    assert editor.document.lines == ("",)
    feed(editor, "y")
    assert editor.document.lines == ("y",)


def test_ctrl_up_only_reports(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["abc"])
    feed(editor, [ESC, *b"[1;5A"])
    assert editor.status_message == "CTRL+UP detected!"
    assert editor.document.lines == ("abc",)
    assert editor.saved is True


# --- Options / clipboard / misc ---------------------------------------------
def test_options_headless_resets_keywords(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    editor.settings.color_mode = "programming"
    feed(editor, [15])
    assert editor.settings.keywords == frozenset()


def test_paste_inserts_clipboard_text(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["<>"])
    editor.clipboard.enabled = True
    editor.cursor.move_to(0, 1)
    with patch("tedit.integrations.Clipboard.pyperclip.paste", return_value="a\r\nb"):
        feed(editor, [22])
    assert editor.document.lines == ("<a", "b>")
    assert editor.cursor.position == (1, 1)
    assert editor.saved is False


def test_paste_with_unavailable_clipboard_is_noop(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["abc"])
    editor.clipboard.enabled = True
    with patch(
        "tedit.integrations.Clipboard.pyperclip.paste",
        side_effect=pyperclip.PyperclipException("no xclip"),
    ):
        assert editor.apply(Command("paste")) is False
    assert editor.document.lines == ("abc",)
    assert editor.saved is True


def test_copy_line_copies_current_line(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor(["first", "second"])
    editor.clipboard.enabled = True
    editor.cursor.move_to(1, 0)
    with patch("tedit.integrations.Clipboard.pyperclip.copy") as mock_copy:
        feed(editor, [3])
    mock_copy.assert_called_once_with("second")


def test_unknown_action_is_ignored(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    assert editor.apply(Command("teleport")) is False


def test_resize_headless_is_noop(make_editor: Callable[..., Tedit]) -> None:
    editor = make_editor()
    assert editor.handle_resize() is False


def test_run_requires_a_window(make_editor: Callable[..., Tedit]) -> None:
    with pytest.raises(RuntimeError):
        make_editor().run()


def test_run_loop_with_mocked_window(
    mock_stdscr: MagicMock, mock_config: dict, tmp_path: Path
) -> None:
    """Draw, read, apply until ESC ESC, with curses calls patched out."""
    mock_stdscr.getch.side_effect = [ord("o"), ord("k"), ESC, ESC]
    with (
        patch("tedit.core.Tedit.curses") as mock_curses,
        patch("tedit.core.Tedit.signal"),
        patch("tedit.core.Tedit.DrawScreen") as mock_drawer_cls,
        patch("tedit.core.Tedit.OptionsScreen"),
    ):
        mock_curses.ERR = -1
        editor = Tedit(mock_stdscr, mock_config, tmp_path / "run.cpp")
        editor.run()

    assert editor.document.lines == ("ok",)
    assert editor.running is False
    assert editor.viewport.screen_height == 23
    assert mock_drawer_cls.return_value.draw.call_count == 4


def test_run_loop_survives_to_exit_on_unexpected_error(
    mock_stdscr: MagicMock, mock_config: dict, tmp_path: Path
) -> None:
    mock_stdscr.getch.side_effect = ValueError("boom")
    with (
        patch("tedit.core.Tedit.curses") as mock_curses,
        patch("tedit.core.Tedit.signal"),
        patch("tedit.core.Tedit.DrawScreen"),
        patch("tedit.core.Tedit.OptionsScreen"),
    ):
        mock_curses.ERR = -1
        editor = Tedit(mock_stdscr, mock_config, tmp_path / "run.cpp")
        editor.run()
    assert editor.running is False


def test_paste_non_ascii_into_ascii_file_then_save(mock_config: dict, tmp_path: Path) -> None:
    target = tmp_path / "ascii.cpp"
    target.write_bytes(b"int a;\n")
    editor = Tedit(None, mock_config, target)
    editor.clipboard.enabled = True
    with patch("tedit.integrations.Clipboard.pyperclip.paste", return_value="// café"):
        feed(editor, [22])
    feed(editor, [19])
    assert target.read_bytes() == "// caféint a;\n".encode("utf-8")


# --- Invariants under random key streams ------------------------------------
@pytest.mark.parametrize("seed", range(8))
def test_random_key_stream_keeps_cursor_invariant(
    make_editor: Callable[..., Tedit], seed: int
) -> None:
    import curses

    rng = random.Random(seed)
    editor = make_editor(["int main() {", "    return 0;", "}"])
    editor.running = True
    pool = (
        [ord(c) for c in "ab x{}\"/;"]
        + [9, 10, 13, 127, 8, 31]
        + [curses.KEY_UP, curses.KEY_DOWN, curses.KEY_LEFT, curses.KEY_RIGHT]
        + [ESC, ord("["), ord("1"), ord(";"), ord("5")]
    )

    for step in range(300):
        if step % 50 == 0:
            editor.settings.tab_width = rng.randint(0, 8)
        editor.handle_input(rng.choice(pool))
        editor.running = True  # keep going past ESC ESC

        doc = editor.document
        assert doc.line_count >= 1
        assert 0 <= editor.cursor.y < doc.line_count
        assert 0 <= editor.cursor.x <= doc.line_length(editor.cursor.y)
        assert all("\n" not in line for line in doc.lines)
