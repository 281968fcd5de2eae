# tedit/main.py
"""
tedit Main Entry Point
======================

This module is the entry point for launching the tedit editor. It performs:
1) Argument check: exactly one positional argument, the file to edit.
2) Configuration & Logging: loads config and initializes logging before curses.
3) Terminal setup: disables XON/XOFF flow control so Ctrl+S reaches the editor.
4) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
5) Exit prompt: after the full-screen UI is gone, asks whether to save unsaved changes.
"""

from __future__ import annotations

import curses
import locale
import logging
import os
import sys
from typing import Any, Callable, Optional, TextIO

from tedit.core.Tedit import Tedit
from tedit.utils.logging_config import setup_logging
from tedit.utils.utils import load_config

logger = logging.getLogger("tedit")

USAGE_MESSAGE = "There should be ONE argument (the name of the file to edit)"
SAVE_PROMPT = "Do you want to save this unsaved file (Y/n)"


def _disable_flow_control() -> Optional[list[Any]]:
    """Turns IXON off on stdin. Returns the previous tty attributes, or None."""
    try:
        import termios
    except ImportError:
        return None
    if not sys.stdin.isatty():
        return None
    fd = sys.stdin.fileno()
    try:
        saved_attrs = termios.tcgetattr(fd)
        new_attrs = termios.tcgetattr(fd)
        new_attrs[0] &= ~termios.IXON
        termios.tcsetattr(fd, termios.TCSANOW, new_attrs)
    except termios.error as e:
        logger.warning("Could not disable terminal flow control: %s", e)
        return None
    return saved_attrs


def _restore_tty(saved_attrs: Optional[list[Any]]) -> None:
    if saved_attrs is None:
        return
    import termios

    try:
        termios.tcsetattr(sys.stdin.fileno(), termios.TCSANOW, saved_attrs)
    except termios.error as e:
        logger.warning("Could not restore terminal attributes: %s", e)


def main_app_runner(stdscr: curses.window, editor_holder: dict[str, Tedit],
                    config: dict[str, Any], filename: str) -> None:
    """
    Target for `curses.wrapper`. Builds the editor and runs its main loop.

    The editor instance is stored in `editor_holder` so the caller can still
    reach its state (dirty flag, document) after curses has been torn down.
    """
    try:
        curses.set_escdelay(25)
    except AttributeError:
        os.environ.setdefault("ESCDELAY", "25")

    editor = Tedit(stdscr, config, filename)
    editor_holder["editor"] = editor
    editor.run()


def confirm_save_on_exit(
    editor: Tedit,
    input_func: Callable[[str], str] = input,
    output: TextIO = sys.stdout,
) -> bool:
    """
    Asks on the plain terminal whether to save, until the answer is exactly
    "y" or "n". End of input counts as "n".

    Returns:
        bool: True if the document was written.
    """
    while True:
        try:
            answer = input_func(f"{SAVE_PROMPT} ").strip()
        except EOFError:
            output.write("\n")
            logger.info("Exit prompt: end of input, not saving.")
            return False
        if answer == "y":
            try:
                editor.document.save(editor.filename)
            except OSError as e:
                logger.error(f"Failed to save '{editor.filename}' on exit: {e}", exc_info=True)
                output.write(f"Could not save '{editor.filename}': {e}\n")
                return False
            editor.saved = True
            output.write(f"Saved to '{editor.filename}'\n")
            return True
        if answer == "n":
            return False


def start(argv: Optional[list[str]] = None) -> None:
    """
    Console-script entry point. Validates arguments, sets up config and
    logging, runs the curses application and handles the exit prompt.
    Exits with status 1 on a wrong argument count, 0 otherwise.
    """
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(USAGE_MESSAGE)
        sys.exit(1)
    filename = args[0]

    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; print to stderr and exit.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("tedit starting up for '%s'", filename)

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    editor_holder: dict[str, Tedit] = {}
    saved_attrs = _disable_flow_control()
    try:
        curses.wrapper(main_app_runner, editor_holder, config, filename)
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
    finally:
        _restore_tty(saved_attrs)

    editor = editor_holder.get("editor")
    if editor is not None and not editor.saved:
        confirm_save_on_exit(editor)

    logger.info("tedit shut down.")
    sys.exit(0)


if __name__ == "__main__":
    start()
