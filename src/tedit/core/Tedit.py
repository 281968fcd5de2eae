# tedit/core/Tedit.py
"""tedit.core.Tedit.py
============================
Tedit: the edit command dispatcher and main loop of the tedit editor.

The Tedit class owns the whole editor state for the session:

- the `DocumentBuffer` being edited and the file name it is saved to,
- the `CursorModel` and `ViewportState`,
- the `EditorSettings` object shared with the renderer and options screen,
- the `InputDecoder` that turns key codes into commands,
- the dirty flag (`saved`) and the status bar message.

Each loop iteration draws a full frame, blocks on a single `getch()`, feeds
the key to the decoder and applies the resulting command through the action
map. Everything runs on one thread; the only suspension point is the blocking
read.
"""

import curses
import logging
import signal
from pathlib import Path
from typing import Any, Callable, Optional, Union

from tedit.core.Cursor import CursorModel, ViewportState
from tedit.core.Document import DocumentBuffer
from tedit.core.Settings import EditorSettings
from tedit.integrations.Clipboard import Clipboard
from tedit.ui import InputDecoder as keys
from tedit.ui.DrawScreen import DrawScreen
from tedit.ui.InputDecoder import Command, InputDecoder
from tedit.ui.OptionsScreen import OptionsScreen

COMMENT_PREFIX = " //"


## ==================== Tedit Class ====================
class Tedit:
    """Class Tedit
    =========================
    Applies decoded commands to the document and cursor, and runs the loop.

    Attributes:
        stdscr (curses.window | None): Main curses window; None when the editor
            is driven headless (tests, scripted use).
        config (dict): Merged configuration dictionary.
        settings (EditorSettings): Tab width, gutter width, color mode, keywords.
        filename (str): Path the document is saved to.
        document (DocumentBuffer): The edited text.
        cursor (CursorModel): Cursor bound to `document`.
        viewport (ViewportState): Scroll offset and text area height.
        decoder (InputDecoder): Key code -> Command state machine.
        clipboard (Clipboard): System clipboard access.
        saved (bool): True until the first edit, set again by every save.
        saved_message_pending (bool): Show "Saved to ..." on the next frame.
        status_message (str): One-shot status bar message.
        running (bool): Main loop flag, cleared by the quit command.
        action_map (dict[str, Callable]): Action name -> handler.
    """

    def __init__(
        self,
        stdscr: Optional["curses.window"],
        config: dict[str, Any],
        filename: Union[str, Path],
        document: Optional[DocumentBuffer] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        self.stdscr = stdscr
        self.config: dict[str, Any] = config
        self.filename: str = str(filename)
        self.settings: EditorSettings = settings or EditorSettings.from_config(config)
        self.document: DocumentBuffer = document or DocumentBuffer.load(self.filename)

        self._initialize_state()
        self._initialize_components()
        if self.stdscr is not None:
            self._setup_environment()

        logging.info(
            f"Tedit initialized for '{self.filename}' "
            f"({self.document.line_count} lines, mode '{self.settings.color_mode}')"
        )

    # --- State Initialization ---
    def _initialize_state(self) -> None:
        self.cursor: CursorModel = CursorModel(self.document)
        self.viewport: ViewportState = ViewportState()
        self.saved: bool = True
        self.saved_message_pending: bool = False
        self.status_message: str = ""
        self.running: bool = False

    # --- Component Initialization ---
    def _initialize_components(self) -> None:
        self.decoder: InputDecoder = InputDecoder()
        self.clipboard: Clipboard = Clipboard(self.config)
        self.drawer: Optional[DrawScreen] = None
        self.options_screen: Optional[OptionsScreen] = None
        if self.stdscr is not None:
            self.drawer = DrawScreen(self, self.config)
            self.options_screen = OptionsScreen(self.stdscr, self.settings)
        self.action_map: dict[str, Callable[..., bool]] = self._setup_action_map()

    # --- Environment Setup ---
    def _setup_environment(self) -> None:
        """Raw keyboard mode, no echo, keypad decoding, unwanted signals ignored."""
        curses.raw()  # Ctrl+S / Ctrl+C reach the editor instead of the tty
        curses.noecho()
        self.stdscr.keypad(True)
        try:
            curses.curs_set(1)
        except curses.error:
            logging.debug("Terminal cannot change cursor visibility.")

        for sig_name in ("SIGINT", "SIGTSTP", "SIGQUIT"):
            sig = getattr(signal, sig_name, None)
            if sig is None:
                continue
            try:
                signal.signal(sig, signal.SIG_IGN)
            except (OSError, ValueError) as exc:
                logging.warning("Could not ignore %s: %s", sig_name, exc)

        if self.drawer:
            self.drawer.init_colors()
        self.handle_resize()

    def _setup_action_map(self) -> dict[str, Callable[..., bool]]:
        """Maps decoder action names to the handlers below."""
        return {
            keys.INSERT_CHAR: self.insert_char,
            keys.BACKSPACE: self.handle_backspace,
            keys.TAB: self.handle_tab,
            keys.SPLIT: self.handle_enter,
            keys.COMMENT_LINE: self.comment_line,
            keys.SAVE: self.save_file,
            keys.OPTIONS: self.show_options,
            keys.QUIT: self.exit_editor,
            keys.CTRL_UP: self.handle_ctrl_up,
            keys.UP: self.cursor.up,
            keys.DOWN: self.cursor.down,
            keys.LEFT: self.cursor.left,
            keys.RIGHT: self.cursor.right,
            keys.PASTE: self.paste,
            keys.COPY_LINE: self.copy_line,
            keys.RESIZE: self.handle_resize,
        }

    # ---------------------- Input handling --------------------
    def handle_input(self, key: int) -> bool:
        """Feeds one key code to the decoder and applies any resulting command."""
        command = self.decoder.feed(key)
        if command is None:
            return False
        return self.apply(command)

    def apply(self, command: Command) -> bool:
        """Applies one command. Returns True if editor state changed."""
        action = self.action_map.get(command.action)
        if action is None:
            logging.warning(f"No handler for action '{command.action}'. Ignored.")
            return False
        logging.debug(f"apply: {command.action} {command.char!r}")
        if command.action == keys.INSERT_CHAR:
            return action(command.char)
        return action()

    def _mark_modified(self) -> None:
        self.saved = False
        self.cursor.clamp()

    # ---------------------- Editing --------------------
    def insert_char(self, ch: str) -> bool:
        y, x = self.cursor.position
        self.document.insert_char(y, x, ch)
        self.cursor.x = x + len(ch)
        self._mark_modified()
        return True

    def handle_backspace(self) -> bool:
        """Backspace with the bounded space-run policy and line merging."""
        y, x = self.cursor.position
        new_y, new_x = self.document.delete_char_before(y, x, self.settings.tab_width)
        self.cursor.move_to(new_y, new_x)
        self._mark_modified()
        return (new_y, new_x) != (y, x)

    def handle_tab(self) -> bool:
        y, x = self.cursor.position
        self.cursor.x = self.document.insert_tab(y, x, self.settings.tab_width)
        self._mark_modified()
        return True

    def handle_enter(self) -> bool:
        y, x = self.cursor.position
        new_y, new_x = self.document.split_line(y, x)
        self.cursor.move_to(new_y, new_x)
        self._mark_modified()
        return True

    def comment_line(self) -> bool:
        """Prepends the comment marker to the current line; the cursor column stays put."""
        self.document.prefix_line(self.cursor.y, COMMENT_PREFIX)
        self._mark_modified()
        return True

    # ---------------------- Clipboard --------------------
    def paste(self) -> bool:
        text = self.clipboard.paste().replace("\r\n", "\n")
        if not text:
            return False
        y, x = self.cursor.position
        new_y, new_x = self.document.insert_text(y, x, text)
        self.cursor.move_to(new_y, new_x)
        self._mark_modified()
        return True

    def copy_line(self) -> bool:
        self.clipboard.copy(self.document.line(self.cursor.y))
        return False

    # ---------------------- File / session --------------------
    def save_file(self) -> bool:
        try:
            self.document.save(self.filename)
        except OSError as e:
            logging.error(f"Failed to write file '{self.filename}': {e}", exc_info=True)
            self.status_message = f"Error saving '{self.filename}': {e.strerror or e}"
            return True
        self.saved = True
        self.saved_message_pending = True
        logging.info(f"Saved '{self.filename}'")
        return True

    def show_options(self) -> bool:
        if self.options_screen is not None:
            self.options_screen.run()
        else:
            self.settings.apply_mode_defaults()
        return True

    def handle_ctrl_up(self) -> bool:
        """Recognised Ctrl+Up sequence. Scrolling is not implemented; only reported."""
        self.status_message = "CTRL+UP detected!"
        return True

    def handle_resize(self) -> bool:
        if self.stdscr is None:
            return False
        height, _width = self.stdscr.getmaxyx()
        self.viewport.resize(height - 1)
        self.viewport.recompute(self.cursor.y)
        return True

    def exit_editor(self) -> bool:
        logging.info("--- EXIT SEQUENCE INITIATED ---")
        self.running = False
        return True

    def run(self) -> None:
        """The main event loop: draw, block on one key, apply it."""
        if self.stdscr is None or self.drawer is None:
            raise RuntimeError("Tedit.run() needs a curses window")

        logging.info("Editor main loop started.")
        self.running = True
        while self.running:
            try:
                self.drawer.draw()
                key = self.stdscr.getch()
                if key == curses.ERR:
                    continue
                self.handle_input(key)
            except KeyboardInterrupt:
                # SIGINT is ignored while running; only reachable before setup.
                logging.info("Main loop interrupted by KeyboardInterrupt.")
                self.exit_editor()
            except Exception as e:
                logging.critical("Unhandled exception in main loop: %s", e, exc_info=True)
                self.exit_editor()
        logging.info("Editor main loop finished.")
