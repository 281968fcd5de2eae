# tedit/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen: the class responsible for rendering the tedit editor with curses.

It is responsible for:
- initialising the color pairs (256-color, 8-color and monochrome terminals),
- recomputing the viewport before each frame,
- drawing the 1-based line numbers in the gutter,
- drawing each visible line from the spans produced by the tokenizer,
- rendering the status bar,
- placing the terminal cursor.

Every frame is a full redraw. Curses errors are caught and logged so a
drawing failure never takes the editor down.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any

from tedit.core.Tokenizer import Span, tokenize_line_cached
from tedit.utils.utils import hex_to_xterm

if TYPE_CHECKING:
    from tedit.core.Tedit import Tedit


# semantic name -> (default hex for 256-color terminals, 8-color fallback, monochrome attr)
COLOR_DEFINITIONS: dict[str, tuple[str, int, int]] = {
    "normal": ("#FFFFFF", curses.COLOR_WHITE, curses.A_NORMAL),
    "line_number": ("#00CDCD", curses.COLOR_CYAN, curses.A_DIM),
    "keyword": ("#CDCD00", curses.COLOR_YELLOW, curses.A_BOLD),
    "string": ("#00CD00", curses.COLOR_GREEN, curses.A_NORMAL),
    "bracket": ("#CD00CD", curses.COLOR_MAGENTA, curses.A_NORMAL),
    "saved": ("#0000EE", curses.COLOR_BLUE, curses.A_BOLD),
    "comment": ("#FFFFD7", curses.COLOR_CYAN, curses.A_DIM),
    "number": ("#0000EE", curses.COLOR_BLUE, curses.A_NORMAL),
}


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Renders the document, gutter and status bar of a `Tedit` instance.

    Attributes:
        editor (Tedit): Reference to the editor whose state is drawn.
        config (dict[str, Any]): Editor configuration dictionary (``[colors]`` is read).
        stdscr (curses.window): The main curses window object.
        colors (dict[str, int]): Semantic name -> curses attribute.
    """

    STATUS_HELP = "Ctrl+S = Save | Esc * 2 = Quit | Ctrl+O = Options | ({y},{x})"

    def __init__(self, editor: "Tedit", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.stdscr = editor.stdscr
        self.colors: dict[str, int] = {}
        self.has_colors = False
        self.is_256_color_terminal = False

    def init_colors(self) -> None:
        """Initializes curses color pairs with graceful degradation."""
        self.colors = {}
        self.has_colors = curses.has_colors()

        if not self.has_colors:
            logging.warning("Terminal has no color support. Using monochrome attributes.")
            self.colors = {name: attr for name, (_, _, attr) in COLOR_DEFINITIONS.items()}
            return

        curses.start_color()
        try:
            curses.use_default_colors()  # allow -1 as the "default background"
        except curses.error:
            logging.debug("use_default_colors() not supported by this terminal.")

        user_colors = self.config.get("colors", {})
        self.is_256_color_terminal = curses.COLORS >= 256

        for pair_id, (name, (default_hex, default_8_color, attr)) in enumerate(
            COLOR_DEFINITIONS.items(), start=1
        ):
            if self.is_256_color_terminal:
                fg = hex_to_xterm(str(user_colors.get(name, default_hex)))
            else:
                fg = default_8_color
            try:
                curses.init_pair(pair_id, fg, -1)
                self.colors[name] = curses.color_pair(pair_id)
            except curses.error as e:
                logging.error(f"Failed to initialize curses pair for '{name}': {e}")
                self.colors[name] = attr

    def draw(self) -> None:
        """Full redraw of text area, gutter and status bar."""
        try:
            height, width = self.stdscr.getmaxyx()
            viewport = self.editor.viewport
            viewport.resize(height - 1)
            viewport.recompute(self.editor.cursor.y)

            self.stdscr.erase()
            document = self.editor.document
            for row, doc_index in enumerate(viewport.visible_range(document.line_count)):
                self._draw_line_number(row, doc_index)
                spans = tokenize_line_cached(document.line(doc_index), self.editor.settings)
                self._draw_single_line(row, spans, width)

            self._draw_status_bar(height, width)
            self._position_cursor(height, width)
            self.stdscr.refresh()
        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)

    def _draw_line_number(self, row: int, doc_index: int) -> None:
        try:
            self.stdscr.addstr(row, 0, f"{doc_index + 1:4d}", self.colors.get("line_number", 0))
        except curses.error:
            # Narrow windows cannot hold the gutter.
            pass

    def _draw_single_line(self, row: int, spans: list[Span], window_width: int) -> None:
        """Draws the spans of one line starting at the gutter column, clipped to the window."""
        col = self.editor.settings.gutter_width
        for span in spans:
            if col >= window_width:
                break
            text = span.text[: window_width - col]
            try:
                self.stdscr.addstr(row, col, text, self.colors.get(span.style, 0))
            except curses.error:
                # Writing the bottom-right cell raises even though it succeeds.
                logging.debug("addstr failed at (%d,%d)", row, col)
            col += len(span.text)

    def _draw_status_bar(self, height: int, width: int) -> None:
        editor = self.editor
        if editor.saved_message_pending:
            message = f"Saved to '{editor.filename}'"
            attr = self.colors.get("saved", 0)
            editor.saved_message_pending = False
        elif editor.status_message:
            message = editor.status_message
            attr = self.colors.get("normal", 0)
            editor.status_message = ""
        else:
            message = self.STATUS_HELP.format(y=editor.cursor.y, x=editor.cursor.x)
            attr = self.colors.get("normal", 0)
        try:
            self.stdscr.addstr(height - 1, 0, message[: max(0, width - 1)], attr)
        except curses.error:
            logging.debug("Status bar did not fit in %dx%d", width, height)

    def _position_cursor(self, height: int, width: int) -> None:
        editor = self.editor
        screen_y = editor.cursor.y - editor.viewport.scroll_offset
        screen_x = editor.cursor.x + editor.settings.gutter_width
        screen_y = max(0, min(screen_y, height - 2))
        screen_x = max(0, min(screen_x, width - 1))
        try:
            self.stdscr.move(screen_y, screen_x)
        except curses.error:
            logging.debug("Could not place cursor at (%d,%d)", screen_y, screen_x)
