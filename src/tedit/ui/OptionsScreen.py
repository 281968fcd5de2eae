# tedit/ui/OptionsScreen.py
"""OptionsScreen.py
==================
The options sub-screen: the only place where `EditorSettings` is mutated at
runtime.

Keys:
- ``=`` / ``-``: increase / decrease the tab width (not below 0)
- ``+`` / ``_``: increase / decrease the gutter width (not below its floor)
- ``c``: cycle the color mode
- ESC: leave, resetting the keyword set from the per-mode default table
"""

import curses
import logging
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tedit.core.Settings import EditorSettings


class OptionsScreen:
    """Blocking sub-screen loop over a curses window."""

    def __init__(self, stdscr: "curses.window", settings: "EditorSettings") -> None:
        self.stdscr = stdscr
        self.settings = settings
        self.key_actions: dict[int, Callable[[], None]] = {
            ord("="): settings.increase_tab_width,
            ord("-"): settings.decrease_tab_width,
            ord("+"): settings.increase_gutter_width,
            ord("_"): settings.decrease_gutter_width,
            ord("c"): settings.cycle_color_mode,
        }

    def handle_key(self, key: int) -> bool:
        """Applies one key. Returns False when the screen should close."""
        if key == 27:
            self.settings.apply_mode_defaults()
            return False
        action = self.key_actions.get(key)
        if action is not None:
            action()
        return True

    def _lines(self) -> list[str]:
        settings = self.settings
        lines = [
            "Press Esc to exit options",
            "",
            "Press + and - to increase and decrease the number of spaces in each tab",
            f"Current number of spaces per tab: {settings.tab_width}",
            "",
            "Press shift + and shift - to increase and decrease the number of spaces after each line number",
            f"Current number of spaces after line numbers: {settings.gutter_width}",
            "",
            f'Current color mode is "{settings.color_mode_label}"',
            "Press c to change color mode",
        ]
        if curses.has_colors() and curses.COLORS < 256:
            lines += ["", "Your terminal does not support all 256 colors"]
        elif not curses.has_colors():
            lines += ["", "Your terminal does not support color"]
        return lines

    def draw(self) -> None:
        try:
            self.stdscr.erase()
            height, width = self.stdscr.getmaxyx()
            for row, text in enumerate(self._lines()[: max(0, height)]):
                self.stdscr.addstr(row, 0, text[: max(0, width - 1)])
            self.stdscr.refresh()
        except curses.error as e:
            logging.debug(f"Options screen draw error: {e}")

    def run(self) -> None:
        logging.info("Entering options screen")
        while True:
            self.draw()
            if not self.handle_key(self.stdscr.getch()):
                break
        logging.info(
            f"Leaving options screen: tab={self.settings.tab_width} "
            f"gutter={self.settings.gutter_width} mode={self.settings.color_mode}"
        )
