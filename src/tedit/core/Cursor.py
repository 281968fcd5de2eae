# tedit/core/Cursor.py
"""Cursor and viewport model for the tedit editor.

`CursorModel` keeps ``0 <= y < line_count`` and ``0 <= x <= len(line[y])``
against a `DocumentBuffer`. `ViewportState` keeps the cursor row on screen with
minimal scrolling (never re-centering).
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tedit.core.Document import DocumentBuffer


class CursorModel:
    """Zero-based (x, y) cursor bound to a document."""

    def __init__(self, document: "DocumentBuffer", x: int = 0, y: int = 0) -> None:
        self.document = document
        self.x = x
        self.y = y
        self.clamp()

    @property
    def position(self) -> tuple[int, int]:
        """(y, x), row first, the way the buffer addresses text."""
        return self.y, self.x

    def move_to(self, y: int, x: int) -> None:
        self.y, self.x = y, x
        self.clamp()

    def clamp(self) -> None:
        """Re-establishes the cursor invariant after an edit."""
        self.y = max(0, min(self.y, self.document.line_count - 1))
        self.x = max(0, min(self.x, self.document.line_length(self.y)))

    # --- Navigation. Out-of-range requests are silent no-ops. ---

    def up(self) -> bool:
        old = self.position
        if self.y > 0:
            self.y -= 1
        self.x = min(self.x, self.document.line_length(self.y))
        logging.debug("cursor ↑ (%d,%d)", self.y, self.x)
        return self.position != old

    def down(self) -> bool:
        old = self.position
        if self.y < self.document.line_count - 1:
            self.y += 1
        self.x = min(self.x, self.document.line_length(self.y))
        logging.debug("cursor ↓ (%d,%d)", self.y, self.x)
        return self.position != old

    def left(self) -> bool:
        old = self.position
        if self.x > 0:
            self.x -= 1
        elif self.y > 0:
            self.y -= 1
            self.x = self.document.line_length(self.y)
        logging.debug("cursor ← (%d,%d)", self.y, self.x)
        return self.position != old

    def right(self) -> bool:
        old = self.position
        if self.x < self.document.line_length(self.y):
            self.x += 1
        elif self.y < self.document.line_count - 1:
            self.y += 1
            self.x = 0
        logging.debug("cursor → (%d,%d)", self.y, self.x)
        return self.position != old


class ViewportState:
    """Scroll offset and height of the text area."""

    def __init__(self, screen_height: int = 1, scroll_offset: int = 0) -> None:
        self.screen_height = max(1, screen_height)
        self.scroll_offset = max(0, scroll_offset)

    def resize(self, screen_height: int) -> None:
        self.screen_height = max(1, screen_height)

    def recompute(self, y: int) -> int:
        """Scrolls just enough to keep row `y` visible. Returns the new offset."""
        if y < self.scroll_offset:
            self.scroll_offset = y
        if y >= self.scroll_offset + self.screen_height:
            self.scroll_offset = y - self.screen_height + 1
        return self.scroll_offset

    def visible_range(self, line_count: int) -> range:
        """Document rows drawn this frame."""
        end = min(line_count, self.scroll_offset + self.screen_height)
        return range(self.scroll_offset, end)
