# tedit/ui/InputDecoder.py
"""InputDecoder.py
==================
Description:
-----------------------
The InputDecoder turns the raw key stream delivered by ``stdscr.getch()`` into
logical editor commands, one byte at a time. Plain bytes map straight to
commands; ESC-prefixed sequences are walked through an explicit state table
so that every recognised and unrecognised sequence is enumerable.

Escape table (``(state, byte) -> (next state, action)``):

- ``IDLE`` + ESC -> ``ESCAPE``
- ``ESCAPE`` + ESC -> quit; ``ESCAPE`` + ``[`` -> ``BRACKET``
- ``BRACKET`` + ``1`` -> ``CSI_1``
- ``CSI_1`` + ``;`` -> ``CSI_1_SEMI``, anything else -> ``SKIP_2``
- ``CSI_1_SEMI`` + ``5`` -> ``CSI_1_SEMI_5``, anything else -> ``SKIP_1``
- ``CSI_1_SEMI_5`` + ``A`` -> ctrl_up
- ``SKIP_2`` -> ``SKIP_1`` -> ``IDLE`` whatever the byte

Once ``ESC [ 1`` has been read, exactly three more bytes belong to the
sequence. Any byte with no table entry ends the sequence and is dropped.
Unrecognised sequences are never re-injected as text: on terminals where a
printable sequence can start with ESC this drops input, a known limitation.

Main Methods:
1. feed: Consumes one byte/key code and returns a Command or None.
2. reset: Returns the machine to IDLE.
3. transitions: Enumerates the escape table.
"""

import curses
import logging
from dataclasses import dataclass
from typing import Optional

from tedit.utils.logging_config import KEY_LOGGER

ESC = 27

# Logical actions understood by the dispatcher.
INSERT_CHAR = "insert_char"
BACKSPACE = "backspace"
TAB = "tab"
SPLIT = "split"
COMMENT_LINE = "comment_line"
SAVE = "save"
OPTIONS = "options"
QUIT = "quit"
CTRL_UP = "ctrl_up"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
PASTE = "paste"
COPY_LINE = "copy_line"
RESIZE = "resize"

# Decoder states.
IDLE = "IDLE"
ESCAPE = "ESCAPE"
BRACKET = "BRACKET"
CSI_1 = "CSI_1"
CSI_1_SEMI = "CSI_1_SEMI"
CSI_1_SEMI_5 = "CSI_1_SEMI_5"
SKIP_2 = "SKIP_2"
SKIP_1 = "SKIP_1"

ANY = None  # wildcard byte in the fallback table


@dataclass(frozen=True)
class Command:
    """One decoded editor command. `char` is set only for insert_char."""

    action: str
    char: str = ""


# (state, byte) -> (next state, action or None)
ESCAPE_TABLE: dict[tuple[str, int], tuple[str, Optional[str]]] = {
    (ESCAPE, ESC): (IDLE, QUIT),
    (ESCAPE, ord("[")): (BRACKET, None),
    (BRACKET, ord("1")): (CSI_1, None),
    (CSI_1, ord(";")): (CSI_1_SEMI, None),
    (CSI_1_SEMI, ord("5")): (CSI_1_SEMI_5, None),
    (CSI_1_SEMI_5, ord("A")): (IDLE, CTRL_UP),
}

# state -> next state when the byte has no entry in ESCAPE_TABLE.
ESCAPE_FALLBACK: dict[str, str] = {
    ESCAPE: IDLE,
    BRACKET: IDLE,
    CSI_1: SKIP_2,
    CSI_1_SEMI: SKIP_1,
    CSI_1_SEMI_5: IDLE,
    SKIP_2: SKIP_1,
    SKIP_1: IDLE,
}


def _build_plain_map() -> dict[int, str]:
    """Key codes decoded in IDLE state, other than printable bytes."""
    return {
        127: BACKSPACE,
        8: BACKSPACE,
        curses.KEY_BACKSPACE: BACKSPACE,
        9: TAB,
        10: SPLIT,
        13: SPLIT,
        curses.KEY_ENTER: SPLIT,
        31: COMMENT_LINE,  # Ctrl+/
        19: SAVE,  # Ctrl+S
        15: OPTIONS,  # Ctrl+O
        22: PASTE,  # Ctrl+V
        3: COPY_LINE,  # Ctrl+C
        curses.KEY_UP: UP,
        curses.KEY_DOWN: DOWN,
        curses.KEY_LEFT: LEFT,
        curses.KEY_RIGHT: RIGHT,
        curses.KEY_RESIZE: RESIZE,
    }


## ==================== InputDecoder Class ====================
class InputDecoder:
    """Finite-state decoder from key codes to `Command` objects.

    Attributes:
        state (str): Current state name, ``IDLE`` between commands.
        plain_map (dict[int, str]): IDLE-state key code -> action.
    """

    def __init__(self) -> None:
        self.state: str = IDLE
        self.plain_map: dict[int, str] = _build_plain_map()

    def reset(self) -> None:
        self.state = IDLE

    def feed(self, key: int) -> Optional[Command]:
        """Consumes one byte or curses key code.

        Returns:
            Optional[Command]: The decoded command, or None while inside an
            escape sequence, after discarding one, or for an unmapped key.
        """
        KEY_LOGGER.debug("feed: key=%r state=%s", key, self.state)

        if self.state == IDLE:
            if key == ESC:
                self.state = ESCAPE
                return None
            return self._decode_plain(key)

        next_state, action = ESCAPE_TABLE.get(
            (self.state, key), (ESCAPE_FALLBACK[self.state], None)
        )
        if action is None and next_state == IDLE:
            logging.debug("InputDecoder: discarded escape sequence ending with %r", key)
        self.state = next_state
        return Command(action) if action else None

    def _decode_plain(self, key: int) -> Optional[Command]:
        if 0x20 <= key <= 0x7E:
            return Command(INSERT_CHAR, chr(key))
        action = self.plain_map.get(key)
        if action is None:
            logging.debug("InputDecoder: ignored unmapped key %r", key)
            return None
        return Command(action)

    @staticmethod
    def transitions() -> list[tuple[str, Optional[int], str, Optional[str]]]:
        """Lists every escape transition as (state, byte or ANY, next state, action)."""
        rows: list[tuple[str, Optional[int], str, Optional[str]]] = [
            (IDLE, ESC, ESCAPE, None)
        ]
        for (state, byte), (next_state, action) in ESCAPE_TABLE.items():
            rows.append((state, byte, next_state, action))
        for state, next_state in ESCAPE_FALLBACK.items():
            rows.append((state, ANY, next_state, None))
        return rows
