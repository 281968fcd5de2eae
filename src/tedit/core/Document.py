# tedit/core/Document.py
"""Document Module for the tedit Editor
=====================================
This module provides the `DocumentBuffer` class, the in-memory store of the
edited file: an ordered list of lines with the primitive edit operations the
dispatcher applies (insert, backspace, split/merge, tab, comment prefix) plus
load and save.

Invariants:
-----------
- The buffer always holds at least one line. Loading an absent, unreadable or
  empty file yields a single empty line.
- Lines never contain ``\\n``; line boundaries are the list boundaries.

File format:
------------
Load splits on ``\\n`` the way ``getline`` does (a trailing newline does not
produce an extra empty line). Save writes every line followed by ``\\n``,
including the last, so a file without a trailing newline gains one. The
encoding is detected with chardet on load and reused on save.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import chardet

StrPath = Union[str, Path]

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75
DEFAULT_ENCODING = "utf-8"
ASCII_ALIASES = frozenset({"ascii", "us-ascii"})


## ==================== DocumentBuffer Class ====================
class DocumentBuffer:
    """Class DocumentBuffer
    =======================
    Ordered sequence of lines with edit operations addressed by (y, x).

    Attributes:
        encoding (str): Encoding used to decode the file and to write it back.

    Methods:
        load(path): Builds a buffer from a file, never empty.
        save(path): Writes every line followed by a newline.
        insert_char(y, x, ch): Inserts one character.
        delete_char_before(y, x, tab_width): Backspace policy, returns the new cursor.
        split_line(y, x): Splits a line at x, returns the new cursor.
        insert_tab(y, x, tab_width): Inserts tab_width spaces, returns the new x.
        prefix_line(y, prefix): Prepends text to a line.
        insert_text(y, x, text): Inserts possibly multi-line text, returns the new cursor.
    """

    def __init__(self, lines: Optional[list[str]] = None, encoding: str = DEFAULT_ENCODING) -> None:
        self._lines: list[str] = list(lines) if lines else [""]
        self.encoding = encoding

    # ------------------------- Loading / saving -------------------------
    @classmethod
    def load(cls, path: StrPath) -> "DocumentBuffer":
        """Reads `path` into a new buffer.

        A missing or unreadable file is not an error: the editor starts with a
        single empty line and the file is created on the first save.
        """
        try:
            with open(path, "rb") as f_binary:
                raw_data = f_binary.read()
        except OSError as e:
            logging.debug(f"load: '{path}' not readable ({e}). Starting with an empty document.")
            return cls()

        if not raw_data:
            logging.info(f"load: '{path}' is empty.")
            return cls()

        content, encoding = cls._decode(raw_data)
        lines = content.split("\n")
        if content.endswith("\n"):
            lines.pop()
        logging.info(f"Loaded '{path}': {len(lines)} lines, encoding '{encoding}'")
        return cls(lines, encoding=encoding)

    @staticmethod
    def _decode(raw_data: bytes) -> tuple[str, str]:
        """Decodes file bytes, trying the chardet guess first, then UTF-8, then Latin-1."""
        chardet_result = chardet.detect(raw_data[:CHARDET_SAMPLE_SIZE])
        encoding_guess = chardet_result.get("encoding")
        confidence = chardet_result.get("confidence") or 0.0
        logging.debug(
            f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f}"
        )

        encodings_to_try: list[str] = []
        if encoding_guess and confidence >= CHARDET_MIN_CONFIDENCE:
            # ASCII files are kept as UTF-8, its superset.
            if encoding_guess.lower() in ASCII_ALIASES:
                encoding_guess = DEFAULT_ENCODING
            encodings_to_try.append(encoding_guess)
        if DEFAULT_ENCODING not in encodings_to_try:
            encodings_to_try.append(DEFAULT_ENCODING)

        for encoding in encodings_to_try:
            try:
                return raw_data.decode(encoding), encoding
            except (UnicodeDecodeError, LookupError):
                logging.debug(f"Decoding with '{encoding}' failed, trying next fallback.")

        logging.warning("Falling back to latin-1 decoding.")
        return raw_data.decode("latin-1", errors="replace"), "latin-1"

    def save(self, path: StrPath) -> None:
        """Writes every line followed by a newline, including the last.

        Raises:
            OSError: Propagated to the caller, which reports it in the status bar.
        """
        with open(path, "w", encoding=self.encoding, errors="replace", newline="") as f:
            for line in self._lines:
                f.write(line)
                f.write("\n")
        logging.debug(f"Saved {len(self._lines)} lines to '{path}'")

    # ------------------------------ Access ------------------------------
    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        """Snapshot of the current lines."""
        return tuple(self._lines)

    def line(self, y: int) -> str:
        return self._lines[y]

    def line_length(self, y: int) -> int:
        return len(self._lines[y])

    def text(self) -> str:
        return "\n".join(self._lines)

    # ------------------------------ Editing ------------------------------
    def insert_char(self, y: int, x: int, ch: str) -> None:
        line = self._lines[y]
        self._lines[y] = line[:x] + ch + line[x:]

    def delete_char_before(self, y: int, x: int, tab_width: int) -> tuple[int, int]:
        """Backspace at (y, x). Returns the new cursor position.

        - After a space: deletes the run of spaces before the cursor, at most
          `tab_width` of them, stopping at the first non-space character.
        - After any other character: deletes exactly that character.
        - At column 0 of a non-first line: merges the line onto the previous one
          and returns the former end of the previous line.
        - At (0, 0): no-op.
        """
        if x > 0:
            line = self._lines[y]
            start = x - 1
            if line[start] == " ":
                limit = max(1, tab_width)
                while start > 0 and x - start < limit and line[start - 1] == " ":
                    start -= 1
            self._lines[y] = line[:start] + line[x:]
            return y, start

        if y > 0:
            prev_len = len(self._lines[y - 1])
            self._lines[y - 1] += self._lines.pop(y)
            return y - 1, prev_len

        return y, x

    def split_line(self, y: int, x: int) -> tuple[int, int]:
        line = self._lines[y]
        self._lines[y] = line[:x]
        self._lines.insert(y + 1, line[x:])
        return y + 1, 0

    def insert_tab(self, y: int, x: int, tab_width: int) -> int:
        spaces = " " * max(0, tab_width)
        line = self._lines[y]
        self._lines[y] = line[:x] + spaces + line[x:]
        return x + len(spaces)

    def prefix_line(self, y: int, prefix: str) -> None:
        self._lines[y] = prefix + self._lines[y]

    def insert_text(self, y: int, x: int, text: str) -> tuple[int, int]:
        """Inserts text that may contain newlines. Returns the cursor after it."""
        if not text:
            return y, x
        line = self._lines[y]
        head, tail = line[:x], line[x:]
        parts = text.split("\n")
        if len(parts) == 1:
            self._lines[y] = head + text + tail
            return y, x + len(text)

        new_lines = [head + parts[0], *parts[1:-1], parts[-1] + tail]
        self._lines[y:y + 1] = new_lines
        return y + len(parts) - 1, len(parts[-1])
