# tedit/core/Tokenizer.py
"""Tokenizer.py
====================
Per-line syntax highlighter for the tedit editor.

`tokenize_line` is a pure function from (line text, settings) to an ordered
list of `Span` objects. It performs a single left-to-right scan with a pending
word accumulator and an "inside line comment" flag and never touches the
screen; `DrawScreen` maps span styles to curses attributes.

Rules, checked in this order for every character:

1. ``plain`` mode: each character is its own normal span.
2. Inside a line comment: everything is comment-styled.
3. Letters, digits and ``_`` accumulate into the pending word.
4. Any other character (or end of line) flushes the pending word: a leading
   digit makes it a number; in ``cpp`` mode a word from the keyword set is a
   keyword; otherwise it is normal.
5. ``"`` opens a string that runs through the next ``"`` (or end of line).
6. ``//`` outside a string opens a line comment, slashes included.
7. ``()[]{}`` are brackets.
8. Everything else is normal.

Each flushed word, string and comment is a span of its own; consecutive
normal or bracket characters merge into one span. Joining the span texts
always gives back the line.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, NamedTuple

from tedit.core.Settings import MODE_CPP, MODE_PLAIN

if TYPE_CHECKING:
    from tedit.core.Settings import EditorSettings

STYLE_NORMAL = "normal"
STYLE_KEYWORD = "keyword"
STYLE_STRING = "string"
STYLE_COMMENT = "comment"
STYLE_NUMBER = "number"
STYLE_BRACKET = "bracket"

STYLES = (STYLE_NORMAL, STYLE_KEYWORD, STYLE_STRING, STYLE_COMMENT, STYLE_NUMBER, STYLE_BRACKET)

BRACKETS = frozenset("(){}[]")


class Span(NamedTuple):
    text: str
    style: str


def _is_word_char(ch: str) -> bool:
    return (ch.isascii() and ch.isalnum()) or ch == "_"


def _classify_word(word: str, color_mode: str, keywords: frozenset[str]) -> str:
    if "0" <= word[0] <= "9":
        return STYLE_NUMBER
    if color_mode == MODE_CPP and word in keywords:
        return STYLE_KEYWORD
    return STYLE_NORMAL


def _tokenize(line: str, color_mode: str, keywords: frozenset[str]) -> list[Span]:
    if color_mode == MODE_PLAIN:
        return [Span(ch, STYLE_NORMAL) for ch in line]

    spans: list[Span] = []
    # True while the last span is a run of single characters that may grow.
    run_open = False

    def emit_char(ch: str, style: str) -> None:
        nonlocal run_open
        if run_open and spans[-1].style == style:
            spans[-1] = Span(spans[-1].text + ch, style)
        else:
            spans.append(Span(ch, style))
        run_open = True

    def emit_block(text: str, style: str) -> None:
        nonlocal run_open
        spans.append(Span(text, style))
        run_open = False

    word_start = -1
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]

        if _is_word_char(ch):
            if word_start < 0:
                word_start = i
            i += 1
            continue

        if word_start >= 0:
            word = line[word_start:i]
            emit_block(word, _classify_word(word, color_mode, keywords))
            word_start = -1

        if ch == '"':
            end = line.find('"', i + 1)
            end = n if end < 0 else end + 1
            emit_block(line[i:end], STYLE_STRING)
            i = end
            continue

        if ch == "/" and i + 1 < n and line[i + 1] == "/":
            emit_block(line[i:], STYLE_COMMENT)
            return spans

        emit_char(ch, STYLE_BRACKET if ch in BRACKETS else STYLE_NORMAL)
        i += 1

    if word_start >= 0:
        word = line[word_start:]
        emit_block(word, _classify_word(word, color_mode, keywords))

    return spans


def tokenize_line(line: str, settings: "EditorSettings") -> list[Span]:
    """Splits one line into styled spans according to the current settings."""
    return _tokenize(line, settings.color_mode, settings.keywords)


@lru_cache(maxsize=4096)
def _tokenize_cached(line: str, color_mode: str, keywords: frozenset[str]) -> tuple[Span, ...]:
    return tuple(_tokenize(line, color_mode, keywords))


def tokenize_line_cached(line: str, settings: "EditorSettings") -> list[Span]:
    """Same result as `tokenize_line`, memoized on (line, mode, keywords)."""
    return list(_tokenize_cached(line, settings.color_mode, settings.keywords))
