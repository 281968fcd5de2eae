# tedit/core/Settings.py
"""Settings.py
====================
EditorSettings: the explicit, process-wide configuration object of the editor.

One instance is created at start-up from the merged TOML configuration and is
passed by reference into the dispatcher, the renderer and the tokenizer. Only
the options sub-screen mutates it, through the methods below.

Per-mode keyword defaults
-------------------------
Leaving the options screen restores the keyword set from
``DEFAULT_KEYWORDS_BY_MODE``: the ``cpp`` mode gets the built-in C/C++ list,
``plain`` and ``programming`` get an empty set.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

# Mode identifier -> label shown on the options screen. Order is the cycle order.
COLOR_MODES: dict[str, str] = {
    "plain": "plain text",
    "cpp": "c++",
    "programming": "programming",
}

MODE_PLAIN = "plain"
MODE_CPP = "cpp"
MODE_PROGRAMMING = "programming"

CPP_KEYWORDS: tuple[str, ...] = (
    "int", "void", "if", "else", "return", "while", "for", "class", "struct",
    "do", "unsigned", "signed", "bool", "char", "continue", "break", "true",
    "false", "include", "define", "namespace", "using",
)

DEFAULT_KEYWORDS_BY_MODE: dict[str, tuple[str, ...]] = {
    MODE_PLAIN: (),
    MODE_CPP: CPP_KEYWORDS,
    MODE_PROGRAMMING: (),
}

DEFAULT_TAB_WIDTH = 4
DEFAULT_GUTTER_WIDTH = 5
MIN_GUTTER_WIDTH = 5


@dataclass
class EditorSettings:
    """Tab width, gutter width, color mode and keyword set."""

    tab_width: int = DEFAULT_TAB_WIDTH
    gutter_width: int = DEFAULT_GUTTER_WIDTH
    color_mode: str = MODE_CPP
    keywords: frozenset[str] = field(default_factory=lambda: frozenset(CPP_KEYWORDS))
    min_gutter_width: int = MIN_GUTTER_WIDTH

    @classmethod
    def from_config(cls, config: Optional[dict[str, Any]] = None) -> "EditorSettings":
        """Builds settings from the ``[editor]`` table, falling back per key."""
        editor_cfg = (config or {}).get("editor", {})

        tab_width = editor_cfg.get("tab_width", DEFAULT_TAB_WIDTH)
        if not isinstance(tab_width, int) or isinstance(tab_width, bool) or tab_width < 0:
            logging.warning(f"Invalid tab_width {tab_width!r} in config. Using {DEFAULT_TAB_WIDTH}.")
            tab_width = DEFAULT_TAB_WIDTH

        gutter_width = editor_cfg.get("gutter_width", DEFAULT_GUTTER_WIDTH)
        if (
            not isinstance(gutter_width, int)
            or isinstance(gutter_width, bool)
            or gutter_width < MIN_GUTTER_WIDTH
        ):
            logging.warning(
                f"Invalid gutter_width {gutter_width!r} in config. Using {DEFAULT_GUTTER_WIDTH}."
            )
            gutter_width = DEFAULT_GUTTER_WIDTH

        color_mode = editor_cfg.get("color_mode", MODE_CPP)
        if color_mode not in COLOR_MODES:
            logging.warning(f"Unknown color_mode {color_mode!r} in config. Using {MODE_CPP!r}.")
            color_mode = MODE_CPP

        keywords = editor_cfg.get("keywords")
        if keywords is None:
            keywords = DEFAULT_KEYWORDS_BY_MODE[color_mode]
        elif not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            logging.warning("Invalid keywords list in config. Using mode defaults.")
            keywords = DEFAULT_KEYWORDS_BY_MODE[color_mode]

        return cls(
            tab_width=tab_width,
            gutter_width=gutter_width,
            color_mode=color_mode,
            keywords=frozenset(keywords),
        )

    @property
    def color_mode_label(self) -> str:
        return COLOR_MODES[self.color_mode]

    # --- Mutators used by the options screen ---

    def increase_tab_width(self) -> None:
        self.tab_width += 1

    def decrease_tab_width(self) -> None:
        if self.tab_width > 0:
            self.tab_width -= 1

    def increase_gutter_width(self) -> None:
        self.gutter_width += 1

    def decrease_gutter_width(self) -> None:
        if self.gutter_width > self.min_gutter_width:
            self.gutter_width -= 1

    def cycle_color_mode(self) -> None:
        modes = list(COLOR_MODES)
        self.color_mode = modes[(modes.index(self.color_mode) + 1) % len(modes)]
        logging.debug(f"Color mode cycled to '{self.color_mode}'")

    def apply_mode_defaults(self) -> None:
        """Resets the keyword set from the per-mode default table."""
        self.keywords = frozenset(DEFAULT_KEYWORDS_BY_MODE.get(self.color_mode, ()))
        logging.debug(
            f"Keyword set reset for mode '{self.color_mode}': {len(self.keywords)} keywords"
        )
