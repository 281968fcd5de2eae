# tedit/integrations/Clipboard.py
"""Clipboard.py
====================
System clipboard access for the tedit editor through pyperclip, which shells
out to the platform utility (xclip, xsel, wl-copy, pbcopy, ...).

When no utility is installed, or clipboard use is disabled in the config,
paste returns an empty string and copy does nothing. The failure is logged,
never shown to the user.
"""

import logging
from typing import Any, Optional

import pyperclip


class Clipboard:
    """Thin synchronous wrapper around pyperclip with silent degradation."""

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        self.enabled: bool = bool((config or {}).get("clipboard", {}).get("enabled", True))
        self._warned = False

    def _degrade(self, operation: str, error: Exception) -> None:
        if not self._warned:
            logging.warning(
                f"System clipboard unavailable during {operation}: {error}. "
                f"Ensure a clipboard utility (xclip, xsel, wl-copy, pbcopy) is installed."
            )
            self._warned = True
        else:
            logging.debug(f"Clipboard {operation} failed: {error}")

    def paste(self) -> str:
        """Returns clipboard text, or "" when the clipboard is unavailable."""
        if not self.enabled:
            return ""
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            self._degrade("paste", e)
            return ""
        return text if isinstance(text, str) else ""

    def copy(self, text: str) -> bool:
        """Copies text to the clipboard. Returns False when it could not."""
        if not self.enabled:
            return False
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            self._degrade("copy", e)
            return False
        logging.info(f"Copied {len(text)} chars to system clipboard.")
        return True
