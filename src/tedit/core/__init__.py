# src/tedit/core/__init__.py
"""Public facade for tedit.core: re-export main classes from CamelCase modules.

Keeps the CamelCase file names (Document.py, Cursor.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Cursor import CursorModel, ViewportState  # noqa: F401
from .Document import DocumentBuffer  # noqa: F401
from .Settings import EditorSettings  # noqa: F401
from .Tedit import Tedit  # noqa: F401
from .Tokenizer import Span, tokenize_line  # noqa: F401


__all__ = [
    "CursorModel",
    "DocumentBuffer",
    "EditorSettings",
    "Span",
    "Tedit",
    "ViewportState",
    "tokenize_line",
]
