# tests/conftest.py
"""Pytest configuration with shared fixtures for the tedit editor tests.

The editor core runs headless when constructed with ``stdscr=None``: no curses
setup happens and no renderer is created, so dispatcher tests need no
terminal. Renderer tests patch ``curses`` inside the module under test only.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import pytest

from tedit.core.Document import DocumentBuffer
from tedit.core.Settings import EditorSettings
from tedit.core.Tedit import Tedit
from tedit.utils.utils import DEFAULT_CONFIG


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr for testing UI components.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)  # Typical terminal size
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide the embedded default configuration, clipboard disabled.

    Returns:
        dict[str, Any]: A deep copy the test may mutate freely.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["clipboard"]["enabled"] = False
    return config


@pytest.fixture
def settings() -> EditorSettings:
    return EditorSettings()


# --- Tedit fixtures ---
@pytest.fixture
def make_editor(
    mock_config: dict[str, Any], tmp_path: Path
) -> Callable[..., Tedit]:
    """Factory for headless `Tedit` instances over an in-memory document.

    Args:
        mock_config: Editor configuration.
        tmp_path: Directory the document file name points into.

    Returns:
        Callable: ``make_editor(lines=None, filename=None) -> Tedit``.
    """

    def _make(lines: Optional[list[str]] = None, filename: Optional[str] = None) -> Tedit:
        target = tmp_path / (filename or "buffer.cpp")
        document = DocumentBuffer(lines) if lines is not None else None
        return Tedit(None, mock_config, target, document=document)

    return _make


@pytest.fixture
def sample_text() -> list[str]:
    """Provide a sample C++ snippet as a list of lines."""
    return [
        "#include <iostream>",
        "int main() {",
        '    std::cout << "hi";  // greet',
        "    return 0;",
        "}",
    ]
