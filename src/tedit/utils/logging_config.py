# tedit/utils/logging_config.py
"""tedit.utils.logging_config
============================

Logging setup for the tedit editor, driven by the ``[logging]`` table of the
configuration:

========================  =========  ==================================================
key                       default    meaning
========================  =========  ==================================================
``directory``             ``""``     where log files go ("" is the working directory)
``file_level``            DEBUG      threshold of ``editor.log``
``log_to_console``        false      also log to stderr (curses owns the terminal)
``console_level``         WARNING    threshold of the stderr handler
``separate_error_log``    false      also write ERROR and above to ``error.log``
========================  =========  ==================================================

Setting ``TEDIT_KEYTRACE=1`` in the environment writes every key fed to the
input decoder to ``keytrace.log`` through `KEY_LOGGER`.

If the log directory cannot be created, logs go to the system temp directory.
Setup never raises: handler failures are reported on stderr and the editor
keeps running with whatever handlers could be opened.
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional

KEY_LOGGER = logging.getLogger("tedit.keyevents")

MAIN_LOG = "editor.log"
ERROR_LOG = "error.log"
KEYTRACE_LOG = "keytrace.log"
KEYTRACE_ENV = "TEDIT_KEYTRACE"

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"


def _level(name: Any, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def _log_directory(configured: str) -> str:
    """Returns a usable log directory, creating it when needed."""
    if not configured:
        return ""
    directory = os.path.expanduser(configured)
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        print(f"Error creating log directory '{directory}': {e}", file=sys.stderr)
        directory = tempfile.gettempdir()
        print(f"Logging to temporary directory: '{directory}'", file=sys.stderr)
    return directory


def _rotating_handler(
    path: str, level: int, max_bytes: int, backups: int, fmt: str = FILE_FORMAT
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
    except OSError as e:
        print(f"Error setting up log file '{path}': {e}", file=sys.stderr)
        return None
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def _setup_key_trace(directory: str) -> None:
    """Routes `KEY_LOGGER` to keytrace.log, or silences it."""
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []

    enabled = os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}
    handler = None
    if enabled:
        handler = _rotating_handler(
            os.path.join(directory, KEYTRACE_LOG),
            logging.DEBUG,
            1024 * 1024,
            3,
            fmt="%(asctime)s - %(message)s",
        )

    if handler is not None:
        KEY_LOGGER.addHandler(handler)
        KEY_LOGGER.disabled = False
        logging.info(f"Key event tracing enabled, logging to '{handler.baseFilename}'.")
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Installs the editor's log handlers on the root logger.

    Existing root handlers are removed first, so calling this twice does not
    duplicate records.

    Args:
        config (dict | None): Application configuration; only ``["logging"]``
            is read.
    """
    log_cfg = (config or {}).get("logging", {})
    directory = _log_directory(str(log_cfg.get("directory", "") or ""))
    file_level = _level(log_cfg.get("file_level", "DEBUG"), logging.DEBUG)

    handlers: list[logging.Handler] = []

    main_handler = _rotating_handler(os.path.join(directory, MAIN_LOG), file_level, 2 * 1024 * 1024, 5)
    if main_handler:
        handlers.append(main_handler)

    if log_cfg.get("log_to_console", False):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console.setLevel(_level(log_cfg.get("console_level", "WARNING"), logging.WARNING))
        handlers.append(console)

    if log_cfg.get("separate_error_log", False):
        error_handler = _rotating_handler(
            os.path.join(directory, ERROR_LOG), logging.ERROR, 1024 * 1024, 3
        )
        if error_handler:
            handlers.append(error_handler)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(file_level)

    _setup_key_trace(directory)

    logging.info(
        "Logging ready: level %s, handlers %s",
        logging.getLevelName(file_level),
        [type(h).__name__ for h in handlers],
    )
