"""Structured logging with configurable verbosity levels.

Provides project-wide logging configuration using Python's standard
`logging` module. Four verbosity levels map to standard (and one custom)
Python log levels, and to the level handed to uvicorn when serving:

    ========  ==============  =====  =======
    Project   Python level    Value  uvicorn
    ========  ==============  =====  =======
    QUIET     WARNING          30    warning
    NORMAL    INFO             20    info
    VERBOSE   VERBOSE (custom) 15    info
    DEBUG     DEBUG            10    debug
    ========  ==============  =====  =======

Usage:
    Configure once at application startup, then obtain named loggers
    anywhere in the codebase::

        >>> from teamhex.utils.logger import configure_logging, get_logger
        >>> configure_logging("VERBOSE")
        >>> log = get_logger("catalog.loader")
        >>> log.info("Loading teams...")

    The verbosity can also be controlled via the `TEAMHEX_LOG_LEVEL`
    environment variable (case-insensitive).  An explicit `level` argument
    to `configure_logging` takes precedence over the environment variable,
    which in turn takes precedence over the default (`NORMAL`).
"""

from __future__ import annotations

import logging
import os
import sys

# ---------------------------------------------------------------------------
# Custom VERBOSE level (between INFO=20 and DEBUG=10)
# ---------------------------------------------------------------------------

VERBOSE: int = 15
"""Custom log level between INFO and DEBUG for detailed operational output."""

logging.addLevelName(VERBOSE, "VERBOSE")

QUIET: int = logging.WARNING
"""Project verbosity that suppresses routine output (maps to WARNING=30)."""

NORMAL: int = logging.INFO
"""Default project verbosity (maps to INFO=20)."""

DEBUG: int = logging.DEBUG
"""Full diagnostic output (maps to DEBUG=10)."""

LEVEL_MAP: dict[str, int] = {
    "QUIET": QUIET,
    "NORMAL": NORMAL,
    "VERBOSE": VERBOSE,
    "DEBUG": DEBUG,
}

LOG_LEVEL_ENV: str = "TEAMHEX_LOG_LEVEL"

_ROOT_LOGGER_NAME: str = "teamhex"
_LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"

_UVICORN_LEVELS: dict[int, str] = {
    QUIET: "warning",
    NORMAL: "info",
    VERBOSE: "info",
    DEBUG: "debug",
}


def resolve_level(level: str | None = None) -> int:
    """Map a project level name to its numeric value.

    Resolution order is the explicit `level`, then ``TEAMHEX_LOG_LEVEL``,
    then ``"NORMAL"``.  Also used to validate the level in
    :class:`teamhex.config.ServerConfig`.

    Raises:
        ValueError: If the resolved level name is not recognised.
    """
    resolved: str = level if level is not None else os.environ.get(LOG_LEVEL_ENV, "NORMAL")
    resolved_upper = resolved.upper()

    if resolved_upper not in LEVEL_MAP:
        msg = f"Unknown log level {resolved!r}. Valid levels: {', '.join(sorted(LEVEL_MAP))}"
        raise ValueError(msg)

    return LEVEL_MAP[resolved_upper]


def configure_logging(level: str | None = None) -> None:
    """Configure project-wide logging with the given verbosity level.

    Args:
        level: One of ``"QUIET"``, ``"NORMAL"``, ``"VERBOSE"``, or
            ``"DEBUG"`` (case-insensitive).  ``None`` means fall through
            to the environment variable or default.

    Raises:
        ValueError: If the resolved level name is not recognised.
    """
    numeric_level = resolve_level(level)

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(numeric_level)

    # Remove existing handlers to prevent duplicates on re-call.
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)

    root.propagate = False


def uvicorn_log_level(level: str | None = None) -> str:
    """Return the uvicorn ``log_level`` matching a project level.

    uvicorn has no VERBOSE level; VERBOSE serves at ``"info"``.
    """
    return _UVICORN_LEVELS[resolve_level(level)]


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``teamhex`` hierarchy.

    Args:
        name: Dot-separated path appended to the root ``teamhex`` logger
            (e.g. ``"catalog.index"`` yields ``teamhex.catalog.index``).
    """
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
