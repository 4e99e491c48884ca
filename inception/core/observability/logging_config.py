"""
Logging setup for the inception CLI.

Console records go to stderr so ``generate --json`` keeps stdout
parseable.  An optional log file records the whole cycle at DEBUG by
default, including the commands run and the captured ``go run``
output, so a failed generation can be inspected after the temp
directory is gone.

Console level precedence:
    --debug / --verbose / --quiet  >  INCEPTION_LOG_LEVEL  >  WARNING
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "INCEPTION_LOG_LEVEL"
FILE_ENV = "INCEPTION_LOG_FILE"
FILE_LEVEL_ENV = "INCEPTION_LOG_FILE_LEVEL"

DEFAULT_LEVEL = "WARNING"
DEFAULT_FILE_LEVEL = "DEBUG"

# Console formats, most detailed first; the first threshold the level reaches wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(levelname)-7s %(name)s:%(lineno)d %(message)s"),
    (logging.INFO, "[%(name)s] %(message)s"),
)
_FMT_CONSOLE = "%(levelname)s: %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# The log file opened by the last setup_logging() call
_file_handler: logging.FileHandler | None = None


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV) or DEFAULT_LEVEL


def console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt)
    return logging.Formatter(_FMT_CONSOLE)


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_file: str | os.PathLike | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for one CLI invocation.

    Replaces any handlers already on the root logger, so calling it
    again reconfigures instead of duplicating output.  A log file
    opened by an earlier call is closed.

    Args:
        level: Console level name.  Unknown names fall back to WARNING.
        log_file: Optional log file; missing parent directories are created.
        log_file_level: Level for the file, DEBUG when not given.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))

    global _file_handler

    root = logging.getLogger()
    root.handlers.clear()
    if _file_handler is not None:
        _file_handler.close()
        _file_handler = None
    root.addHandler(console)

    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level or DEFAULT_FILE_LEVEL)
        path = os.fspath(log_file)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        _file_handler = logging.FileHandler(path, encoding="utf-8")
        _file_handler.setLevel(file_level)
        _file_handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(_file_handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
