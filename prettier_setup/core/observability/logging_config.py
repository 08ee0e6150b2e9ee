"""
Logging for the prettier-setup CLI.

Only the ``prettier_setup`` logger tree is configured; the root logger
(and whatever a host application attached to it) is left alone.
Console records go to stderr so ``--json`` output on stdout stays
machine-readable.

Console layout by level:

    WARNING and up   prettier-setup: <message>
    INFO             prettier-setup [<module>] <message>
    DEBUG            <LEVEL> <logger>:<lineno> <message>

The optional log file always gets timestamps and file:line.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "prettier_setup"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

_CONSOLE_LAYOUTS = (
    (logging.DEBUG, "%(levelname)-7s %(name)s:%(lineno)d %(message)s"),
    (logging.INFO, "prettier-setup [%(module)s] %(message)s"),
)
_CONSOLE_DEFAULT = "prettier-setup: %(message)s"

_FILE_LAYOUT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def level_number(name: str) -> int:
    """Numeric level for one of the names in LEVELS (case-insensitive)."""
    try:
        return LEVELS[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}") from None


def console_format(level: int) -> str:
    """Console layout for ``level``: more context the lower it goes."""
    for threshold, layout in _CONSOLE_LAYOUTS:
        if level <= threshold:
            return layout
    return _CONSOLE_DEFAULT


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Safe to call more than once: earlier handlers are closed and
    replaced, never stacked.

    Args:
        level: Console level name.
        log_file: Append records to this file as well.
        log_file_level: File level name (default: same as ``level``).

    Returns:
        The configured ``prettier_setup`` logger.
    """
    console_level = level_number(level)
    file_level = level_number(log_file_level) if log_file_level else console_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(console_format(console_level)))
    logger.addHandler(console)

    effective = console_level
    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8", delay=True)
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_LAYOUT, datefmt=_FILE_DATEFMT))
        logger.addHandler(fh)
        effective = min(effective, file_level)

    logger.setLevel(effective)
    logger.propagate = False
    return logger
