"""Log output for the pugwrap CLI.

pugwrap modules attach a ``pug`` mapping to their records through
``extra={"pug": {...}}``: the executable, its argument tokens, the template
source and the exit code of each compiler run. The formatters here decide
how much of it to show:

- console: ``[LEVEL] message``; with timestamps (``--verbose``) the time
  follows the level and the pug fields are appended as ``key=value`` pairs
- JSON lines (``--ci``): one object per record, pug fields under ``"pug"``

Everything is written to stderr; stdout carries the rendered markup.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

PUG_FIELD = "pug"

_RESET = "\033[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}


def pug_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the compiler fields attached to a record (empty if none)."""
    return getattr(record, PUG_FIELD, None) or {}


class ConsoleFormatter(logging.Formatter):
    """Formats records for a terminal."""

    def __init__(self, use_colors: bool = False, timestamps: bool = False) -> None:
        super().__init__()
        self.use_colors = use_colors
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        label = f"[{record.levelname}]"
        if self.use_colors:
            label = f"{_LEVEL_COLORS.get(record.levelno, _RESET)}{label}{_RESET}"
        if self.timestamps:
            label += datetime.fromtimestamp(record.created).strftime("[%H:%M:%S]")

        line = f"{label} {record.getMessage()}"

        fields = pug_fields(record)
        if self.timestamps and fields:
            details = " ".join(f"{key}={value}" for key, value in fields.items())
            line = f"{line} ({details})"
        return line


class JSONFormatter(logging.Formatter):
    """Formats records as JSON lines for CI logs."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = pug_fields(record)
        if fields:
            entry[PUG_FIELD] = fields
        return json.dumps(entry, default=str)


def get_logger(name: str = "pugwrap") -> logging.Logger:
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    json_lines: bool = False,
    timestamps: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Attach a single stderr handler to the "pugwrap" logger.

    Args:
        level: Minimum log level
        json_lines: Emit JSON lines instead of console text
        timestamps: Add times and pug fields to console lines
        stream: Output stream (default: stderr)
    """
    stream = stream or sys.stderr

    if json_lines:
        formatter: logging.Formatter = JSONFormatter()
    else:
        use_colors = hasattr(stream, "isatty") and stream.isatty()
        formatter = ConsoleFormatter(use_colors=use_colors, timestamps=timestamps)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    logger = get_logger()
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)


def configure_from_cli(verbose: bool = False, quiet: bool = False, ci: bool = False) -> None:
    """Map the global CLI flags onto setup_logging.

    --quiet wins over --verbose for the level; --ci selects JSON lines.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(level=level, json_lines=ci, timestamps=verbose)
