"""
Short, skimpy log lines for console output.

Focuses on the message and its fields; the caller is reduced to the base
file name and line number:

    DEBU[0003]views.py:41 loaded page              page=home user="Jane Doe"
"""
import logging
import os
import sys
from typing import Any, Optional

from .fields import extra_fields

MESSAGE_WIDTH = 44
"""Messages are padded to this width when fields follow them."""

RESET = "\x1b[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\x1b[37m",
    logging.INFO: "\x1b[36m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[31m",
}


def _color_for(levelno: int) -> str:
    for threshold in (logging.CRITICAL, logging.ERROR, logging.WARNING, logging.INFO):
        if levelno >= threshold:
            return LEVEL_COLORS[threshold]
    return LEVEL_COLORS[logging.DEBUG]


def _format_value(value: Any) -> str:
    text = str(value)
    if not text or any(c in text for c in ' "=\t\n'):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


class SkimpyFormatter(logging.Formatter):
    """
    Console formatter producing `LEVL[secs]file.py:line message key=value ...`.

    Args:
        colors: Wrap the level (and field keys) in ANSI colour codes.
            Default: colour only when stderr is a terminal.
    """

    def __init__(self, colors: Optional[bool] = None) -> None:
        super().__init__()
        if colors is None:
            colors = sys.stderr.isatty()
        self.colors = colors

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname[:4].upper()
        elapsed = int(record.relativeCreated / 1000)
        caller = f"{os.path.basename(record.pathname)}:{record.lineno}"
        message = record.getMessage()

        color = _color_for(record.levelno) if self.colors else ""
        if color:
            prefix = f"{color}{level}{RESET}[{elapsed:04d}]{caller}"
        else:
            prefix = f"{level}[{elapsed:04d}]{caller}"

        fields = extra_fields(record)
        parts = [prefix, " ", message]
        if fields:
            parts = [prefix, " ", message.ljust(MESSAGE_WIDTH)]
            for key in sorted(fields):
                name = f"{color}{key}{RESET}" if color else key
                parts.append(f" {name}={_format_value(fields[key])}")

        line = "".join(parts)
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        return line


def create_skimpy_logger(
    name: str, level: int = logging.DEBUG, colors: Optional[bool] = None
) -> logging.Logger:
    """Return a logger writing skimpy lines to stderr."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(SkimpyFormatter(colors=colors))
    logger.handlers = [handler]
    logger.propagate = False
    return logger
