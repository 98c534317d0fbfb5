"""Console logging for the command-line tool."""
from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Union

_LOGGER_NAME = "fweh"
_ENV_VAR = "FWEH_LOG"

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"
_PLAIN_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ColorFormatter(logging.Formatter):
    """Prefix each record with a bold, colour-coded level tag."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelname, "")
        tag = f"{color}\033[1m{record.levelname:<7}{_RESET}"
        return f"{tag} {record.name}: {record.getMessage()}" + (
            "\n" + self.formatException(record.exc_info) if record.exc_info else ""
        )


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time, not at creation."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.environ.get(_ENV_VAR, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[int, str, None] = None,
                      stream: Optional[IO[str]] = None) -> logging.Logger:
    """Attach a console handler to the ``fweh`` logger and set its level.

    *level* falls back to the ``FWEH_LOG`` environment variable, then INFO.
    Calling this again only updates the level.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    if handler.stream.isatty():
        handler.setFormatter(ColorFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
