"""Console logging for the ``lavalink_player`` loggers."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

PACKAGE_LOGGER = "lavalink_player"
HANDLER_NAME = f"{PACKAGE_LOGGER}.console"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(module_path)s | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS: dict[int, str] = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET = "\033[0m"


class ColoredFormatter(logging.Formatter):
    """Formatter for the player's console output.

    Adds ``module_path``, the logger name relative to the ``lavalink_player``
    package (``application.services.player`` rather than the full dotted
    name), and colors the level name when *stream* is a terminal. Setting
    ``NO_COLOR`` turns colors off.
    """

    def __init__(
        self,
        fmt: str | None = DEFAULT_FORMAT,
        datefmt: str | None = DEFAULT_DATEFMT,
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(fmt, datefmt=datefmt)
        self.stream = stream

    def use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        isatty = getattr(self.stream or sys.stderr, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.module_path = _relative_name(record.name)
        if self.use_color():
            color = LEVEL_COLORS.get(record.levelno, "")
            record.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(record)


def _relative_name(name: str) -> str:
    prefix = PACKAGE_LOGGER + "."
    return name[len(prefix):] if name.startswith(prefix) else name


def setup_logging(log_level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Attach a colored console handler for the ``lavalink_player`` loggers.

    Calling it again replaces the handler installed by the previous call.
    Returns the installed handler.
    """
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)
    stream = stream or sys.stderr

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(stream=stream))
    handler.set_name(HANDLER_NAME)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(resolved_level)
    return handler
