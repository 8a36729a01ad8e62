"""Console logging for the player package.

Player modules log through ``logging.getLogger(__name__)``; this module only
configures where those records go and how the level column looks.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "lavalink_player"


class ColoredFormatter(logging.Formatter):
    """Colours the level column when writing to a terminal.

    ``stream`` is the handler's output; colour is off when it is not a TTY
    or when ``NO_COLOR`` is set.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(fmt, datefmt)
        self._stream = stream

    def _use_color(self) -> bool:
        if "NO_COLOR" in os.environ:
            return False
        stream = self._stream or sys.stdout
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        if not self._use_color():
            return super().format(record)

        # Colour a copy; other handlers share the record.
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging(log_level: str = "INFO", logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Attach a colored console handler to the package logger.

    Calling it again replaces the handler instead of adding a second one.
    """
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColoredFormatter(LOG_FORMAT, LOG_DATE_FORMAT, stream=handler.stream))

    logger = logging.getLogger(logger_name)
    for existing in [h for h in logger.handlers if isinstance(h.formatter, ColoredFormatter)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(resolved_level)
    return logger
