"""Tests for ColoredFormatter and setup_logging."""

import logging
from io import StringIO
from unittest.mock import patch

import pytest

from lavalink_player.utils.logging import ColoredFormatter, setup_logging

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _make_record(level: int, message: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name="lavalink_player.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestColoredFormatter:
    """Tests for ANSI color formatting."""

    def _tty_formatter(self) -> ColoredFormatter:
        stream = StringIO()
        stream.isatty = lambda: True  # type: ignore[method-assign]
        return ColoredFormatter("%(levelname)s | %(message)s", stream=stream)

    @pytest.mark.parametrize("level", list(LEVEL_COLORS))
    def test_color_applied_per_level(self, level: int):
        """Should apply the correct ANSI color code for each level."""
        output = self._tty_formatter().format(_make_record(level))

        assert LEVEL_COLORS[level] in output
        assert RESET in output

    def test_no_color_when_no_color_env_set(self):
        """Should not apply colors when NO_COLOR env var is set."""
        fmt = self._tty_formatter()

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            output = fmt.format(_make_record(logging.INFO))

        assert "\033[" not in output

    def test_no_color_when_stream_not_tty(self):
        """Should not apply colors when stream is not a TTY."""
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=StringIO())

        assert "\033[" not in fmt.format(_make_record(logging.ERROR))

    def test_player_log_template_renders(self):
        """%-style player templates are interpolated by the formatter."""
        fmt = self._tty_formatter()
        record = _make_record(logging.INFO, "Player %s playing '%s'")
        record.args = (123, "Song")

        plain = fmt.format(record).replace(LEVEL_COLORS[logging.INFO], "").replace(RESET, "")

        assert plain == "INFO | Player 123 playing 'Song'"

    def test_original_record_not_mutated(self):
        """Should not mutate the original LogRecord."""
        fmt = self._tty_formatter()
        record = _make_record(logging.WARNING)
        original_levelname = record.levelname

        fmt.format(record)

        assert record.levelname == original_levelname


class TestSetupLogging:
    """Tests for the console logging setup."""

    @pytest.fixture(autouse=True)
    def _isolated_logger(self):
        yield
        logger = logging.getLogger("lavalink_player.setup_test")
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_sets_level_and_handler(self):
        logger = setup_logging("debug", logger_name="lavalink_player.setup_test")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        formatter = logger.handlers[0].formatter
        assert isinstance(formatter, ColoredFormatter)
        assert formatter._stream is logger.handlers[0].stream

    def test_repeated_setup_replaces_handler(self):
        """Calling setup twice keeps a single colored handler."""
        setup_logging("INFO", logger_name="lavalink_player.setup_test")
        logger = setup_logging("WARNING", logger_name="lavalink_player.setup_test")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging("chatty", logger_name="lavalink_player.setup_test")
        assert logger.level == logging.INFO
