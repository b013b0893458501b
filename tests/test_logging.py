"""Tests for ColoredFormatter and setup_logging."""

import logging
from io import StringIO
from unittest.mock import patch

import pytest

from lavalink_player.utils.logging import ColoredFormatter, setup_logging

RESET = "\033[0m"


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


def _tty_stream() -> StringIO:
    stream = StringIO()
    stream.isatty = lambda: True  # type: ignore[attr-defined]
    return stream


@pytest.fixture
def package_logger():
    logger = logging.getLogger("lavalink_player")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestColoredFormatter:
    """Tests for ANSI color formatting."""

    @pytest.mark.parametrize(
        ("level", "color"),
        [(logging.DEBUG, "\033[36m"), (logging.WARNING, "\033[33m"), (logging.CRITICAL, "\033[1;31m")],
    )
    def test_color_applied_per_level(self, level, color):
        """Should wrap the level name in its color on a TTY."""
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())

        output = fmt.format(_make_record(level))

        assert output.startswith(color)
        assert RESET in output

    def test_no_color_when_no_color_env_set(self):
        """Should not apply colors when NO_COLOR env var is set."""
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            output = fmt.format(_make_record(logging.INFO))

        assert "\033[" not in output

    def test_original_record_not_mutated(self):
        """Should color a copy of the record."""
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())
        record = _make_record(logging.ERROR)

        fmt.format(record)

        assert record.levelname == "ERROR"

    def test_module_path_relative_to_package(self):
        """Should show logger names relative to the package."""
        fmt = ColoredFormatter("%(module_path)s", stream=StringIO())
        record = _make_record(logging.INFO)
        record.name = "lavalink_player.application.services.player"

        assert fmt.format(record) == "application.services.player"

    def test_module_path_keeps_foreign_names(self):
        """Should leave loggers outside the package untouched."""
        fmt = ColoredFormatter("%(module_path)s", stream=StringIO())
        record = _make_record(logging.INFO)
        record.name = "asyncio"

        assert fmt.format(record) == "asyncio"

    def test_no_color_off_tty(self):
        """Should not color output written to a plain stream."""
        fmt = ColoredFormatter("%(levelname)s", stream=StringIO())

        assert fmt.format(_make_record(logging.WARNING)) == "WARNING"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_installs_handler_and_level(self, package_logger):
        """Should attach a console handler at the requested level."""
        stream = StringIO()

        handler = setup_logging("debug", stream=stream)
        logging.getLogger("lavalink_player.application.services.player").debug("sending %s", "play")

        assert handler in package_logger.handlers
        assert package_logger.level == logging.DEBUG
        assert "sending play" in stream.getvalue()
        assert "application.services.player" in stream.getvalue()
        assert "\033[" not in stream.getvalue()

    def test_repeated_setup_replaces_handler(self, package_logger):
        """Should not stack console handlers."""
        first = setup_logging("INFO", stream=StringIO())
        second = setup_logging("WARNING", stream=StringIO())

        assert first not in package_logger.handlers
        assert second in package_logger.handlers
        assert package_logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, package_logger):
        """Should use INFO for an unrecognised level name."""
        setup_logging("chatty", stream=StringIO())

        assert package_logger.level == logging.INFO
