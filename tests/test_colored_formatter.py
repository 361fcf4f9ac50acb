"""Tests for ColoredFormatter."""

import logging
from io import StringIO

import pytest

from discord_listening_party.utils.logging import ColoredFormatter

RESET = "\033[0m"


def _make_record(level: int, message: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name="discord_listening_party.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


def _tty() -> StringIO:
    stream = StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]
    return stream


class TestColoredFormatter:
    @pytest.mark.parametrize("level", sorted(ColoredFormatter.COLORS))
    def test_color_applied_per_level(self, level, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty())

        output = fmt.format(_make_record(level))

        name = logging.getLevelName(level)
        assert output == f"{ColoredFormatter.COLORS[level]}{name}{RESET} | test"

    def test_no_color_for_non_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=StringIO())

        assert fmt.format(_make_record(logging.INFO)) == "INFO | test"

    def test_no_color_env_wins_over_tty(self, monkeypatch):
        """Should honour NO_COLOR even on a terminal."""
        monkeypatch.setenv("NO_COLOR", "1")
        fmt = ColoredFormatter("%(levelname)s", stream=_tty())

        assert fmt.format(_make_record(logging.ERROR)) == "ERROR"

    def test_forced_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        fmt = ColoredFormatter("%(levelname)s", use_color=True)

        assert fmt.format(_make_record(logging.WARNING)).startswith("\033[33m")

    def test_original_record_untouched(self):
        fmt = ColoredFormatter("%(levelname)s", use_color=True)
        record = _make_record(logging.INFO)

        fmt.format(record)

        assert record.levelname == "INFO"

    def test_dictconfig_style_construction(self):
        """logging_config.json passes fmt and datefmt as keywords."""
        fmt = ColoredFormatter(fmt="%(message)s", datefmt="%H:%M", use_color=False)

        assert fmt.format(_make_record(logging.INFO, "hello")) == "hello"
