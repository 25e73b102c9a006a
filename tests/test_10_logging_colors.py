"""Tests for logging color output."""
from __future__ import annotations

import io
import logging
import os
from unittest.mock import MagicMock, patch

import pytest


def _record(seconds=None, tag="INFO", extra=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="test message",
        args=(),
        exc_info=None,
    )
    record.tag = tag
    record.request_id = "-"
    record.seconds = seconds
    record.extra_data = extra
    return record


@pytest.fixture
def colors_on():
    from gemini_tts_mcp.core.logging import colors

    original = colors.USE_COLORS
    colors.USE_COLORS = True
    yield
    colors.USE_COLORS = original


@pytest.fixture
def colors_off():
    from gemini_tts_mcp.core.logging import colors

    original = colors.USE_COLORS
    colors.USE_COLORS = False
    yield
    colors.USE_COLORS = original


class TestColorSupport:
    """Test color support detection."""

    def test_no_color_env_disables_colors(self):
        """GEMINI_TTS_NO_COLOR=1 disables colors."""
        from gemini_tts_mcp.core.logging import supports_color

        with patch.dict(os.environ, {"GEMINI_TTS_NO_COLOR": "1"}):
            assert supports_color() is False

    def test_no_color_standard_env(self):
        """NO_COLOR env var disables colors (standard)."""
        from gemini_tts_mcp.core.logging import supports_color

        env = os.environ.copy()
        env.pop("GEMINI_TTS_NO_COLOR", None)
        env["NO_COLOR"] = "1"
        with patch.dict(os.environ, env, clear=True):
            assert supports_color() is False

    def test_non_tty_stderr(self):
        """A redirected stderr (the usual MCP host setup) gets no colors."""
        from gemini_tts_mcp.core.logging import supports_color

        env = {k: v for k, v in os.environ.items() if k not in ("NO_COLOR", "GEMINI_TTS_NO_COLOR")}
        with patch.dict(os.environ, env, clear=True), patch("sys.stderr", io.StringIO()):
            assert supports_color() is False

    def test_tty_stderr(self):
        from gemini_tts_mcp.core.logging import supports_color

        tty = MagicMock()
        tty.isatty.return_value = True
        env = {k: v for k, v in os.environ.items() if k not in ("NO_COLOR", "GEMINI_TTS_NO_COLOR")}
        with patch.dict(os.environ, env, clear=True), patch("sys.stderr", tty), patch("sys.platform", "linux"):
            assert supports_color() is True


class TestColorCodes:
    """Test ANSI color codes are applied correctly."""

    def test_colorize_with_colors_enabled(self, colors_on):
        from gemini_tts_mcp.core.logging import Colors, colorize

        result = colorize("test", Colors.RED)
        assert result == f"{Colors.RED}test{Colors.RESET}"

    def test_colorize_with_colors_disabled(self, colors_off):
        from gemini_tts_mcp.core.logging import Colors, colorize

        assert colorize("test", Colors.RED) == "test"


class TestTagColors:
    """Test that tags get correct colors."""

    @pytest.mark.parametrize("tag,color_name", [
        ("SUCCESS", "BRIGHT_GREEN"),
        ("ERROR", "BRIGHT_RED"),
        ("FAIL", "BRIGHT_RED"),
        ("WARN", "BRIGHT_YELLOW"),
        ("INFO", "BRIGHT_CYAN"),
        ("DEBUG", "GRAY"),
        ("other", "WHITE"),
    ])
    def test_tag_color(self, tag, color_name):
        from gemini_tts_mcp.core.logging import Colors, get_tag_color

        assert get_tag_color(tag) == getattr(Colors, color_name)


class TestColoredOutput:
    """Test that colored output is produced correctly."""

    def test_output_contains_ansi_when_enabled(self):
        from gemini_tts_mcp.core.logging import colors, configure_logging, get_logger, success

        original = colors.USE_COLORS
        try:
            captured = io.StringIO()
            with patch("sys.stderr", captured):
                configure_logging(level=2, force=True)
                # configure_logging re-detects support; force it afterwards
                colors.USE_COLORS = True
                success(get_logger("test_color"), "colored success")

            assert "\033[" in captured.getvalue()
        finally:
            colors.USE_COLORS = original

    def test_output_no_ansi_when_disabled(self):
        from gemini_tts_mcp.core.logging import colors, configure_logging, get_logger, success

        original = colors.USE_COLORS
        try:
            captured = io.StringIO()
            with patch("sys.stderr", captured):
                configure_logging(level=2, force=True)
                colors.USE_COLORS = False
                success(get_logger("test_no_color"), "plain success")

            output = captured.getvalue()
            assert "\033[" not in output
            assert "plain success" in output
        finally:
            colors.USE_COLORS = original


class TestTimingColors:
    """Test that timing values get color-coded."""

    @pytest.mark.parametrize("seconds,color_name", [(0.05, "GREEN"), (2.5, "YELLOW"), (12.0, "RED")])
    def test_timing_color(self, colors_on, seconds, color_name):
        from gemini_tts_mcp.core.logging import ColoredConsoleFormatter, Colors

        output = ColoredConsoleFormatter().format(_record(seconds=seconds))
        assert f"{getattr(Colors, color_name)}{seconds:.3f}s" in output

    def test_plain_layout(self, colors_off):
        from gemini_tts_mcp.core.logging import ColoredConsoleFormatter

        output = ColoredConsoleFormatter().format(_record(seconds=1.5, extra={"tool": "generate"}))
        assert "[ INFO  ]" in output
        assert "test message 1.500s tool=generate" in output
