"""Tests for the logging level system."""
from __future__ import annotations

import io
import json
import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch


class TestLogLevelEnum:
    """Test LogLevel enum values."""

    def test_level_enum_values(self):
        """Verify LogLevel enum has correct numeric values."""
        from gemini_tts_mcp.core.logging import LogLevel

        assert LogLevel.MINIMAL == 1
        assert LogLevel.NORMAL == 2
        assert LogLevel.VERBOSE == 3
        assert LogLevel.DEBUG == 4

    def test_level_enum_ordering(self):
        """Verify LogLevel enum supports comparison."""
        from gemini_tts_mcp.core.logging import LogLevel

        assert LogLevel.MINIMAL < LogLevel.NORMAL < LogLevel.VERBOSE < LogLevel.DEBUG


class TestLevelCoercion:
    """Test level coercion from various input types."""

    def test_level_from_int(self):
        from gemini_tts_mcp.core.logging import LogLevel, coerce_level

        assert coerce_level(1) == LogLevel.MINIMAL
        assert coerce_level(2) == LogLevel.NORMAL
        assert coerce_level(3) == LogLevel.VERBOSE
        assert coerce_level(4) == LogLevel.DEBUG

    def test_level_from_string_names(self):
        from gemini_tts_mcp.core.logging import LogLevel, coerce_level

        assert coerce_level("MINIMAL") == LogLevel.MINIMAL
        assert coerce_level("minimal") == LogLevel.MINIMAL
        assert coerce_level("normal") == LogLevel.NORMAL
        assert coerce_level("VERBOSE") == LogLevel.VERBOSE
        assert coerce_level("debug") == LogLevel.DEBUG

    def test_level_from_numeric_string(self):
        from gemini_tts_mcp.core.logging import LogLevel, coerce_level

        assert coerce_level("1") == LogLevel.MINIMAL
        assert coerce_level(" 3 ") == LogLevel.VERBOSE

    def test_level_from_python_levels(self):
        from gemini_tts_mcp.core.logging import LogLevel, coerce_level

        assert coerce_level("INFO") == LogLevel.NORMAL
        assert coerce_level("WARNING") == LogLevel.MINIMAL
        assert coerce_level(logging.WARNING) == LogLevel.MINIMAL
        assert coerce_level(logging.INFO) == LogLevel.NORMAL
        assert coerce_level(logging.DEBUG) == LogLevel.DEBUG

    def test_invalid_level_defaults_to_normal(self):
        from gemini_tts_mcp.core.logging import LogLevel, coerce_level

        assert coerce_level("invalid") == LogLevel.NORMAL
        assert coerce_level(None) == LogLevel.NORMAL
        assert coerce_level(True) == LogLevel.NORMAL


class TestLevelFiltering:
    """Test that log messages are filtered by level."""

    def test_level_filtering_minimal(self):
        """Messages above MINIMAL level are suppressed."""
        from gemini_tts_mcp.core.logging import configure_logging, debug, error, get_logger, info

        captured = io.StringIO()
        with patch("sys.stderr", captured):
            configure_logging(level=1, force=True)
            log = get_logger("test_minimal")

            info(log, "info message")
            error(log, "error message")
            debug(log, "debug message")

        output = captured.getvalue()
        assert "error message" in output
        assert "info message" not in output
        assert "debug message" not in output

    def test_level_filtering_normal(self):
        from gemini_tts_mcp.core.logging import configure_logging, debug, get_logger, info, verbose

        captured = io.StringIO()
        with patch("sys.stderr", captured):
            configure_logging(level=2, force=True)
            log = get_logger("test_normal")

            info(log, "info message")
            verbose(log, "verbose message")
            debug(log, "debug message")

        output = captured.getvalue()
        assert "info message" in output
        assert "verbose message" not in output
        assert "debug message" not in output

    def test_level_filtering_debug(self):
        """DEBUG level shows all messages."""
        from gemini_tts_mcp.core.logging import configure_logging, debug, get_logger, info, verbose

        captured = io.StringIO()
        with patch("sys.stderr", captured):
            configure_logging(level=4, force=True)
            log = get_logger("test_debug")

            info(log, "info message")
            verbose(log, "verbose message")
            debug(log, "debug message")

        output = captured.getvalue()
        assert "info message" in output
        assert "verbose message" in output
        assert "debug message" in output


class TestStdoutStaysClean:
    """stdout carries the MCP stream; logs must never reach it."""

    def test_console_logs_go_to_stderr(self):
        from gemini_tts_mcp.core.logging import configure_logging, error, get_logger, info

        out, err = io.StringIO(), io.StringIO()
        with patch("sys.stdout", out), patch("sys.stderr", err):
            configure_logging(level=4, force=True)
            log = get_logger("test_streams")
            info(log, "to stderr")
            error(log, "also to stderr")

        assert out.getvalue() == ""
        assert "to stderr" in err.getvalue()


class TestRequestIdPropagation:
    """Test that request_id is included in logs."""

    def test_request_id_in_log_output(self):
        from gemini_tts_mcp.core.logging import configure_logging, get_logger, info, set_request_id

        captured = io.StringIO()
        with patch("sys.stderr", captured):
            configure_logging(level=2, force=True)
            set_request_id("test-rid-123")
            log = get_logger("test_rid")
            info(log, "message with rid")
            set_request_id("-")

        assert "test-rid-123" in captured.getvalue()


class TestEnvOverride:
    """Test environment variable overrides."""

    def test_env_override_log_level(self):
        from gemini_tts_mcp.core.logging import LogLevel, configure_logging, get_level

        with patch.dict(os.environ, {"GEMINI_TTS_LOG_LEVEL": "3"}):
            configure_logging(force=True)
            assert get_level() == LogLevel.VERBOSE

    def test_config_document_level(self, tmp_path):
        from gemini_tts_mcp.core.logging import LogLevel, configure_logging, get_level

        config = tmp_path / "config.yaml"
        config.write_text("logging:\n  level: 4\n", encoding="utf-8")
        env = {k: v for k, v in os.environ.items() if k != "GEMINI_TTS_LOG_LEVEL"}
        env["GEMINI_TTS_CONFIG"] = str(config)
        with patch.dict(os.environ, env, clear=True):
            configure_logging(force=True)
            assert get_level() == LogLevel.DEBUG

    def test_broken_config_document_ignored(self, tmp_path):
        from gemini_tts_mcp.core.logging import LogLevel, configure_logging, get_level

        env = {k: v for k, v in os.environ.items() if k != "GEMINI_TTS_LOG_LEVEL"}
        env["GEMINI_TTS_CONFIG"] = str(tmp_path / "missing.yaml")
        with patch.dict(os.environ, env, clear=True):
            configure_logging(force=True)
            assert get_level() == LogLevel.NORMAL


class TestJsonlOutput:
    """Test JSONL file output."""

    def test_jsonl_output_format(self):
        from gemini_tts_mcp.core.logging import configure_logging, get_logger, info

        with tempfile.TemporaryDirectory() as tmpdir:
            jsonl_path = Path(tmpdir) / "test.jsonl"

            with patch.dict(os.environ, {
                "GEMINI_TTS_LOG_DIR": tmpdir,
                "GEMINI_TTS_JSONL_FILE": "test.jsonl",
            }):
                configure_logging(level=2, force=True)
                log = get_logger("test_jsonl")
                info(log, "test message", key="value", seconds=0.25)

                root = logging.getLogger()
                for handler in list(root.handlers):
                    if getattr(handler, "_gemini_tts_handler", False):
                        handler.flush()
                        handler.close()
                        root.removeHandler(handler)

            lines = [line for line in jsonl_path.read_text(encoding="utf-8").splitlines() if line]
            assert len(lines) >= 1

            records = [json.loads(line) for line in lines]
            record = next(r for r in records if r["message"] == "test message")
            assert record["level"] == 2
            assert record["tag"] == "INFO"
            assert record["seconds"] == 0.25
            assert record["extra"] == {"key": "value"}

        configure_logging(force=True)


class TestGetLevelName:
    """Test get_level_name function."""

    def test_get_level_name(self):
        from gemini_tts_mcp.core.logging import configure_logging, get_level_name

        for level, name in ((1, "MINIMAL"), (2, "NORMAL"), (3, "VERBOSE"), (4, "DEBUG")):
            configure_logging(level=level, force=True)
            assert get_level_name() == name
