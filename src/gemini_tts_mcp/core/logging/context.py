"""
Logging context and configuration state.

The request id lives in a ContextVar so that every log line emitted while
one tool invocation runs carries the same id, even when several invocations
are interleaved on the event loop.

Environment Variables:
    GEMINI_TTS_LOG_LEVEL:  1-4 or a level name
    GEMINI_TTS_LOG_DIR:    enables the JSONL file handler
    GEMINI_TTS_JSONL_FILE: JSONL filename (default gemini-tts-mcp.jsonl)
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

from .levels import LEVEL_NAMES, LogLevel

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_log_config: Dict[str, Any] = {}
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Request id of the current context, ``"-"`` outside an invocation."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def get_log_config() -> Dict[str, Any]:
    return _log_config


def set_log_config(config: Dict[str, Any]) -> None:
    global _log_config
    _log_config = config


def read_logging_config() -> Dict[str, Any]:
    """
    Resolve logging options.

    Priority (highest first):
        1. GEMINI_TTS_LOG_* environment variables
        2. ``logging`` section of the voice/style config document
        3. defaults applied by configure_logging()

    A missing or broken config document is not an error here; the voice
    listing reports that condition on its own.
    """
    cfg: Dict[str, Any] = {}

    from gemini_tts_mcp.core.config import ConfigUnavailable, read_config_document, resolve_config_path

    try:
        document = read_config_document(resolve_config_path())
        section = document.get("logging") or {}
        if isinstance(section, dict):
            cfg.update(section)
    except ConfigUnavailable:
        pass

    if os.getenv("GEMINI_TTS_LOG_LEVEL"):
        cfg["level"] = os.environ["GEMINI_TTS_LOG_LEVEL"]
    if os.getenv("GEMINI_TTS_LOG_DIR"):
        cfg["log_dir"] = os.environ["GEMINI_TTS_LOG_DIR"]
    if os.getenv("GEMINI_TTS_JSONL_FILE"):
        cfg["jsonl_file"] = os.environ["GEMINI_TTS_JSONL_FILE"]

    return cfg
