"""
Input Validation for tool arguments.

The pydantic schemas in api/schemas.py check types; the functions here
check meaning and normalize values before any upstream call is made:

    - content: required, not blank, passed on unchanged
    - voice: optional, blank meaning "default voice", not checked further
    - directory: resolved to an absolute path, created if missing
    - count: a number; absent, zero or negative meaning "all"

Length limits are left to the upstream API.

All functions raise ValidationError with a machine-readable code:
    {FIELD}_REQUIRED, {FIELD}_INVALID
"""
from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Optional, Union

from gemini_tts_mcp.core.logging import get_logger, warn
from gemini_tts_mcp.exceptions import ErrorCode, TTSError

_LOG = get_logger("gemini-tts-mcp.validators")


class ValidationError(TTSError):
    """
    Raised when a tool argument is unusable.

    Attributes:
        message: Human-readable description.
        code: Field-specific code such as ``TEXT_REQUIRED``.
    """

    def __init__(self, message: str, code: str = ErrorCode.INVALID_INPUT):
        super().__init__(message, code)


def validate_text(text: Optional[str]) -> str:
    """
    Validate the text to speak.

    Returns:
        The text exactly as given.
    """
    if not text or not text.strip():
        raise ValidationError("Text content is required", "TEXT_REQUIRED")
    return text


def validate_voice(voice: Optional[str]) -> Optional[str]:
    """None/blank means "use the default voice"; anything else goes upstream as-is."""
    if not voice or not voice.strip():
        return None
    return voice


def validate_directory(directory: Optional[str]) -> Path:
    """
    Resolve the output directory.

    Args:
        directory: Target directory; None/empty means the process working
            directory. ``~`` is expanded.

    Returns:
        Absolute path of an existing directory.
    """
    if not directory:
        return Path(os.getcwd()).resolve()

    path = Path(directory).expanduser().resolve()
    if path.exists() and not path.is_dir():
        raise ValidationError(f"Output path is not a directory: {path}", "DIRECTORY_INVALID")

    if not path.exists():
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            warn(_LOG, "directory_create_failed", directory=str(path), error=str(e))
            raise ValidationError(f"Cannot create output directory {path}: {e}", "DIRECTORY_INVALID")
    return path


def validate_count(count: Optional[Union[int, float]]) -> Optional[int]:
    """
    Validate a listing limit.

    Returns:
        None for "all" (absent, zero, negative or non-finite), otherwise the
        count truncated to an integer. A fractional count below 1 gives 0.
    """
    if count is None:
        return None
    if isinstance(count, bool) or not isinstance(count, (int, float)):
        raise ValidationError(f"count must be a number, got {count!r}", "COUNT_INVALID")
    if not math.isfinite(count) or count <= 0:
        return None
    return int(count)
