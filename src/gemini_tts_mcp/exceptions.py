"""gemini-tts-mcp Exception Hierarchy.

Every failure a tool invocation can report derives from TTSError, which
carries a machine-readable code next to the human-readable message. The
dispatcher turns any exception into an error envelope; TTSError subclasses
additionally contribute their code to the log line.

Hierarchy:
    TTSError (base)
    ├── ConfigUnavailable      config document missing/unparseable (absorbed)
    ├── CredentialMissing      no GOOGLE_API_KEY, fails generation only
    ├── MissingAudioData       upstream response carried no audio payload
    ├── UnknownOperation       tool name not routable
    └── ValidationError        bad tool arguments (services/validators.py)

Upstream transport/auth/quota errors are *not* wrapped: the google-genai
exception propagates unchanged and its message becomes the envelope text.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional


class ErrorCode:
    """Standardized error codes."""
    CONFIG_UNAVAILABLE = "CONFIG_UNAVAILABLE"
    CREDENTIAL_MISSING = "CREDENTIAL_MISSING"
    MISSING_AUDIO_DATA = "MISSING_AUDIO_DATA"
    UNKNOWN_OPERATION = "UNKNOWN_OPERATION"
    INVALID_INPUT = "INVALID_INPUT"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class TTSError(Exception):
    """
    Base exception with a code and optional details.

    Attributes:
        message: Human-readable error message.
        code: One of the ErrorCode constants.
        details: Extra context for logs; never shown to the MCP client.
    """

    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigUnavailable(TTSError):
    """The voice/style config document could not be used."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message, ErrorCode.CONFIG_UNAVAILABLE, {"path": str(path)} if path else None)


class CredentialMissing(TTSError):
    """No API key configured."""

    DEFAULT_MESSAGE = "Google AI API key not configured. Please set your API key in settings."

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message, ErrorCode.CREDENTIAL_MISSING)


class MissingAudioData(TTSError):
    """None of the known response layouts carried an audio payload."""

    DEFAULT_MESSAGE = "No audio data received from Google AI. Check API response structure."

    def __init__(self, message: str = DEFAULT_MESSAGE, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.MISSING_AUDIO_DATA, details)


class UnknownOperation(TTSError):
    """Requested tool name is not one of the routable operations."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("Tool not found", ErrorCode.UNKNOWN_OPERATION, {"tool": name})
