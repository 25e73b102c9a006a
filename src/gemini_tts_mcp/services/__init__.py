"""
gemini-tts-mcp Services Layer.

Sits between the MCP tool dispatcher and the tts/ building blocks.

Components:
    - speech_service.py: SpeechService (generation pipeline + listings)
    - validators.py: Input validation functions

The SpeechService class handles:
    - Argument validation and defaulting
    - Credential check before any upstream call
    - Style resolution, naming, synthesis and the WAV write
    - Degrading to empty listings when the config document is unusable
"""
from gemini_tts_mcp.exceptions import (
    ConfigUnavailable,
    CredentialMissing,
    ErrorCode,
    MissingAudioData,
    TTSError,
    UnknownOperation,
)

from .speech_service import GenerationRequest, GenerationResult, SpeechService
from .validators import ValidationError

__all__ = [
    "SpeechService",
    "GenerationRequest",
    "GenerationResult",
    "TTSError",
    "ConfigUnavailable",
    "CredentialMissing",
    "MissingAudioData",
    "UnknownOperation",
    "ValidationError",
    "ErrorCode",
]
