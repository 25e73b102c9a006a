"""
Upstream Response Normalization.

The generate_content response does not have one guaranteed layout. Audio
has been observed both inside the first candidate's content parts and as
top-level inline data, and responses arrive either as google-genai model
objects (snake_case attributes, payload already decoded to bytes) or as
plain JSON dicts (camelCase keys, payload base64-encoded).

extract_audio() walks a fixed list of paths in priority order and returns
the first non-empty payload:

    1. candidates[0].content.parts[0].inlineData.data
    2. candidates[0].content.parts[0].data
    3. candidates[0].inlineData.data
    4. inlineData.data

Path segments are written in camelCase; lookup() also tries the
snake_case spelling and attribute access, so the same paths work on
both representations.
"""
from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any, Optional, Sequence, Tuple, Union

from gemini_tts_mcp.core.logging import debug, error, get_logger
from gemini_tts_mcp.exceptions import MissingAudioData

_LOG = get_logger("gemini-tts-mcp.response")

PathSegment = Union[str, int]

AUDIO_PATHS: Tuple[Tuple[PathSegment, ...], ...] = (
    ("candidates", 0, "content", "parts", 0, "inlineData", "data"),
    ("candidates", 0, "content", "parts", 0, "data"),
    ("candidates", 0, "inlineData", "data"),
    ("inlineData", "data"),
)

TEXT_PATH: Tuple[PathSegment, ...] = ("candidates", 0, "content", "parts", 0, "text")

# cap for one diagnostic log line
_DIAG_MAX_CHARS = 4000


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _step(obj: Any, segment: PathSegment) -> Any:
    if obj is None:
        return None

    if isinstance(segment, int):
        if isinstance(obj, (list, tuple)) and -len(obj) <= segment < len(obj):
            return obj[segment]
        return None

    if isinstance(obj, dict):
        if segment in obj:
            return obj[segment]
        return obj.get(_snake(segment))

    # SDK model objects; attribute names are snake_case
    value = getattr(obj, _snake(segment), None)
    if value is None:
        value = getattr(obj, segment, None)
    return value


def lookup(obj: Any, path: Sequence[PathSegment]) -> Any:
    """Follow ``path`` through dicts, lists and objects; None when any step is missing."""
    for segment in path:
        obj = _step(obj, segment)
        if obj is None:
            return None
    return obj


def _decode(payload: Any) -> Optional[bytes]:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload) or None
    if isinstance(payload, str) and payload:
        return base64.b64decode(payload)
    return None


def describe_response(response: Any) -> str:
    """Best-effort JSON rendering of a response for logs; audio blobs elided."""
    if hasattr(response, "model_dump"):
        try:
            response = response.model_dump(mode="json", exclude_none=True)
        except (TypeError, ValueError):
            return repr(response)[:_DIAG_MAX_CHARS]
    try:
        rendered = json.dumps(response, default=lambda o: f"<{type(o).__name__}>", ensure_ascii=False)
    except (TypeError, ValueError):
        rendered = repr(response)
    # elide base64 blobs
    rendered = re.sub(r'"([A-Za-z0-9+/=]{200,})"', lambda m: f'"<{len(m.group(1))} chars>"', rendered)
    return rendered[:_DIAG_MAX_CHARS]


def extract_audio(response: Any) -> bytes:
    """
    Return the decoded audio payload of a TTS response.

    Raises:
        MissingAudioData: If no path yields a non-empty payload, or the
            payload is not valid base64. The raw structure is logged; it is
            not attached to the exception message.
    """
    for index, path in enumerate(AUDIO_PATHS, start=1):
        payload = lookup(response, path)
        if not payload:
            continue
        try:
            audio = _decode(payload)
        except (binascii.Error, ValueError) as e:
            error(_LOG, "audio_payload_undecodable", path=index, error=str(e))
            raise MissingAudioData(details={"path": index, "reason": "invalid base64"})
        if audio:
            debug(_LOG, "audio_payload_found", path=index, bytes=len(audio))
            return audio

    error(
        _LOG,
        "missing_audio_data",
        candidates=describe_response(lookup(response, ("candidates",))),
        response=describe_response(response),
    )
    raise MissingAudioData()


def extract_text(response: Any) -> Optional[str]:
    """First candidate's first text part, stripped; None if absent or blank."""
    text = lookup(response, TEXT_PATH)
    if not isinstance(text, str):
        return None
    text = text.strip()
    return text or None
