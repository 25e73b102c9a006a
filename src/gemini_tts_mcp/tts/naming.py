"""
Filename derivation.

The naming model is shown the first ``excerpt_limit`` characters of the
text and asked for a short descriptive name. Whatever comes back is
sanitized to ``[A-Za-z0-9_-]``, cut to ``max_len`` characters and given
the ``.wav`` extension.

An empty answer falls back to ``tts_audio``. A failing naming call does
not: the SDK exception propagates and the generation is aborted.
"""
from __future__ import annotations

import re
from typing import Any, Protocol

from gemini_tts_mcp.core.config import Defaults
from gemini_tts_mcp.core.logging import get_logger, verbose
from gemini_tts_mcp.tts.response import extract_text

_LOG = get_logger("gemini-tts-mcp.naming")

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


class NamingClient(Protocol):
    async def name(self, prompt: str) -> Any: ...


def build_naming_prompt(text: str, name_prompt: str = Defaults.NAME_PROMPT, excerpt_limit: int = Defaults.EXCERPT_CHARS) -> str:
    """``<name_prompt>"<excerpt>..."``; short texts are used whole."""
    return f'{name_prompt}"{text[:excerpt_limit]}..."'


def sanitize_filename(name: str, max_len: int = Defaults.FILENAME_MAX) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``_`` and truncate."""
    return _UNSAFE.sub("_", name)[:max_len]


async def derive_filename(
    client: NamingClient,
    text: str,
    name_prompt: str = Defaults.NAME_PROMPT,
    excerpt_limit: int = Defaults.EXCERPT_CHARS,
    max_len: int = Defaults.FILENAME_MAX,
) -> str:
    """
    Ask the naming model for a filename.

    Returns:
        Sanitized stem plus ``.wav``, e.g. ``Breaking_News_Today.wav``.

    Raises:
        Whatever the naming call raises (transport/auth/quota).
    """
    response = await client.name(build_naming_prompt(text, name_prompt, excerpt_limit))
    candidate = extract_text(response)
    if candidate is None:
        verbose(_LOG, "naming_fallback", reason="empty_candidate")
        candidate = Defaults.FALLBACK_FILENAME

    return sanitize_filename(candidate, max_len) + Defaults.AUDIO_EXTENSION
