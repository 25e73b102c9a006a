"""
SpeechService - the three tool operations.

Architecture (generate):
    Validate → Resolve style → Derive filename → Synthesize → Extract audio → Write WAV

    The stages run strictly one after another; each await is a suspend
    point where other invocations may progress. Nothing is shared between
    invocations except the read-only Settings.

Listings:
    list_voices() and list_styles() read the config document on every call.
    A missing or broken document degrades to an empty result with a
    warning instead of an error; generation, by contrast, reports every
    failure explicitly.

Error Handling:
    - ValidationError: bad arguments
    - CredentialMissing: no API key, checked before any upstream call or
      filesystem write
    - MissingAudioData: response carried no audio
    - SDK exceptions: propagated unchanged

Example:
    >>> service = SpeechService(load_settings())
    >>> result = await service.generate(
    ...     GenerationRequest(text="Breaking news today", style="news_anchor")
    ... )
    >>> result.path
    PosixPath('/home/me/Breaking_News_Today.wav')
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from gemini_tts_mcp.core.config import (
    GenerationConfig,
    Settings,
    StyleTemplate,
    VoiceDescriptor,
    load_generation_config,
    load_style_templates,
    load_voices,
)
from gemini_tts_mcp.core.logging import get_logger, info, success, verbose, warn
from gemini_tts_mcp.exceptions import ConfigUnavailable, CredentialMissing
from gemini_tts_mcp.services.validators import (
    validate_count,
    validate_directory,
    validate_text,
    validate_voice,
)
from gemini_tts_mcp.tts.naming import derive_filename
from gemini_tts_mcp.tts.response import extract_audio
from gemini_tts_mcp.tts.storage import write_wav
from gemini_tts_mcp.tts.styles import apply_style, project_templates, resolve_style
from gemini_tts_mcp.tts.synthesizer import GeminiSpeechClient
from gemini_tts_mcp.utils.timeit import StageTimer

_LOG = get_logger("gemini-tts-mcp.service")

ClientFactory = Callable[[Settings], GeminiSpeechClient]


# =============================================================================
# Request/Response Dataclasses
# =============================================================================

@dataclass
class GenerationRequest:
    """
    Arguments of one ``generate`` invocation.

    Attributes:
        text: Text to speak (required).
        voice: Prebuilt voice; None uses Settings.default_voice.
        directory: Output directory; None uses the working directory.
        style: Template name or free-form style text; None uses
            Settings.default_style, "" forces no style.
    """
    text: str
    voice: Optional[str] = None
    directory: Optional[str] = None
    style: Optional[str] = None


@dataclass
class GenerationResult:
    """
    A completed generation. Failures are raised, never returned.

    Attributes:
        path: Absolute path of the written WAV file.
        voice: Voice actually used.
        styled_text: Exact text sent to the TTS model.
        audio_bytes: Size of the raw PCM payload.
        timings: Per-stage durations in seconds.
    """
    path: Path
    voice: str
    styled_text: str
    audio_bytes: int
    timings: Dict[str, float] = field(default_factory=dict)


# =============================================================================
# Main Service Class
# =============================================================================

class SpeechService:
    """
    Gemini TTS operations behind the MCP tools.

    Args:
        settings: Process-wide settings from load_settings().
        client_factory: Builds the upstream client for a generation; a new
            client is created per call so no connection state is shared.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory = GeminiSpeechClient.from_settings):
        self._settings = settings
        self._client_factory = client_factory

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def config_path(self) -> Path:
        return self._settings.resolved_config_path

    # =========================================================================
    # Config access (degrading)
    # =========================================================================

    def voices(self) -> List[VoiceDescriptor]:
        try:
            return list(load_voices(self.config_path))
        except ConfigUnavailable as e:
            warn(_LOG, "voices_unavailable", path=str(self.config_path), error=e.message)
            return []

    def style_templates(self) -> Mapping[str, StyleTemplate]:
        try:
            return load_style_templates(self.config_path)
        except ConfigUnavailable as e:
            warn(_LOG, "styles_unavailable", path=str(self.config_path), error=e.message)
            return {}

    def _generation_config(self) -> GenerationConfig:
        try:
            return load_generation_config(self.config_path)
        except ConfigUnavailable as e:
            warn(_LOG, "generation_config_unavailable", path=str(self.config_path), error=e.message)
            return GenerationConfig()

    # =========================================================================
    # Operations
    # =========================================================================

    def list_voices(self, count: Optional[float] = None) -> List[VoiceDescriptor]:
        """
        Configured voices in document order.

        Args:
            count: Return only the first ``int(count)`` voices; None, zero
                or negative for all.
        """
        limit = validate_count(count)
        voices = self.voices()
        if limit is not None:
            voices = voices[:limit]
        verbose(_LOG, "voices_listed", count=len(voices))
        return voices

    def list_styles(self, detail: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Style templates as plain dicts.

        Args:
            detail: Include each template's full ``prompt``.
        """
        styles = project_templates(self.style_templates(), detail=bool(detail))
        verbose(_LOG, "styles_listed", count=len(styles), detail=bool(detail))
        return styles

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Synthesize speech and write it to a WAV file.

        Raises:
            ValidationError: Blank text or unusable directory.
            CredentialMissing: No API key configured.
            MissingAudioData: The TTS response had no audio.
            Exception: Upstream SDK errors, unchanged.
        """
        settings = self._settings
        timer = StageTimer()

        text = validate_text(request.text)
        voice = validate_voice(request.voice) or settings.default_voice
        style_token = request.style
        if style_token is None:
            style_token = settings.default_style

        if not settings.has_credentials:
            raise CredentialMissing()

        directory = validate_directory(request.directory)
        gen_config = self._generation_config()
        style_text = resolve_style(style_token, gen_config.templates)

        info(_LOG, "generate_start", chars=len(text), voice=voice, style=style_token or "-")

        client = self._client_factory(settings)

        with timer.stage("naming"):
            filename = await derive_filename(
                client,
                text,
                name_prompt=gen_config.name_prompt,
                excerpt_limit=settings.excerpt_limit,
                max_len=settings.filename_max_len,
            )
        verbose(_LOG, "filename_derived", filename=filename, seconds=timer.timings["naming"])

        styled_text = apply_style(text, style_text)
        with timer.stage("tts"):
            response = await client.synthesize(styled_text, voice)
        verbose(_LOG, "tts_response", seconds=timer.timings["tts"])

        audio = extract_audio(response)

        with timer.stage("write"):
            path = await asyncio.to_thread(
                write_wav,
                directory / filename,
                audio,
                settings.sample_rate,
                settings.channels,
                settings.sample_width,
            )

        success(_LOG, "speech_saved", path=str(path), bytes=len(audio), seconds=timer.total)
        return GenerationResult(
            path=path,
            voice=voice,
            styled_text=styled_text,
            audio_bytes=len(audio),
            timings=dict(timer.timings),
        )
