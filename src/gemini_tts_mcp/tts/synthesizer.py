"""
Google Gen AI client wrapper.

GeminiSpeechClient issues the two upstream calls a generation needs:

    name()       - naming model, plain text in / text out
    synthesize() - TTS model, styled text in / audio out

Both use the async surface of google-genai (``client.aio``) so several tool
invocations can wait on the API at the same time. Nothing is retried and
no error is translated: transport, auth and quota exceptions reach the
caller exactly as the SDK raised them. The voice name is not checked
locally; the API rejects unknown voices itself.
"""
from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types

from gemini_tts_mcp.core.config import Settings
from gemini_tts_mcp.core.logging import debug, get_logger

_LOG = get_logger("gemini-tts-mcp.synthesizer")


def speech_config(voice: str) -> types.GenerateContentConfig:
    """Request config asking for audio output in a prebuilt voice."""
    return types.GenerateContentConfig(
        response_modalities=["AUDIO"],
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
            ),
        ),
    )


class GeminiSpeechClient:
    """
    Naming + TTS calls against one API key.

    Args:
        api_key: Google AI API key.
        name_model: Model id used to invent filenames.
        tts_model: Model id used for speech.
        client: Pre-built ``genai.Client`` (tests inject a mock here).
    """

    def __init__(self, api_key: str, name_model: str, tts_model: str, client: Optional[Any] = None):
        self._client = client if client is not None else genai.Client(api_key=api_key)
        self.name_model = name_model
        self.tts_model = tts_model

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiSpeechClient":
        return cls(
            api_key=settings.api_key or "",
            name_model=settings.name_model,
            tts_model=settings.tts_model,
        )

    async def name(self, prompt: str) -> Any:
        """Ask the naming model for a single text candidate."""
        debug(_LOG, "naming_request", model=self.name_model, chars=len(prompt))
        return await self._client.aio.models.generate_content(
            model=self.name_model,
            contents=prompt,
        )

    async def synthesize(self, styled_text: str, voice: str) -> Any:
        """
        Send one TTS request.

        Returns:
            The raw response; pass it to ``tts.response.extract_audio``.
        """
        debug(_LOG, "tts_request", model=self.tts_model, voice=voice, chars=len(styled_text))
        return await self._client.aio.models.generate_content(
            model=self.tts_model,
            contents=styled_text,
            config=speech_config(voice),
        )
