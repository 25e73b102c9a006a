"""Shared fixtures: a small config document, settings and a fake upstream client."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from gemini_tts_mcp.core.config import Settings

from fakes import audio_response, make_pcm, text_response

SAMPLE_CONFIG = """\
google_tts:
  name_prompt: "Name this: "
  voices:
    - {name: Zephyr, description: Bright}
    - {name: Puck, description: Upbeat}
    - {name: Charon, description: Informative}
    - {name: Kore, description: Firm}
    - {name: Fenrir, description: Excitable}
speech_styles:
  news_anchor:
    description: Professional news anchor delivery
    style: Generate in a formal news-reporting tone
    prompt: Read the following like an evening news anchor.
  cheerful:
    description: Upbeat and friendly
    style: Say cheerfully
  whisper:
    description: Quiet whisper
    style: Whisper this softly
    prompt: Whisper the following.
"""


@pytest.fixture
def config_file(tmp_path_factory: pytest.TempPathFactory) -> Path:
    path = tmp_path_factory.mktemp("cfg") / "config.yaml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def settings(config_file: Path) -> Settings:
    return Settings(api_key="test-key", config_path=str(config_file))


@pytest.fixture
def pcm() -> bytes:
    return make_pcm()


@pytest.fixture
def fake_client(pcm: bytes) -> MagicMock:
    """Stand-in for GeminiSpeechClient with canned naming/TTS responses."""
    client = MagicMock()
    client.name = AsyncMock(return_value=text_response("Breaking News Today"))
    client.synthesize = AsyncMock(return_value=audio_response(pcm))
    return client
