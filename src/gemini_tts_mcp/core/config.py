"""
Configuration Management for gemini-tts-mcp.

Two kinds of configuration exist:

    Settings (process-wide, immutable):
        Built once at startup from environment variables and passed into
        the service. Holds the API credential, model ids and the default
        voice, plus the audio format of the output files.

    Config document (YAML, read per call):
        Describes the available voices, the named style templates and the
        prompt used to ask the naming model for a filename. Read on every
        listing/generation so edits apply without a restart.

Environment Variables:
    GOOGLE_API_KEY            API credential (required for generation)
    GOOGLE_NAME_MODEL         naming model (default gemini-2.0-flash)
    GOOGLE_TTS_MODEL          TTS model (default gemini-2.5-flash-preview-tts)
    GOOGLE_VOICE              default prebuilt voice (default Kore)
    GOOGLE_TTS_STYLE          default style token (default: none)
    GEMINI_TTS_CONFIG         path to the config document
    GEMINI_TTS_EXCERPT_CHARS  characters of text shown to the naming model
    GEMINI_TTS_FILENAME_MAX   max length of the derived filename stem

Example config.yaml:
    google_tts:
      name_prompt: "Generate a short, descriptive filename ..."
      voices:
        - name: Kore
          description: Firm
    speech_styles:
      news_anchor:
        description: Professional news anchor delivery
        style: Generate in a formal news-reporting tone
        prompt: "Read this like an evening news anchor: ..."
    logging:
      level: 2
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from gemini_tts_mcp.exceptions import ConfigUnavailable

__all__ = [
    "BUNDLED_CONFIG",
    "ConfigUnavailable",
    "ConfigValidationError",
    "Defaults",
    "GenerationConfig",
    "Settings",
    "StyleTemplate",
    "VoiceDescriptor",
    "load_generation_config",
    "load_settings",
    "load_style_templates",
    "load_voices",
    "parse_name_prompt",
    "parse_style_templates",
    "parse_voices",
    "read_config_document",
    "resolve_config_path",
]


class ConfigValidationError(Exception):
    """Raised when an environment override has an unusable value."""
    pass


class Defaults:
    """Centralized default values."""

    # ─────────────────────────────────────────────────────────────────────────
    # Upstream models
    # ─────────────────────────────────────────────────────────────────────────
    NAME_MODEL = "gemini-2.0-flash"
    TTS_MODEL = "gemini-2.5-flash-preview-tts"
    VOICE = "Kore"

    # ─────────────────────────────────────────────────────────────────────────
    # Filename derivation
    # ─────────────────────────────────────────────────────────────────────────
    NAME_PROMPT = "Generate a short, descriptive filename for this text content (without extension): "
    EXCERPT_CHARS = 100         # text shown to the naming model
    FILENAME_MAX = 50           # sanitized stem length
    FALLBACK_FILENAME = "tts_audio"
    AUDIO_EXTENSION = ".wav"

    # ─────────────────────────────────────────────────────────────────────────
    # Output audio (what the TTS model returns: raw PCM s16le mono 24 kHz)
    # ─────────────────────────────────────────────────────────────────────────
    SAMPLE_RATE = 24000
    CHANNELS = 1
    SAMPLE_WIDTH = 2            # bytes per sample

    CONFIG_ENV = "GEMINI_TTS_CONFIG"


BUNDLED_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


@dataclass(frozen=True)
class Settings:
    """
    Immutable process-wide settings.

    Constructed once by load_settings() and handed to SpeechService; no
    module reads the environment on its own after startup.
    """
    api_key: Optional[str] = None
    name_model: str = Defaults.NAME_MODEL
    tts_model: str = Defaults.TTS_MODEL
    default_voice: str = Defaults.VOICE
    default_style: Optional[str] = None
    config_path: Optional[str] = None
    excerpt_limit: int = Defaults.EXCERPT_CHARS
    filename_max_len: int = Defaults.FILENAME_MAX
    sample_rate: int = Defaults.SAMPLE_RATE
    channels: int = Defaults.CHANNELS
    sample_width: int = Defaults.SAMPLE_WIDTH

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    @property
    def resolved_config_path(self) -> Path:
        return resolve_config_path(self.config_path)


def _env(env: Mapping[str, str], key: str) -> Optional[str]:
    # empty strings count as unset
    value = env.get(key)
    return value if value else None


def _positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = _env(env, key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigValidationError(f"{key} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigValidationError(f"{key} must be positive, got {value}")
    return value


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read instead of os.environ (tests).
        config_path: Explicit config document path; wins over
            GEMINI_TTS_CONFIG.

    Raises:
        ConfigValidationError: If a numeric override is not a positive int.
    """
    env = os.environ if env is None else env

    return Settings(
        api_key=_env(env, "GOOGLE_API_KEY"),
        name_model=_env(env, "GOOGLE_NAME_MODEL") or Defaults.NAME_MODEL,
        tts_model=_env(env, "GOOGLE_TTS_MODEL") or Defaults.TTS_MODEL,
        default_voice=_env(env, "GOOGLE_VOICE") or Defaults.VOICE,
        default_style=_env(env, "GOOGLE_TTS_STYLE"),
        config_path=config_path or _env(env, Defaults.CONFIG_ENV),
        excerpt_limit=_positive_int(env, "GEMINI_TTS_EXCERPT_CHARS", Defaults.EXCERPT_CHARS),
        filename_max_len=_positive_int(env, "GEMINI_TTS_FILENAME_MAX", Defaults.FILENAME_MAX),
    )


# =============================================================================
# Config document: voices and style templates
# =============================================================================

@dataclass(frozen=True)
class VoiceDescriptor:
    """A prebuilt voice offered by the TTS model."""
    name: str
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True)
class StyleTemplate:
    """
    A named tone directive.

    Attributes:
        description: What the style sounds like.
        style: Short directive prefixed to the text ("<style>: <text>").
        prompt: Full illustrative prompt, published as an MCP prompt.
    """
    description: str = ""
    style: str = ""
    prompt: Optional[str] = None

    def to_dict(self, detail: bool = True) -> Dict[str, str]:
        """
        Project to a plain dict.

        With ``detail=False`` the prompt is left out; this builds a new dict
        and never touches the template itself.
        """
        out = {"description": self.description, "style": self.style}
        if detail and self.prompt is not None:
            out["prompt"] = self.prompt
        return out


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """Explicit path, then $GEMINI_TTS_CONFIG, then the bundled config.yaml."""
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.getenv(Defaults.CONFIG_ENV)
    if from_env:
        return Path(from_env).expanduser()
    return BUNDLED_CONFIG


def read_config_document(path: Path) -> Dict[str, Any]:
    """
    Read and parse the YAML config document.

    Raises:
        ConfigUnavailable: If the file is missing, unreadable, not valid YAML,
            or not a mapping at the top level.
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigUnavailable(f"config file not found: {p}", p)
    except OSError as e:
        raise ConfigUnavailable(f"config file unreadable: {p}: {e}", p)
    except yaml.YAMLError as e:
        raise ConfigUnavailable(f"config file is not valid YAML: {p}: {e}", p)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigUnavailable("Invalid config file structure", p)
    return raw


def parse_voices(document: Mapping[str, Any]) -> Tuple[VoiceDescriptor, ...]:
    """
    Extract ``google_tts.voices``.

    Raises:
        ConfigUnavailable: If the section is absent or not a list of
            mappings with a ``name``.
    """
    section = document.get("google_tts")
    voices = section.get("voices") if isinstance(section, dict) else None
    if not isinstance(voices, list):
        raise ConfigUnavailable("Invalid config file structure")

    out = []
    for entry in voices:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ConfigUnavailable(f"Invalid voice entry: {entry!r}")
        out.append(VoiceDescriptor(name=str(entry["name"]), description=str(entry.get("description", ""))))
    return tuple(out)


def parse_style_templates(document: Mapping[str, Any]) -> Mapping[str, StyleTemplate]:
    """
    Extract ``speech_styles`` as a read-only name -> StyleTemplate mapping.

    A missing section yields an empty mapping.

    Raises:
        ConfigUnavailable: If the section or one of its entries is not a
            mapping.
    """
    section = document.get("speech_styles")
    if section is None:
        return MappingProxyType({})
    if not isinstance(section, dict):
        raise ConfigUnavailable("Invalid speech_styles section")

    templates: Dict[str, StyleTemplate] = {}
    for name, entry in section.items():
        if not isinstance(entry, dict):
            raise ConfigUnavailable(f"Invalid style template: {name!r}")
        prompt = entry.get("prompt")
        templates[str(name)] = StyleTemplate(
            description=str(entry.get("description", "")),
            style=str(entry.get("style", "")),
            prompt=str(prompt) if prompt is not None else None,
        )
    return MappingProxyType(templates)


def parse_name_prompt(document: Mapping[str, Any]) -> str:
    section = document.get("google_tts")
    if isinstance(section, dict) and section.get("name_prompt"):
        return str(section["name_prompt"])
    return Defaults.NAME_PROMPT


@dataclass(frozen=True)
class GenerationConfig:
    """Per-call view of the config document used by generation."""
    templates: Mapping[str, StyleTemplate] = field(default_factory=lambda: MappingProxyType({}))
    name_prompt: str = Defaults.NAME_PROMPT


def load_voices(path: Path) -> Tuple[VoiceDescriptor, ...]:
    return parse_voices(read_config_document(path))


def load_style_templates(path: Path) -> Mapping[str, StyleTemplate]:
    return parse_style_templates(read_config_document(path))


def load_generation_config(path: Path) -> GenerationConfig:
    """
    Load templates and name prompt for one generation.

    Raises:
        ConfigUnavailable: Propagated from read/parse; the caller decides
            whether to degrade.
    """
    document = read_config_document(path)
    return GenerationConfig(
        templates=parse_style_templates(document),
        name_prompt=parse_name_prompt(document),
    )
