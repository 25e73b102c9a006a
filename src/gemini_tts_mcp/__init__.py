"""
gemini-tts-mcp: Gemini text-to-speech over the Model Context Protocol.

Exposes three MCP tools so an agent can produce speech without talking to
the Google Gen AI API itself:

    - generate:    text (+ optional voice/style/directory) -> path of a WAV file
    - list_voices: prebuilt voices from the config document
    - list_styles: named style templates ("news_anchor", "storyteller", ...)

Every style template with a prompt is also published as an MCP prompt, and
``tts://voice-styles/{style_name}`` serves single templates as resources.

Example Usage:
    >>> import asyncio
    >>> from gemini_tts_mcp.core.config import load_settings
    >>> from gemini_tts_mcp.services import SpeechService, GenerationRequest
    >>>
    >>> service = SpeechService(load_settings())
    >>> path = asyncio.run(service.generate(GenerationRequest(text="Hello there")))
"""

__version__ = "1.1.0"
__all__ = ["__version__"]
