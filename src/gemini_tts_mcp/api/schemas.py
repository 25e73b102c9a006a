"""
MCP Tool Argument Schemas.

Pydantic models for the arguments of the three tools. They provide:
    - Type checking of the raw ``arguments`` object of ``tools/call``
    - The JSON schema published as each tool's ``inputSchema`` in
      ``tools/list``

Value rules beyond types (blank text, directory handling, ...) live in
services/validators.py so CLI and tool callers share them.

Models:
    GenerateArgs: ``generate``
    ListVoicesArgs: ``list_voices``
    ListStylesArgs: ``list_styles``

Example Arguments:
    {
        "content": "Breaking news today",
        "voice": "Kore",
        "style": "news_anchor",
        "directory": "~/Desktop"
    }
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field


class GenerateArgs(BaseModel):
    """
    Arguments of ``generate``.

    Attributes:
        content: The text to speak.

        directory: Where to save the WAV file. Defaults to the server's
            working directory; created when missing.

        voice: Prebuilt Gemini voice (e.g. "Kore", "Puck"). Not checked
            locally, the API rejects unknown names.

        style: A style template name from ``list_styles`` or free-form
            delivery instructions.
    """
    content: str = Field(
        ...,
        description="Text content to convert to speech"
    )
    directory: str | None = Field(
        default=None,
        description="Directory to save the audio file (defaults to the current directory)"
    )
    voice: str | None = Field(
        default=None,
        description="Prebuilt voice name (defaults to the configured voice)"
    )
    style: str | None = Field(
        default=None,
        description="Style template name or free-form style instructions"
    )


class ListVoicesArgs(BaseModel):
    """Arguments of ``list_voices``; ``count`` absent, 0 or negative lists all."""
    count: float | None = Field(
        default=None,
        description="Number of voices to return (omitted, 0 or negative for all)"
    )


class ListStylesArgs(BaseModel):
    detail: bool = Field(
        default=False,
        description="Include the full prompt of each style template"
    )


def input_schema(model: type[BaseModel]) -> Dict[str, Any]:
    """JSON schema for ``tools/list``, without pydantic's ``title`` noise."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema
