"""
Style token resolution.

A style token is either the name of a configured template ("news_anchor")
or free-form instruction text ("say it like a pirate"). Template names
always win: the token is looked up first and only used literally when no
template has that exact name.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional

from gemini_tts_mcp.core.config import StyleTemplate


def resolve_style(token: Optional[str], templates: Mapping[str, StyleTemplate]) -> str:
    """
    Resolve a style token to the directive prefixed to the text.

    Returns:
        "" for a missing/empty token, the template's ``style`` on an exact
        name match, otherwise the token unchanged.
    """
    if not token:
        return ""
    template = templates.get(token)
    if template is not None:
        return template.style
    return token


def apply_style(text: str, style_text: str) -> str:
    """``"<style>: <text>"``, or the bare text when there is no style."""
    return f"{style_text}: {text}" if style_text else text


def project_templates(templates: Mapping[str, StyleTemplate], detail: bool) -> Dict[str, Dict[str, str]]:
    """Plain-dict view of the templates; ``detail=False`` drops prompts."""
    return {name: template.to_dict(detail=detail) for name, template in templates.items()}
