"""Tests for style token resolution."""
from __future__ import annotations

from types import MappingProxyType

import pytest

from gemini_tts_mcp.core.config import StyleTemplate
from gemini_tts_mcp.tts.styles import apply_style, project_templates, resolve_style

TEMPLATES = MappingProxyType({
    "news_anchor": StyleTemplate(
        description="Professional news anchor delivery",
        style="Generate in a formal news-reporting tone",
        prompt="Read this like an evening news anchor.",
    ),
    "cheerful": StyleTemplate(description="Upbeat", style="Say cheerfully"),
})


class TestResolveStyle:
    """Tests for resolve_style()."""

    def test_template_name_resolves_to_style(self):
        assert resolve_style("news_anchor", TEMPLATES) == "Generate in a formal news-reporting tone"

    def test_free_form_passes_through(self):
        assert resolve_style("say it like a pirate", TEMPLATES) == "say it like a pirate"

    @pytest.mark.parametrize("token", [None, ""])
    def test_empty_token(self, token):
        assert resolve_style(token, TEMPLATES) == ""

    def test_match_is_exact(self):
        assert resolve_style("News_Anchor", TEMPLATES) == "News_Anchor"

    def test_no_templates(self):
        assert resolve_style("news_anchor", {}) == "news_anchor"


class TestApplyStyle:
    """Tests for apply_style()."""

    def test_with_style(self):
        assert apply_style("Breaking news today", "Generate in a formal news-reporting tone") == (
            "Generate in a formal news-reporting tone: Breaking news today"
        )

    def test_without_style(self):
        assert apply_style("Hello", "") == "Hello"


class TestProjectTemplates:
    """Tests for project_templates()."""

    def test_detail_includes_prompt(self):
        styles = project_templates(TEMPLATES, detail=True)
        assert styles["news_anchor"]["prompt"] == "Read this like an evening news anchor."
        assert "prompt" not in styles["cheerful"]

    def test_summary_omits_prompt_without_touching_templates(self):
        styles = project_templates(TEMPLATES, detail=False)
        assert styles["news_anchor"] == {
            "description": "Professional news anchor delivery",
            "style": "Generate in a formal news-reporting tone",
        }
        assert TEMPLATES["news_anchor"].prompt == "Read this like an evening news anchor."

    def test_projection_is_a_copy(self):
        styles = project_templates(TEMPLATES, detail=True)
        styles["news_anchor"]["style"] = "changed"
        assert TEMPLATES["news_anchor"].style == "Generate in a formal news-reporting tone"
