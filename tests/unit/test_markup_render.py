"""
Tests for the markup text renderer.
"""

from __future__ import annotations

from content_pipeline.core.services.markup_render import MarkupRenderConfig, render_markup


class TestRenderMarkup:
    """Test markup to raw HTML conversion."""

    def test_heading_and_emphasis(self) -> None:
        html = render_markup("# Title\n\nHello *world*")

        assert "<h1>Title</h1>" in html
        assert "<em>world</em>" in html

    def test_single_newline_becomes_break(self) -> None:
        """Authored line breaks are kept."""
        html = render_markup("line one\nline two")
        assert "<br" in html

    def test_without_nl2br(self) -> None:
        config = MarkupRenderConfig(extensions=())
        html = render_markup("line one\nline two", config)
        assert "<br" not in html

    def test_fenced_code(self) -> None:
        html = render_markup("```\nx < 1\n```")

        assert "<pre><code>" in html
        assert "x &lt; 1" in html

    def test_table(self) -> None:
        html = render_markup("| a | b |\n| --- | --- |\n| 1 | 2 |")

        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_empty_text(self) -> None:
        assert render_markup("") == ""

    def test_raw_html_is_not_escaped_here(self) -> None:
        """Raw HTML passes through; sanitization happens later."""
        html = render_markup("<script>alert(1)</script>")
        assert "<script>" in html

    def test_strikethrough_uses_s(self) -> None:
        """Double tildes strike text through with the allowlisted <s> element."""
        html = render_markup("~~old~~ new")

        assert html == "<p><s>old</s> new</p>"
        assert "<del>" not in html

    def test_single_tilde_is_literal(self) -> None:
        """Subscript is off, so a lone tilde stays text."""
        assert render_markup("about ~5 km") == "<p>about ~5 km</p>"

    def test_bare_url_becomes_link(self) -> None:
        html = render_markup("See https://example.com for more")
        assert 'href="https://example.com"' in html

    def test_strikethrough_needs_extension(self) -> None:
        config = MarkupRenderConfig(extensions=("nl2br",))
        assert render_markup("~~old~~", config) == "<p>~~old~~</p>"
