"""
Tests for the content rendering pipeline.

Covers dispatch, payload validation, stage composition and the end-to-end
scenarios for both content types.
"""

from __future__ import annotations

import pytest

from content_pipeline.core.services.pipeline import (
    ContentRenderer,
    PipelineConfig,
    render_content,
    render_source,
    resolve_source,
)
from content_pipeline.core.services.structured_render import StructuredRenderConfig
from content_pipeline.domain.document import (
    ContentType,
    DocumentNode,
    Heading,
    MarkupSource,
    StructuredSource,
)
from content_pipeline.domain.errors import ContentRenderError, ContentValidationError


def _para(value: str) -> dict:
    return {"type": "paragraph", "content": [{"type": "text", "text": value}]}


def _heading(level: int, value: str) -> dict:
    return {
        "type": "heading",
        "attrs": {"level": level},
        "content": [{"type": "text", "text": value}],
    }


def _doc(*children: dict) -> dict:
    return {"type": "doc", "content": list(children)}


# --- Dispatch ---


class TestResolveSource:
    """Test source selection and fail-fast validation."""

    def test_structured(self) -> None:
        source = resolve_source("structured", structured_tree=_doc(_para("x")))

        assert isinstance(source, StructuredSource)
        assert source.content_type is ContentType.STRUCTURED
        assert source.tree.kind == "doc"

    def test_markup(self) -> None:
        source = resolve_source(ContentType.MARKUP, markup_text="hi")

        assert isinstance(source, MarkupSource)
        assert source.text == "hi"

    def test_structured_accepts_node(self) -> None:
        tree = DocumentNode.from_dict(_doc(_para("x")))
        source = resolve_source("structured", structured_tree=tree)

        assert isinstance(source, StructuredSource)
        assert source.tree is tree

    def test_other_field_ignored(self) -> None:
        """Only the payload for the declared type is read."""
        source = resolve_source("markup", structured_tree=_doc(_para("x")), markup_text="m")
        assert isinstance(source, MarkupSource)

    @pytest.mark.parametrize("tree", [None, {}])
    def test_missing_tree(self, tree: dict | None) -> None:
        with pytest.raises(ContentValidationError, match="structuredTree required"):
            resolve_source("structured", structured_tree=tree, markup_text="ignored")

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_missing_markup(self, text: str | None) -> None:
        with pytest.raises(ContentValidationError, match="markupText required"):
            resolve_source("markup", structured_tree=_doc(_para("x")), markup_text=text)

    def test_unknown_type(self) -> None:
        with pytest.raises(ContentValidationError):
            resolve_source("rtf", markup_text="x")

    def test_malformed_tree(self) -> None:
        with pytest.raises(ContentRenderError):
            resolve_source("structured", structured_tree={"type": "doc", "content": "x"})

    def test_render_source_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown content source"):
            render_source("not a source")  # type: ignore[arg-type]


# --- Scenarios ---


class TestScenarios:
    """End-to-end rendering scenarios."""

    def test_markup_heading_and_words(self) -> None:
        """Markup heading feeds the TOC; body words are counted."""
        rendered = render_content("markup", markup_text="# Title\n\nHello *world*")

        assert rendered.headings == (Heading(level=1, text="Title", id="title"),)
        assert "Hello world" in rendered.plain_text
        assert rendered.word_count == 2
        assert rendered.read_time == 1
        assert '<h1 id="title">Title</h1>' in rendered.html
        assert "<em>world</em>" in rendered.html

    def test_duplicate_heading_titles(self) -> None:
        rendered = render_content(
            "structured",
            structured_tree=_doc(_heading(2, "Intro"), _para("a"), _heading(2, "Intro")),
        )
        assert [h.id for h in rendered.headings] == ["intro", "intro-2"]

    def test_javascript_image_source_dropped(self) -> None:
        rendered = render_content("markup", markup_text='<img src="javascript:alert(1)">')

        assert "<img" in rendered.html
        assert "src=" not in rendered.html
        assert "javascript" not in rendered.html

    def test_long_structured_document(self) -> None:
        """201 words need two minutes."""
        body = " ".join(["word"] * 201)
        rendered = render_content("structured", structured_tree=_doc(_para(body)))

        assert rendered.word_count == 201
        assert rendered.read_time == 2

    def test_heading_in_dropped_element_leaves_toc(self) -> None:
        """A heading removed with its noscript parent is not listed."""
        rendered = render_content("markup", markup_text="<noscript><h2>Hidden</h2></noscript>")

        assert "Hidden" not in rendered.html
        assert rendered.headings == ()

    def test_markup_strikethrough(self) -> None:
        """Tildes mark struck text and are not counted as words."""
        rendered = render_content("markup", markup_text="~~old~~ new")

        assert rendered.html == "<p><s>old</s> new</p>"
        assert rendered.word_count == 2


# --- Structured Path ---


class TestStructuredPath:
    """Test structured rendering through every stage."""

    def test_headings_capped_and_listed(self) -> None:
        rendered = render_content("structured", structured_tree=_doc(_heading(5, "Deep")))

        assert rendered.headings == (Heading(level=3, text="Deep", id="deep"),)
        assert rendered.html == '<h3 id="deep">Deep</h3>'

    def test_plain_text_from_tree(self) -> None:
        rendered = render_content(
            "structured", structured_tree=_doc(_heading(1, "Title"), _para("Body text"))
        )

        assert rendered.plain_text == "Title\n\nBody text"
        assert rendered.word_count == 3

    def test_javascript_link_neutralized(self) -> None:
        tree = _doc(
            {
                "type": "paragraph",
                "content": [
                    {
                        "type": "text",
                        "text": "click",
                        "marks": [{"type": "link", "attrs": {"href": "javascript:alert(1)"}}],
                    }
                ],
            }
        )
        rendered = render_content("structured", structured_tree=tree)

        assert "javascript" not in rendered.html
        assert ">click</a>" in rendered.html

    def test_empty_document(self) -> None:
        """A doc without content renders but reads as one minute."""
        rendered = render_content("structured", structured_tree={"type": "doc", "content": []})

        assert rendered.html == ""
        assert rendered.word_count == 0
        assert rendered.read_time == 1

    def test_custom_heading_cap(self) -> None:
        config = PipelineConfig(structured=StructuredRenderConfig(heading_max_level=6))
        rendered = render_content(
            "structured", structured_tree=_doc(_heading(5, "Deep")), config=config
        )
        assert rendered.headings[0].level == 5


# --- Renderer Service ---


class TestContentRenderer:
    """Test the renderer service."""

    def test_deterministic(self) -> None:
        """Same input renders byte-identically."""
        renderer = ContentRenderer()
        tree = _doc(_heading(1, "A"), _para("b"), _heading(2, "A"))

        first = renderer.render("structured", structured_tree=tree)
        second = renderer.render("structured", structured_tree=tree)
        assert first == second

    def test_attribute_filter_is_applied(self) -> None:
        """Headings whose anchor the filter removed leave the table of contents."""

        def no_ids(tag_name: str, attr_name: str, attr_value: str) -> str | None:
            return None if attr_name == "id" else attr_value

        renderer = ContentRenderer(attribute_filter=no_ids)
        rendered = renderer.render("markup", markup_text="## Part")

        assert rendered.html == "<h2>Part</h2>"
        assert rendered.headings == ()

    def test_permissive_filter_keeps_allowlist(self) -> None:
        """A filter that keeps every attribute still cannot let handlers through."""

        def keep_all(tag_name: str, attr_name: str, attr_value: str) -> str | None:
            return attr_value

        renderer = ContentRenderer(attribute_filter=keep_all)
        rendered = renderer.render("markup", markup_text='<p onclick="x()">hi</p>')

        assert rendered.html == "<p>hi</p>"
        assert renderer.sanitize("<p onclick='x'>a</p>") == "<p>a</p>"

    def test_sanitize(self) -> None:
        renderer = ContentRenderer()
        assert renderer.sanitize("<p onclick='x'>a</p>") == "<p>a</p>"

    def test_to_dict_wire_shape(self) -> None:
        rendered = ContentRenderer().render("markup", markup_text="## Part\n\nOne two")

        assert rendered.to_dict() == {
            "html": rendered.html,
            "headings": [{"level": 2, "text": "Part", "id": "part"}],
            "plainText": "One two",
            "wordCount": 2,
            "readTime": 1,
        }
