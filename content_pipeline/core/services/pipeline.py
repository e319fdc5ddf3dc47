"""
Content rendering pipeline - dispatcher and stage composition.

Stages run in fixed order, each a pure function of its input:

1. resolve_source: content type + payload -> ContentSource (fail fast)
2. render_document / render_markup: source -> raw HTML
3. inject_heading_ids: raw HTML -> annotated HTML + headings
4. sanitize_html: annotated HTML -> allowlisted HTML; headings whose anchor
   did not survive are dropped from the table of contents
5. plain text, word count and read time

Errors:
- ContentValidationError: the payload required by the content type is missing
- ContentRenderError: the structured tree is internally inconsistent
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from content_pipeline.core.services.headings import inject_heading_ids, retain_anchored_headings
from content_pipeline.core.services.markup_render import (
    DEFAULT_MARKUP_CONFIG,
    MarkupRenderConfig,
    render_markup,
)
from content_pipeline.core.services.metrics import (
    DEFAULT_METRICS_CONFIG,
    MetricsConfig,
    calculate_read_time,
    count_words,
    extract_html_text,
    extract_tree_text,
)
from content_pipeline.core.services.sanitize import (
    DEFAULT_SANITIZE_CONFIG,
    AttributeFilter,
    SanitizeConfig,
    sanitize_html,
)
from content_pipeline.core.services.structured_render import (
    DEFAULT_STRUCTURED_CONFIG,
    StructuredRenderConfig,
    render_document,
)
from content_pipeline.domain.document import (
    ContentSource,
    ContentType,
    DocumentNode,
    Heading,
    MarkupSource,
    RenderedContent,
    StructuredSource,
)
from content_pipeline.domain.errors import ContentValidationError

# --- Configuration ---


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for every pipeline stage."""

    structured: StructuredRenderConfig = DEFAULT_STRUCTURED_CONFIG
    markup: MarkupRenderConfig = DEFAULT_MARKUP_CONFIG
    sanitize: SanitizeConfig = DEFAULT_SANITIZE_CONFIG
    metrics: MetricsConfig = DEFAULT_METRICS_CONFIG


DEFAULT_PIPELINE_CONFIG = PipelineConfig()


# --- Dispatcher ---


def resolve_source(
    content_type: ContentType | str,
    structured_tree: DocumentNode | dict[str, Any] | None = None,
    markup_text: str | None = None,
) -> ContentSource:
    """
    Select the rendering path for a content type.

    Raises:
        ContentValidationError: If the content type is unknown or its payload
            is missing or empty.
        ContentRenderError: If the structured tree has the wrong shape.
    """
    try:
        kind = ContentType(content_type)
    except ValueError as e:
        raise ContentValidationError(f"Unknown content type: {content_type!r}") from e

    if kind is ContentType.STRUCTURED:
        if structured_tree is None or (
            not isinstance(structured_tree, DocumentNode) and not structured_tree
        ):
            raise ContentValidationError("structuredTree required")
        if isinstance(structured_tree, DocumentNode):
            return StructuredSource(tree=structured_tree)
        return StructuredSource(tree=DocumentNode.from_dict(structured_tree))

    if not isinstance(markup_text, str) or not markup_text.strip():
        raise ContentValidationError("markupText required")
    return MarkupSource(text=markup_text)


# --- Stage Composition ---


def _measure(
    html: str,
    headings: tuple[Heading, ...],
    plain_text: str,
    config: PipelineConfig,
) -> RenderedContent:
    word_count = count_words(plain_text)
    return RenderedContent(
        html=html,
        headings=headings,
        plain_text=plain_text,
        word_count=word_count,
        read_time=calculate_read_time(word_count, config.metrics),
    )


def render_source(
    source: ContentSource,
    config: PipelineConfig = DEFAULT_PIPELINE_CONFIG,
    attribute_filter: AttributeFilter | None = None,
) -> RenderedContent:
    """
    Run stages 2-5 for a resolved source.

    Raises:
        ContentRenderError: If a structured tree cannot be rendered.
    """
    if isinstance(source, StructuredSource):
        raw_html = render_document(source.tree, config.structured)
        injection = inject_heading_ids(raw_html)
        html = sanitize_html(injection.html, config.sanitize, attribute_filter)
        headings = retain_anchored_headings(html, injection.headings)
        return _measure(html, headings, extract_tree_text(source.tree), config)

    elif isinstance(source, MarkupSource):
        raw_html = render_markup(source.text, config.markup)
        injection = inject_heading_ids(raw_html)
        html = sanitize_html(injection.html, config.sanitize, attribute_filter)
        headings = retain_anchored_headings(html, injection.headings)
        return _measure(html, headings, extract_html_text(html), config)

    else:
        raise ValueError(f"Unknown content source: {type(source)}")


def render_content(
    content_type: ContentType | str,
    structured_tree: DocumentNode | dict[str, Any] | None = None,
    markup_text: str | None = None,
    config: PipelineConfig = DEFAULT_PIPELINE_CONFIG,
) -> RenderedContent:
    """Resolve and render a content payload in one call."""
    source = resolve_source(content_type, structured_tree, markup_text)
    return render_source(source, config)


# --- Renderer Service ---


class ContentRenderer:
    """
    Content renderer service.

    Holds a pipeline configuration and renders sources with it.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        attribute_filter: AttributeFilter | None = None,
    ) -> None:
        self._config = config or DEFAULT_PIPELINE_CONFIG
        self._attribute_filter = attribute_filter

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def render(
        self,
        content_type: ContentType | str,
        structured_tree: DocumentNode | dict[str, Any] | None = None,
        markup_text: str | None = None,
    ) -> RenderedContent:
        """Validate the payload for the content type and render it."""
        source = resolve_source(content_type, structured_tree, markup_text)
        return self.render_source(source)

    def render_source(self, source: ContentSource) -> RenderedContent:
        return render_source(source, self._config, self._attribute_filter)

    def sanitize(self, html_content: str) -> str:
        return sanitize_html(html_content, self._config.sanitize, self._attribute_filter)

