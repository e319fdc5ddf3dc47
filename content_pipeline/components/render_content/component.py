"""
Render content component - authored content to sanitized HTML.

Handles dispatch on the content type, rendering, heading id injection,
sanitization and metrics.

Invariants:
- I1: Output HTML contains only allowlisted tags and attributes
- I2: Heading ids are unique within a render and stable across renders
- I3: read_time == max(1, ceil(word_count / words_per_minute))
- I4: Missing payloads fail before any rendering work
"""

from __future__ import annotations

from content_pipeline.core.services.headings import inject_heading_ids
from content_pipeline.core.services.markup_render import MarkupRenderConfig
from content_pipeline.core.services.metrics import MetricsConfig
from content_pipeline.core.services.pipeline import (
    DEFAULT_PIPELINE_CONFIG,
    ContentRenderer,
    PipelineConfig,
)
from content_pipeline.core.services.sanitize import SanitizeConfig
from content_pipeline.core.services.structured_render import StructuredRenderConfig
from content_pipeline.domain.errors import ContentPipelineError

from .models import (
    ExtractHeadingsInput,
    HeadingsOutput,
    RenderContentError,
    RenderContentInput,
    RenderContentOutput,
    SanitizeHtmlInput,
    SanitizeOutput,
)
from .ports import RulesPort


def _convert_error(error: ContentPipelineError) -> RenderContentError:
    """Convert a pipeline exception to a component error."""
    return RenderContentError(code=error.code, message=error.message, path=error.path)


def build_config(rules: RulesPort | None) -> PipelineConfig:
    """Build pipeline config from rules port."""
    if rules is None:
        return DEFAULT_PIPELINE_CONFIG

    sanitizer = rules.get_sanitizer_rules()
    structured = rules.get_structured_rules()
    markup = rules.get_markup_rules()
    metrics = rules.get_metrics_rules()

    return PipelineConfig(
        structured=StructuredRenderConfig(
            heading_max_level=structured.heading_max_level,
            link_rel=structured.link_rel,
            link_target=structured.link_target,
            image_loading=structured.image_loading,
            video_embed_host=structured.video_embed_host,
        ),
        markup=MarkupRenderConfig(
            extensions=tuple(markup.extensions),
            extension_configs=markup.extension_configs,
        ),
        sanitize=SanitizeConfig(
            allowed_tags=frozenset(sanitizer.allowed_tags),
            allowed_attributes=frozenset(sanitizer.allowed_attributes),
            image_src_prefixes=tuple(sanitizer.image_src_prefixes),
            iframe_src_prefixes=tuple(sanitizer.iframe_src_prefixes),
            drop_content_tags=frozenset(sanitizer.drop_content_tags),
        ),
        metrics=MetricsConfig(words_per_minute=metrics.words_per_minute),
    )


# --- Component Entry Points ---


def run_render(
    inp: RenderContentInput,
    *,
    rules: RulesPort | None = None,
) -> RenderContentOutput:
    """
    Render a content payload.

    Args:
        inp: Input containing the content type and its payload.
        rules: Optional rules port for configuration.

    Returns:
        RenderContentOutput with the rendered projection, or errors when the
        payload is missing or the structured tree is invalid.
    """
    renderer = ContentRenderer(config=build_config(rules))

    try:
        rendered = renderer.render(
            inp.content_type,
            structured_tree=inp.structured_tree,
            markup_text=inp.markup_text,
        )
    except ContentPipelineError as e:
        return RenderContentOutput(rendered=None, errors=[_convert_error(e)], success=False)

    return RenderContentOutput(rendered=rendered, errors=[], success=True)


def run_extract_headings(
    inp: ExtractHeadingsInput,
    *,
    rules: RulesPort | None = None,
) -> HeadingsOutput:
    """
    Assign heading ids and build the table of contents.

    Args:
        inp: Input containing raw HTML.
        rules: Unused; accepted for a uniform entry point signature.

    Returns:
        HeadingsOutput with annotated HTML and headings.
    """
    injection = inject_heading_ids(inp.html)
    return HeadingsOutput(html=injection.html, headings=injection.headings)


def run_sanitize(
    inp: SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """Sanitize an HTML fragment against the configured allowlist."""
    renderer = ContentRenderer(config=build_config(rules))
    return SanitizeOutput(html=renderer.sanitize(inp.html))


def run(
    inp: RenderContentInput | ExtractHeadingsInput | SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
) -> RenderContentOutput | HeadingsOutput | SanitizeOutput:
    """
    Main entry point for the render content component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderContentInput):
        return run_render(inp, rules=rules)
    elif isinstance(inp, ExtractHeadingsInput):
        return run_extract_headings(inp, rules=rules)
    elif isinstance(inp, SanitizeHtmlInput):
        return run_sanitize(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
