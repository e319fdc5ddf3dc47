"""
Render content component - authored content to sanitized HTML.
"""

from content_pipeline.core.services.pipeline import (
    DEFAULT_PIPELINE_CONFIG,
    ContentRenderer,
    PipelineConfig,
    render_content,
    render_source,
    resolve_source,
)

from .component import (
    build_config,
    run,
    run_extract_headings,
    run_render,
    run_sanitize,
)
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

__all__ = [
    # Entry points
    "run",
    "run_extract_headings",
    "run_render",
    "run_sanitize",
    "build_config",
    # Input models
    "ExtractHeadingsInput",
    "RenderContentInput",
    "SanitizeHtmlInput",
    # Output models
    "HeadingsOutput",
    "RenderContentError",
    "RenderContentOutput",
    "SanitizeOutput",
    # Ports
    "RulesPort",
    # Service re-exports
    "DEFAULT_PIPELINE_CONFIG",
    "ContentRenderer",
    "PipelineConfig",
    "render_content",
    "render_source",
    "resolve_source",
]
