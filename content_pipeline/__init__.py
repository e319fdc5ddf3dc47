"""
content-pipeline - render authored documents to sanitized HTML.

Turns a structured rich-text tree or markup text into sanitized HTML, a table
of contents, plain text, and word count / read time metrics.
"""

from content_pipeline.core.services.pipeline import (
    ContentRenderer,
    PipelineConfig,
    render_content,
    resolve_source,
)
from content_pipeline.domain.document import ContentType, Heading, RenderedContent
from content_pipeline.domain.errors import (
    ContentPipelineError,
    ContentRenderError,
    ContentValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ContentPipelineError",
    "ContentRenderError",
    "ContentRenderer",
    "ContentType",
    "ContentValidationError",
    "Heading",
    "PipelineConfig",
    "RenderedContent",
    "render_content",
    "resolve_source",
]
