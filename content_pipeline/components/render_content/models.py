"""
Render content component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from content_pipeline.domain.document import Heading, RenderedContent

# --- Error ---


@dataclass(frozen=True)
class RenderContentError:
    """Render content error."""

    code: str
    message: str
    path: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderContentInput:
    """Input for rendering a content payload."""

    content_type: str
    structured_tree: dict[str, Any] | None = None
    markup_text: str | None = None


@dataclass(frozen=True)
class ExtractHeadingsInput:
    """Input for assigning heading ids in raw HTML."""

    html: str


@dataclass(frozen=True)
class SanitizeHtmlInput:
    """Input for sanitizing an HTML fragment."""

    html: str


# --- Output Models ---


@dataclass(frozen=True)
class RenderContentOutput:
    """Output containing the rendered projection."""

    rendered: RenderedContent | None
    errors: list[RenderContentError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class HeadingsOutput:
    """Output containing annotated HTML and the table of contents."""

    html: str
    headings: tuple[Heading, ...]
    errors: list[RenderContentError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class SanitizeOutput:
    """Output containing sanitized HTML."""

    html: str
    errors: list[RenderContentError] = field(default_factory=list)
    success: bool = True
