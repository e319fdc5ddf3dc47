"""
Content pipeline errors.

- ContentValidationError: the source field required by the declared content
  type is missing. Raised before any rendering work.
- ContentRenderError: a structured document tree is internally inconsistent.
"""

from __future__ import annotations


class ContentPipelineError(Exception):
    """Base error for the content rendering pipeline."""

    code = "content_error"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class ContentValidationError(ContentPipelineError):
    """Required source field missing for the declared content type."""

    code = "content_validation_error"


class ContentRenderError(ContentPipelineError):
    """Structured document tree could not be rendered."""

    code = "content_render_error"

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (at {self.path})"
        return self.message
