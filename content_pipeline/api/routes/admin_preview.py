"""
Admin Preview API Routes.

Renders content exactly as it will be stored, without persisting it, so
editors can check the output and table of contents before saving.
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from content_pipeline.api.deps import get_content_renderer
from content_pipeline.components.render_content import ContentRenderer
from content_pipeline.domain.errors import ContentRenderError, ContentValidationError

router = APIRouter()


# --- Request/Response Models ---


class RenderRequest(BaseModel):
    """Request to render a content payload."""

    model_config = ConfigDict(populate_by_name=True)

    content_type: Literal["structured", "markup"] = Field(..., alias="contentType")
    structured_tree: dict[str, Any] | None = Field(default=None, alias="structuredTree")
    markup_text: str | None = Field(default=None, alias="markupText")


class HeadingResponse(BaseModel):
    level: int
    text: str
    id: str


class RenderedContentResponse(BaseModel):
    """Rendered projection, as stored by the persistence layer."""

    model_config = ConfigDict(populate_by_name=True)

    html: str
    headings: list[HeadingResponse]
    plain_text: str = Field(..., alias="plainText")
    word_count: int = Field(..., alias="wordCount")
    read_time: int = Field(..., alias="readTime")


class SanitizeRequest(BaseModel):
    html: str


class SanitizeResponse(BaseModel):
    html: str


# --- Routes ---


@router.post(
    "/render",
    response_model=RenderedContentResponse,
    response_model_by_alias=True,
)
def preview_render(
    request: RenderRequest,
    renderer: ContentRenderer = Depends(get_content_renderer),
) -> RenderedContentResponse:
    """
    Preview rendered content.

    Missing payloads are a bad request; unrenderable trees are unprocessable.
    """
    try:
        rendered = renderer.render(
            request.content_type,
            structured_tree=request.structured_tree,
            markup_text=request.markup_text,
        )
    except ContentValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except ContentRenderError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e

    return RenderedContentResponse(
        html=rendered.html,
        headings=[HeadingResponse(**h.to_dict()) for h in rendered.headings],
        plain_text=rendered.plain_text,
        word_count=rendered.word_count,
        read_time=rendered.read_time,
    )


@router.post("/sanitize", response_model=SanitizeResponse)
def preview_sanitize(
    request: SanitizeRequest,
    renderer: ContentRenderer = Depends(get_content_renderer),
) -> SanitizeResponse:
    """Sanitize an HTML fragment with the configured allowlist."""
    return SanitizeResponse(html=renderer.sanitize(request.html))
