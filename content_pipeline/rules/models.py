from typing import Any

from pydantic import BaseModel, Field


class SanitizerRules(BaseModel):
    allowed_tags: list[str]
    allowed_attributes: list[str]
    image_src_prefixes: list[str]
    iframe_src_prefixes: list[str]
    drop_content_tags: list[str] = Field(default_factory=list)


class StructuredRules(BaseModel):
    heading_max_level: int = Field(default=3, ge=1, le=6)
    link_rel: str = "noopener noreferrer"
    link_target: str = "_blank"
    image_loading: str = "lazy"
    video_embed_host: str = "https://www.youtube-nocookie.com/embed/"


class MarkupRules(BaseModel):
    extensions: list[str] = Field(
        default_factory=lambda: [
            "nl2br",
            "sane_lists",
            "fenced_code",
            "tables",
            "pymdownx.tilde",
            "pymdownx.magiclink",
        ]
    )
    extension_configs: dict[str, dict[str, Any]] = Field(
        default_factory=lambda: {"pymdownx.tilde": {"subscript": False}}
    )


class MetricsRules(BaseModel):
    words_per_minute: int = Field(default=200, gt=0)


class BackfillRules(BaseModel):
    fallback_html: str


class Rules(BaseModel):
    sanitizer: SanitizerRules
    structured: StructuredRules = Field(default_factory=StructuredRules)
    markup: MarkupRules = Field(default_factory=MarkupRules)
    metrics: MetricsRules = Field(default_factory=MetricsRules)
    backfill: BackfillRules
