from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
ContentTypeValue = Literal["structured", "markup"]

# --- Stored Content ---


class StoredHeading(BaseModel):
    level: int = Field(ge=1, le=6)
    text: str
    id: str


class StoredContent(BaseModel):
    """
    Content entity as persisted by the caller.

    The source fields are the system of record; the cached fields are a
    projection that may be missing and is rebuilt on read.
    """

    id: UUID = Field(default_factory=uuid4)
    content_type: ContentTypeValue = "markup"
    structured_tree: dict[str, Any] | None = None
    markup_text: str | None = None

    # Cached render projection
    html: str | None = None
    plain_text: str | None = None
    headings: list[StoredHeading] | None = None
    word_count: int | None = None
    read_time: int | None = None

    def has_rendered_cache(self) -> bool:
        """True when every cached projection field is present."""
        return (
            self.html is not None
            and self.plain_text is not None
            and self.headings is not None
            and self.word_count is not None
        )
