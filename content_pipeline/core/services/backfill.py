"""
Render Cache / Backfill Manager.

Stored content keeps its rendered projection (html, plain text, headings,
word count, read time) next to the source. On read, a missing projection is
rebuilt and written back; on write, the projection is rendered before the
content is persisted.

Key behaviors:
- Read path never raises: a failing render yields the fallback projection
- Write-back after a backfill is best effort (failures are logged)
- Concurrent backfills of the same content write the same deterministic
  result, so no locking is needed
- Write path propagates validation and render errors to reject the write
- An explicit read time on write overrides the computed one
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from content_pipeline.core.ports.content_repo import ContentRepoPort
from content_pipeline.core.services.pipeline import ContentRenderer
from content_pipeline.domain.document import RenderedContent
from content_pipeline.domain.entities import StoredContent, StoredHeading

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_HTML = '<p class="text-red-500">콘텐츠를 불러올 수 없습니다.</p>'

# --- Configuration ---


@dataclass(frozen=True)
class BackfillConfig:
    """Backfill configuration from rules."""

    fallback_html: str = DEFAULT_FALLBACK_HTML


DEFAULT_BACKFILL_CONFIG = BackfillConfig()


# --- Helpers ---


def apply_rendered(
    content: StoredContent,
    rendered: RenderedContent,
    read_time: int | None = None,
) -> StoredContent:
    """Return a copy of content carrying the rendered projection."""
    return content.model_copy(
        update={
            "html": rendered.html,
            "plain_text": rendered.plain_text,
            "headings": [
                StoredHeading(level=h.level, text=h.text, id=h.id) for h in rendered.headings
            ],
            "word_count": rendered.word_count,
            "read_time": read_time if read_time is not None else rendered.read_time,
        }
    )


def render_stored(renderer: ContentRenderer, content: StoredContent) -> RenderedContent:
    """Render the source fields of stored content."""
    return renderer.render(
        content.content_type,
        structured_tree=content.structured_tree,
        markup_text=content.markup_text,
    )


# --- Backfill Manager ---


class BackfillManager:
    """
    Keeps the rendered projection of stored content populated.
    """

    def __init__(
        self,
        repo: ContentRepoPort,
        renderer: ContentRenderer | None = None,
        config: BackfillConfig | None = None,
    ) -> None:
        self._repo = repo
        self._renderer = renderer or ContentRenderer()
        self._config = config or DEFAULT_BACKFILL_CONFIG

    @property
    def config(self) -> BackfillConfig:
        return self._config

    def needs_backfill(self, content: StoredContent) -> bool:
        return not content.has_rendered_cache()

    def fallback(self, content: StoredContent) -> StoredContent:
        """Projection shown when content cannot be rendered; read time is preserved."""
        return content.model_copy(
            update={
                "html": self._config.fallback_html,
                "headings": [],
                "plain_text": "",
                "word_count": 0,
            }
        )

    def ensure_rendered(self, content: StoredContent) -> StoredContent:
        """
        Return content with its projection populated (read path).

        Never raises for render or persistence failures.
        """
        if not self.needs_backfill(content):
            return content

        try:
            rendered = render_stored(self._renderer, content)
        except Exception:
            logger.exception("Failed to backfill content cache for %s", content.id)
            return self.fallback(content)

        # Keep an explicitly stored read time
        updated = apply_rendered(content, rendered, read_time=content.read_time)

        try:
            return self._repo.save(updated)
        except Exception:
            logger.exception("Failed to persist backfilled content %s", content.id)
            return updated

    def get_content(self, content_id: UUID) -> StoredContent | None:
        """Load content by id, backfilling its projection when missing."""
        content = self._repo.get_by_id(content_id)
        if content is None:
            return None
        return self.ensure_rendered(content)

    def render_for_write(
        self,
        content: StoredContent,
        read_time: int | None = None,
    ) -> StoredContent:
        """
        Render content ahead of a create or update (write path).

        Raises:
            ContentValidationError: If the source field for the content type is missing.
            ContentRenderError: If the structured tree cannot be rendered.
        """
        rendered = render_stored(self._renderer, content)
        updated = apply_rendered(content, rendered, read_time=read_time)

        # Only the source matching the content type is kept
        if updated.content_type == "structured":
            updated = updated.model_copy(update={"markup_text": None})
        else:
            updated = updated.model_copy(update={"structured_tree": None})
        return updated

    def save_for_write(
        self,
        content: StoredContent,
        read_time: int | None = None,
    ) -> StoredContent:
        """Render and persist content; errors reject the write."""
        return self._repo.save(self.render_for_write(content, read_time=read_time))
