"""
Content repository interface.

The rendering pipeline never persists anything itself; the backfill manager
reads and writes stored content through this port.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from content_pipeline.domain.entities import StoredContent


class ContentRepoPort(Protocol):
    """Repository interface for stored content."""

    def get_by_id(self, content_id: UUID) -> StoredContent | None:
        """Get content by ID."""
        ...

    def save(self, content: StoredContent) -> StoredContent:
        """Save or update content."""
        ...
