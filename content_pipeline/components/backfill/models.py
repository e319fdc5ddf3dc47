"""
Backfill component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from content_pipeline.domain.entities import StoredContent

# --- Error ---


@dataclass(frozen=True)
class BackfillError:
    """Backfill or write-path error."""

    code: str
    message: str
    path: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class BackfillInput:
    """Input for reading content with its rendered projection."""

    content_id: UUID


@dataclass(frozen=True)
class WriteContentInput:
    """Input for creating or updating content."""

    content: StoredContent
    read_time: int | None = None


# --- Output Models ---


@dataclass(frozen=True)
class BackfillOutput:
    """Output for a read with backfill."""

    content: StoredContent | None
    backfilled: bool = False
    errors: list[BackfillError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class WriteContentOutput:
    """Output for a create or update."""

    content: StoredContent | None
    errors: list[BackfillError] = field(default_factory=list)
    success: bool = True
