"""
Backfill component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from content_pipeline.core.ports.content_repo import ContentRepoPort
from content_pipeline.components.render_content.ports import RulesPort as RenderRulesPort
from content_pipeline.rules.models import BackfillRules


class RulesPort(RenderRulesPort, Protocol):
    """Port for rendering and backfill rules configuration."""

    def get_backfill_rules(self) -> BackfillRules:
        """Get the fallback projection settings."""
        ...


__all__ = ["ContentRepoPort", "RulesPort"]
