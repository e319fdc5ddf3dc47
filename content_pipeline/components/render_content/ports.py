"""
Render content component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from content_pipeline.rules.models import (
    MarkupRules,
    MetricsRules,
    SanitizerRules,
    StructuredRules,
)


class RulesPort(Protocol):
    """Port for accessing rendering rules configuration."""

    def get_sanitizer_rules(self) -> SanitizerRules:
        """Get tag/attribute allowlists and URL restrictions."""
        ...

    def get_structured_rules(self) -> StructuredRules:
        """Get structured document rendering options."""
        ...

    def get_markup_rules(self) -> MarkupRules:
        """Get markup extensions."""
        ...

    def get_metrics_rules(self) -> MetricsRules:
        """Get reading speed."""
        ...
