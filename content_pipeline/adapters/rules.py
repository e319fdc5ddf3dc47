"""
Rules adapter - exposes a loaded rules file through the component rules ports.
"""

from __future__ import annotations

from pathlib import Path

from content_pipeline.rules.loader import DEFAULT_RULES_PATH, load_rules
from content_pipeline.rules.models import (
    BackfillRules,
    MarkupRules,
    MetricsRules,
    Rules,
    SanitizerRules,
    StructuredRules,
)


class RulesAdapter:
    """Adapter serving validated rules to the render and backfill components."""

    def __init__(self, rules: Rules) -> None:
        self._rules = rules

    @classmethod
    def from_path(cls, path: Path = DEFAULT_RULES_PATH) -> RulesAdapter:
        """Load and validate a rules file."""
        return cls(load_rules(path))

    @property
    def rules(self) -> Rules:
        return self._rules

    def get_sanitizer_rules(self) -> SanitizerRules:
        return self._rules.sanitizer

    def get_structured_rules(self) -> StructuredRules:
        return self._rules.structured

    def get_markup_rules(self) -> MarkupRules:
        return self._rules.markup

    def get_metrics_rules(self) -> MetricsRules:
        return self._rules.metrics

    def get_backfill_rules(self) -> BackfillRules:
        return self._rules.backfill
