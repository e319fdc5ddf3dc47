"""
Backfill component - rendered projection cache for stored content.
"""

from content_pipeline.core.services.backfill import (
    DEFAULT_BACKFILL_CONFIG,
    DEFAULT_FALLBACK_HTML,
    BackfillConfig,
    BackfillManager,
    apply_rendered,
)

from .component import run, run_backfill, run_write
from .models import (
    BackfillError,
    BackfillInput,
    BackfillOutput,
    WriteContentInput,
    WriteContentOutput,
)
from .ports import ContentRepoPort, RulesPort

__all__ = [
    # Entry points
    "run",
    "run_backfill",
    "run_write",
    # Input models
    "BackfillInput",
    "WriteContentInput",
    # Output models
    "BackfillError",
    "BackfillOutput",
    "WriteContentOutput",
    # Ports
    "ContentRepoPort",
    "RulesPort",
    # Service re-exports
    "DEFAULT_BACKFILL_CONFIG",
    "DEFAULT_FALLBACK_HTML",
    "BackfillConfig",
    "BackfillManager",
    "apply_rendered",
]
