"""
Backfill component - keep stored content's rendered projection populated.

Read path: missing projections are rebuilt and written back; a content item
that cannot be rendered is served with the fallback projection instead of an
error. Write path: content is rendered before it is persisted and render
failures reject the write.

Invariants:
- I1: Reads never fail because of rendering
- I2: Fallback projection has empty headings, empty text and zero words
- I3: A stored read time survives backfill and fallback
- I4: Writes of unrenderable content are rejected
"""

from __future__ import annotations

from content_pipeline.components.render_content import build_config
from content_pipeline.core.services.backfill import (
    DEFAULT_BACKFILL_CONFIG,
    BackfillConfig,
    BackfillManager,
)
from content_pipeline.core.services.pipeline import ContentRenderer
from content_pipeline.domain.errors import ContentPipelineError

from .models import (
    BackfillError,
    BackfillInput,
    BackfillOutput,
    WriteContentInput,
    WriteContentOutput,
)
from .ports import ContentRepoPort, RulesPort


def _build_manager(repo: ContentRepoPort, rules: RulesPort | None) -> BackfillManager:
    """Build a backfill manager configured from rules port."""
    if rules is None:
        backfill_config = DEFAULT_BACKFILL_CONFIG
    else:
        backfill_config = BackfillConfig(
            fallback_html=rules.get_backfill_rules().fallback_html,
        )
    renderer = ContentRenderer(config=build_config(rules))
    return BackfillManager(repo=repo, renderer=renderer, config=backfill_config)


# --- Component Entry Points ---


def run_backfill(
    inp: BackfillInput,
    repo: ContentRepoPort,
    *,
    rules: RulesPort | None = None,
) -> BackfillOutput:
    """
    Load content and ensure its rendered projection is present.

    Args:
        inp: Input containing the content id.
        repo: Content repository.
        rules: Optional rules port for configuration.

    Returns:
        BackfillOutput with the content, or a not_found error.
    """
    content = repo.get_by_id(inp.content_id)
    if content is None:
        return BackfillOutput(
            content=None,
            errors=[BackfillError(code="not_found", message="Content not found")],
            success=False,
        )

    manager = _build_manager(repo, rules)
    backfilled = manager.needs_backfill(content)
    return BackfillOutput(
        content=manager.ensure_rendered(content),
        backfilled=backfilled,
    )


def run_write(
    inp: WriteContentInput,
    repo: ContentRepoPort,
    *,
    rules: RulesPort | None = None,
) -> WriteContentOutput:
    """
    Render content and persist it with its projection.

    Args:
        inp: Input containing the content to write and an optional read time.
        repo: Content repository.
        rules: Optional rules port for configuration.

    Returns:
        WriteContentOutput with the saved content, or the error that
        rejects the write.
    """
    manager = _build_manager(repo, rules)
    try:
        content = manager.save_for_write(inp.content, read_time=inp.read_time)
    except ContentPipelineError as e:
        return WriteContentOutput(
            content=None,
            errors=[BackfillError(code=e.code, message=e.message, path=e.path)],
            success=False,
        )
    return WriteContentOutput(content=content)


def run(
    inp: BackfillInput | WriteContentInput,
    repo: ContentRepoPort,
    *,
    rules: RulesPort | None = None,
) -> BackfillOutput | WriteContentOutput:
    """
    Main entry point for the backfill component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, BackfillInput):
        return run_backfill(inp, repo, rules=rules)
    elif isinstance(inp, WriteContentInput):
        return run_write(inp, repo, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
