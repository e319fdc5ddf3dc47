"""
Markup Text Renderer - lightweight markup to raw HTML.

Uses Python-Markdown. Single newlines become <br> (nl2br) so authored line
breaks survive. GitHub-style ~~strikethrough~~ (pymdownx.tilde) renders as <s>
and bare URLs become links (pymdownx.magiclink). Arbitrary input never raises:
a failing conversion degrades to the escaped text in one unstyled paragraph.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkupRenderConfig:
    """Markup rendering configuration from rules."""

    extensions: tuple[str, ...] = field(
        default_factory=lambda: (
            "nl2br",
            "sane_lists",
            "fenced_code",
            "tables",
            "pymdownx.tilde",
            "pymdownx.magiclink",
        )
    )
    extension_configs: Mapping[str, Mapping[str, Any]] = field(
        default_factory=lambda: {"pymdownx.tilde": {"subscript": False}}
    )


DEFAULT_MARKUP_CONFIG = MarkupRenderConfig()


# --- Extensions ---


class StrikeTagTreeprocessor(Treeprocessor):
    """Renames <del> to <s>, the strikethrough element the sanitizer allows."""

    def run(self, root):
        for elem in root.iter("del"):
            elem.tag = "s"


class StrikeTagExtension(Extension):
    def extendMarkdown(self, md):
        # After inline patterns (priority 20) have produced <del>
        md.treeprocessors.register(StrikeTagTreeprocessor(md), "strike_tag", priority=15)


def render_markup(
    text: str,
    config: MarkupRenderConfig = DEFAULT_MARKUP_CONFIG,
) -> str:
    """Convert markup text to raw (unsanitized) HTML."""
    if not text:
        return ""
    try:
        return markdown.markdown(
            text,
            extensions=[*config.extensions, StrikeTagExtension()],
            extension_configs={name: dict(opts) for name, opts in config.extension_configs.items()},
            output_format="html",
        )
    except Exception:
        logger.warning("Markup conversion failed, rendering as plain paragraph", exc_info=True)
        return f"<p>{html.escape(text)}</p>"
