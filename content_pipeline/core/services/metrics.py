"""
Plain-Text & Metrics Calculator.

Structured documents are flattened from the node tree itself, so markup and
sanitization artifacts never leak into the text. Markup documents are
flattened from their sanitized HTML.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

from content_pipeline.core.services.structured_render import NODE_RENDERERS
from content_pipeline.domain.document import DocumentNode

HEADING_TAG_PATTERN = re.compile(r"^h[1-6]$")

BLOCK_SEPARATOR = "\n\n"

INLINE_KINDS = frozenset(["text", "hardBreak", "inlineMath", "link"])


@dataclass(frozen=True)
class MetricsConfig:
    """Reading speed used for read time estimates."""

    words_per_minute: int = 200


DEFAULT_METRICS_CONFIG = MetricsConfig()


# --- Plain Text ---


def _node_text(node: DocumentNode) -> str:
    kind = node.kind
    if kind == "text":
        return node.text or ""
    if kind == "hardBreak":
        return "\n"
    if kind in ("inlineMath", "blockMath"):
        return str(node.attrs.get("latex") or "")
    if kind != "doc" and kind not in NODE_RENDERERS:
        return ""

    parts: list[str] = []
    previous_block = False
    for child in node.content:
        text = _node_text(child)
        is_block = child.kind not in INLINE_KINDS
        if parts and (is_block or previous_block) and text:
            parts.append(BLOCK_SEPARATOR)
        if text:
            parts.append(text)
            previous_block = is_block
    return "".join(parts)


def extract_tree_text(tree: DocumentNode) -> str:
    """Concatenate the text runs of a document, separating blocks by blank lines."""
    return _node_text(tree).strip()


def extract_html_text(html_content: str, include_headings: bool = False) -> str:
    """
    Strip all tags from HTML and return its text.

    Heading elements are left out unless include_headings is set: their text
    is already carried by the table of contents.
    """
    if not html_content:
        return ""
    soup = BeautifulSoup(html_content, "html.parser")
    if not include_headings:
        for heading in soup.find_all(HEADING_TAG_PATTERN):
            heading.decompose()
    return soup.get_text().strip()


# --- Metrics ---


def count_words(text: str) -> int:
    """Count whitespace-delimited words."""
    if not text:
        return 0
    return len(text.split())


def calculate_read_time(
    word_count: int,
    config: MetricsConfig = DEFAULT_METRICS_CONFIG,
) -> int:
    """Estimated reading time in whole minutes, never below one."""
    return max(1, math.ceil(word_count / config.words_per_minute))
