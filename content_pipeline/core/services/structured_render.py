"""
Structured Document Renderer - editor JSON tree to raw HTML.

Walks a DocumentNode tree depth-first and emits one HTML element per node
kind. The output is not yet safe for display: heading ids are assigned and
the allowlist is enforced by later pipeline stages.

Key behaviors:
- Headings render at levels 1..heading_max_level (deeper levels collapse)
- Links open in a new tab with noopener/noreferrer
- Unknown node kinds and marks are skipped
- Leaf kinds that carry children are rejected with ContentRenderError
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlparse

from content_pipeline.core.services.math_markup import latex_to_mathml
from content_pipeline.domain.document import DocumentNode, Mark
from content_pipeline.domain.errors import ContentRenderError

# --- Configuration ---


@dataclass(frozen=True)
class StructuredRenderConfig:
    """Structured rendering configuration from rules."""

    heading_max_level: int = 3
    link_rel: str = "noopener noreferrer"
    link_target: str = "_blank"
    image_loading: str = "lazy"
    video_embed_host: str = "https://www.youtube-nocookie.com/embed/"
    video_width: int = 640
    video_height: int = 480


DEFAULT_STRUCTURED_CONFIG = StructuredRenderConfig()

# Kinds that never have children.
LEAF_KINDS = frozenset(
    [
        "text",
        "hardBreak",
        "image",
        "horizontalRule",
        "inlineMath",
        "blockMath",
        "youtube",
    ]
)

TEXT_ALIGNMENTS = frozenset(["center", "right", "justify"])

VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{6,20}$")

VIDEO_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
)


# --- Helpers ---


def _escape(text: str) -> str:
    """Escape HTML special characters."""
    return html.escape(text)


def _attr(name: str, value: Any) -> str:
    return f' {name}="{_escape(str(value))}"'


def _int_attr(attrs: Mapping[str, Any], name: str, default: int | None = None) -> int | None:
    value = attrs.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _align_attr(node: DocumentNode) -> str:
    align = node.attrs.get("textAlign")
    if align in TEXT_ALIGNMENTS:
        return f' class="text-align-{align}"'
    return ""


def extract_video_id(src: str) -> str | None:
    """Pull a YouTube video id out of a watch, short, embed or youtu.be URL."""
    if not src:
        return None
    parsed = urlparse(src.strip())
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    if host.startswith("m."):
        host = host[2:]

    candidate: str | None = None
    if host == "youtu.be":
        candidate = parsed.path.lstrip("/").split("/")[0]
    elif host in ("youtube.com", "youtube-nocookie.com"):
        segments = [s for s in parsed.path.split("/") if s]
        if segments[:1] == ["watch"]:
            candidate = parse_qs(parsed.query).get("v", [""])[0]
        elif len(segments) >= 2 and segments[0] in ("embed", "shorts", "live", "v"):
            candidate = segments[1]

    if candidate and VIDEO_ID_PATTERN.match(candidate):
        return candidate
    return None


# --- Mark Rendering ---


def _apply_mark(content: str, mark: Mark, config: StructuredRenderConfig) -> str:
    """Wrap content in the element for one mark."""
    mark_type = mark.type
    attrs = mark.attrs

    if mark_type in ("bold", "strong"):
        return f"<strong>{content}</strong>"
    elif mark_type in ("italic", "em"):
        return f"<em>{content}</em>"
    elif mark_type == "underline":
        return f"<u>{content}</u>"
    elif mark_type in ("strike", "strikethrough"):
        return f"<s>{content}</s>"
    elif mark_type == "code":
        return f"<code>{content}</code>"
    elif mark_type == "highlight":
        return f"<mark>{content}</mark>"
    elif mark_type == "textStyle":
        color = attrs.get("color")
        if color:
            return f'<span style="color: {_escape(str(color))}">{content}</span>'
        return content
    elif mark_type == "link":
        return _link(content, attrs, config)

    return content


def _link(content: str, attrs: Mapping[str, Any], config: StructuredRenderConfig) -> str:
    parts = ""
    href = attrs.get("href")
    if href:
        parts += _attr("href", href)
    parts += _attr("target", config.link_target)
    parts += _attr("rel", config.link_rel)
    title = attrs.get("title")
    if title:
        parts += _attr("title", title)
    return f"<a{parts}>{content}</a>"


# --- Node Renderers ---


def render_text(node: DocumentNode, config: StructuredRenderConfig) -> str:
    """Render a text run with its marks."""
    if node.text is None:
        raise ContentRenderError("Text node without text")
    escaped = _escape(node.text)

    # Apply marks (in reverse order for proper nesting)
    for mark in reversed(node.marks):
        escaped = _apply_mark(escaped, mark, config)
    return escaped


def render_paragraph(node: DocumentNode, config: StructuredRenderConfig) -> str:
    content = render_content(node.content, config)
    return f"<p{_align_attr(node)}>{content}</p>"


def render_heading(node: DocumentNode, config: StructuredRenderConfig) -> str:
    """Render a heading, clamping its level to 1..heading_max_level."""
    raw_level = node.attrs.get("level", 1)
    if isinstance(raw_level, bool) or not isinstance(raw_level, (int, str)):
        raise ContentRenderError(f"Heading level must be an integer, got {raw_level!r}")
    try:
        level = int(raw_level)
    except ValueError as e:
        raise ContentRenderError(f"Heading level must be an integer, got {raw_level!r}") from e
    level = max(1, min(config.heading_max_level, level))

    content = render_content(node.content, config)
    return f"<h{level}{_align_attr(node)}>{content}</h{level}>"


def render_blockquote(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f"<blockquote>{render_content(node.content, config)}</blockquote>"


def render_bullet_list(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f"<ul>{render_content(node.content, config)}</ul>"


def render_ordered_list(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f"<ol>{render_content(node.content, config)}</ol>"


def render_list_item(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f"<li>{render_content(node.content, config)}</li>"


def render_task_list(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f'<ul class="task-list">{render_content(node.content, config)}</ul>'


def render_task_item(node: DocumentNode, config: StructuredRenderConfig) -> str:
    """Render a checklist item as a read-only checkbox."""
    checked = ' checked=""' if node.attrs.get("checked") else ""
    content = render_content(node.content, config)
    return (
        f'<li class="task-item">'
        f'<label><input type="checkbox"{checked} disabled=""></label>'
        f"<div>{content}</div>"
        f"</li>"
    )


def render_code_block(node: DocumentNode, config: StructuredRenderConfig) -> str:
    language = node.attrs.get("language")
    text = "".join(child.text or "" for child in node.content if child.kind == "text")
    escaped = _escape(text)

    if language:
        return f'<pre><code class="language-{_escape(str(language))}">{escaped}</code></pre>'
    return f"<pre><code>{escaped}</code></pre>"


def render_table(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f"<table><tbody>{render_content(node.content, config)}</tbody></table>"


def render_table_row(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return f"<tr>{render_content(node.content, config)}</tr>"


def _render_cell(tag: str, node: DocumentNode, config: StructuredRenderConfig) -> str:
    parts = ""
    colspan = _int_attr(node.attrs, "colspan", 1)
    rowspan = _int_attr(node.attrs, "rowspan", 1)
    if colspan and colspan > 1:
        parts += _attr("colspan", colspan)
    if rowspan and rowspan > 1:
        parts += _attr("rowspan", rowspan)
    return f"<{tag}{parts}>{render_content(node.content, config)}</{tag}>"


def render_table_cell(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return _render_cell("td", node, config)


def render_table_header(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return _render_cell("th", node, config)


def render_image(node: DocumentNode, config: StructuredRenderConfig) -> str:
    """Render an image; images without a source are dropped."""
    attrs = node.attrs
    src = attrs.get("src")
    if not src:
        return ""

    parts = _attr("src", src)
    parts += _attr("alt", attrs.get("alt") or "")
    if attrs.get("title"):
        parts += _attr("title", attrs["title"])
    width = _int_attr(attrs, "width")
    height = _int_attr(attrs, "height")
    if width:
        parts += _attr("width", width)
    if height:
        parts += _attr("height", height)
    parts += _attr("loading", config.image_loading)

    return f"<img{parts}>"


def render_link(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return _link(render_content(node.content, config), node.attrs, config)


def render_hard_break(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return "<br>"


def render_horizontal_rule(node: DocumentNode, config: StructuredRenderConfig) -> str:
    return "<hr>"


def render_inline_math(node: DocumentNode, config: StructuredRenderConfig) -> str:
    latex = str(node.attrs.get("latex") or "")
    return f'<span class="math-inline">{latex_to_mathml(latex)}</span>'


def render_block_math(node: DocumentNode, config: StructuredRenderConfig) -> str:
    latex = str(node.attrs.get("latex") or "")
    return f'<div class="math-block">{latex_to_mathml(latex, display=True)}</div>'


def render_youtube(node: DocumentNode, config: StructuredRenderConfig) -> str:
    """Render a video embed on the privacy-enhanced host; unknown sources are dropped."""
    video_id = extract_video_id(str(node.attrs.get("src") or ""))
    if video_id is None:
        return ""

    src = f"{config.video_embed_host}{video_id}"
    start = _int_attr(node.attrs, "start")
    if start:
        src += f"?start={start}"

    width = _int_attr(node.attrs, "width", config.video_width)
    height = _int_attr(node.attrs, "height", config.video_height)
    return (
        '<div class="video-embed">'
        f'<iframe src="{_escape(src)}" width="{width}" height="{height}" '
        f'frameborder="0" allowfullscreen="true" allow="{VIDEO_ALLOW}"></iframe>'
        "</div>"
    )


# --- Node Type Dispatch ---

NodeRenderer = Callable[[DocumentNode, StructuredRenderConfig], str]

NODE_RENDERERS: dict[str, NodeRenderer] = {
    "text": render_text,
    "paragraph": render_paragraph,
    "heading": render_heading,
    "blockquote": render_blockquote,
    "bulletList": render_bullet_list,
    "orderedList": render_ordered_list,
    "listItem": render_list_item,
    "taskList": render_task_list,
    "taskItem": render_task_item,
    "codeBlock": render_code_block,
    "table": render_table,
    "tableRow": render_table_row,
    "tableCell": render_table_cell,
    "tableHeader": render_table_header,
    "image": render_image,
    "link": render_link,
    "hardBreak": render_hard_break,
    "horizontalRule": render_horizontal_rule,
    "inlineMath": render_inline_math,
    "blockMath": render_block_math,
    "youtube": render_youtube,
}


def render_node(
    node: DocumentNode,
    config: StructuredRenderConfig = DEFAULT_STRUCTURED_CONFIG,
) -> str:
    """Render a single node."""
    if node.kind in LEAF_KINDS and node.content:
        raise ContentRenderError(f"Node type '{node.kind}' cannot have children")

    # Doc node just renders children
    if node.kind == "doc":
        return render_content(node.content, config)

    renderer = NODE_RENDERERS.get(node.kind)
    if renderer is None:
        return ""
    return renderer(node, config)


def render_content(
    nodes: tuple[DocumentNode, ...],
    config: StructuredRenderConfig = DEFAULT_STRUCTURED_CONFIG,
) -> str:
    """Render a list of nodes."""
    return "".join(render_node(node, config) for node in nodes)


def render_document(
    tree: DocumentNode | dict[str, Any],
    config: StructuredRenderConfig = DEFAULT_STRUCTURED_CONFIG,
) -> str:
    """
    Render a structured document to raw HTML.

    Args:
        tree: Document tree, or the editor JSON it is built from.
        config: Rendering configuration.

    Returns:
        Raw (unsanitized) HTML string.

    Raises:
        ContentRenderError: If the tree is structurally invalid.
    """
    if not isinstance(tree, DocumentNode):
        tree = DocumentNode.from_dict(tree)
    return render_node(tree, config)
