"""
Document model for the content rendering pipeline.

A source document is either a structured rich-text tree (editor JSON) or
markup text. Rendering produces a RenderedContent projection that the caller
caches next to the source.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from content_pipeline.domain.errors import ContentRenderError

# Deepest nesting accepted from editor JSON.
MAX_NODE_DEPTH = 64


class ContentType(str, Enum):
    """Discriminant for the two source variants."""

    STRUCTURED = "structured"
    MARKUP = "markup"


# --- Structured Document Tree ---


@dataclass(frozen=True)
class Mark:
    """Inline formatting applied to a text run."""

    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DocumentNode:
    """
    A node in the structured document tree.

    Children are owned by their parent; documents are always trees.
    """

    kind: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    marks: tuple[Mark, ...] = ()
    content: tuple[DocumentNode, ...] = ()
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to editor JSON."""
        result: dict[str, Any] = {"type": self.kind}
        if self.attrs:
            result["attrs"] = dict(self.attrs)
        if self.content:
            result["content"] = [node.to_dict() for node in self.content]
        if self.text is not None:
            result["text"] = self.text
        if self.marks:
            result["marks"] = [
                {"type": m.type, "attrs": dict(m.attrs)} if m.attrs else {"type": m.type}
                for m in self.marks
            ]
        return result

    @classmethod
    def from_dict(cls, data: Any, path: str = "doc", depth: int = 0) -> DocumentNode:
        """
        Build a node tree from editor JSON.

        Raises:
            ContentRenderError: If a node, its content or its marks have the
                wrong shape, or nesting is too deep.
        """
        if depth > MAX_NODE_DEPTH:
            raise ContentRenderError(
                f"Document nesting exceeds {MAX_NODE_DEPTH} levels", path=path
            )
        if not isinstance(data, Mapping):
            raise ContentRenderError("Node must be an object", path=path)

        kind = data.get("type", data.get("kind", ""))
        if not isinstance(kind, str):
            raise ContentRenderError("Node type must be a string", path=path)

        attrs = data.get("attrs") or {}
        if not isinstance(attrs, Mapping):
            raise ContentRenderError("Node attrs must be an object", path=f"{path}.attrs")

        raw_content = data.get("content") or []
        if not isinstance(raw_content, list):
            raise ContentRenderError("Node content must be a list", path=f"{path}.content")

        raw_marks = data.get("marks") or []
        if not isinstance(raw_marks, list):
            raise ContentRenderError("Node marks must be a list", path=f"{path}.marks")

        marks = []
        for i, raw_mark in enumerate(raw_marks):
            if not isinstance(raw_mark, Mapping) or not isinstance(raw_mark.get("type"), str):
                raise ContentRenderError(
                    "Mark must be an object with a type", path=f"{path}.marks[{i}]"
                )
            mark_attrs = raw_mark.get("attrs") or {}
            if not isinstance(mark_attrs, Mapping):
                raise ContentRenderError(
                    "Mark attrs must be an object", path=f"{path}.marks[{i}].attrs"
                )
            marks.append(Mark(type=raw_mark["type"], attrs=dict(mark_attrs)))

        text = data.get("text")
        if text is not None and not isinstance(text, str):
            raise ContentRenderError("Text must be a string", path=f"{path}.text")

        content = tuple(
            cls.from_dict(child, f"{path}.content[{i}]", depth + 1)
            for i, child in enumerate(raw_content)
        )
        return cls(kind=kind, attrs=dict(attrs), marks=tuple(marks), content=content, text=text)


# --- Content Source (tagged union) ---


@dataclass(frozen=True)
class StructuredSource:
    """Structured rich-text document."""

    tree: DocumentNode
    content_type: ContentType = field(default=ContentType.STRUCTURED, init=False)


@dataclass(frozen=True)
class MarkupSource:
    """Lightweight markup text."""

    text: str
    content_type: ContentType = field(default=ContentType.MARKUP, init=False)


ContentSource = Union[StructuredSource, MarkupSource]


# --- Rendered Output ---


@dataclass(frozen=True)
class Heading:
    """Table-of-contents entry."""

    level: int
    text: str
    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "text": self.text, "id": self.id}


@dataclass(frozen=True)
class RenderedContent:
    """Derived, cacheable projection of a content source."""

    html: str
    headings: tuple[Heading, ...]
    plain_text: str
    word_count: int
    read_time: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape consumed by the persistence layer."""
        return {
            "html": self.html,
            "headings": [h.to_dict() for h in self.headings],
            "plainText": self.plain_text,
            "wordCount": self.word_count,
            "readTime": self.read_time,
        }
