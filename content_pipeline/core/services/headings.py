"""
Heading ID Injector & TOC Builder.

Parses raw HTML with BeautifulSoup, assigns a collision-free anchor id to
every non-empty h1-h6 element in document order, and returns the
re-serialized fragment together with the table of contents.

Ids are a pure function of the input: rendering unchanged content twice yields
the same anchors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

from content_pipeline.domain.document import Heading

HEADING_TAG_PATTERN = re.compile(r"^h[1-6]$")
VALID_ID_PATTERN = re.compile(r"^[a-zA-Z0-9가-힣_.-]+$")

FALLBACK_SLUG = "section"


@dataclass(frozen=True)
class HeadingInjection:
    """Annotated HTML and the ordered heading list."""

    html: str
    headings: tuple[Heading, ...]


def slugify(text: str) -> str:
    """Create an anchor slug from heading text (Hangul syllables are kept)."""
    slug = text.lower().strip()
    slug = re.sub(r"[^a-z0-9가-힣\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug or FALLBACK_SLUG


def is_valid_id(value: str) -> bool:
    """Check whether an author-supplied id can be used as an anchor."""
    return bool(VALID_ID_PATTERN.match(value))


def unique_id(base: str, used: set[str]) -> str:
    """Return base, or base-2, base-3, ... whichever is first unused."""
    if base not in used:
        return base
    counter = 2
    while f"{base}-{counter}" in used:
        counter += 1
    return f"{base}-{counter}"


def inject_heading_ids(html_content: str) -> HeadingInjection:
    """
    Assign anchor ids to headings and collect the table of contents.

    An existing id is kept when it is valid and not yet used in this render;
    otherwise the id is the slug of the heading text, suffixed on collision.
    Headings without text are left untouched and excluded from the list.
    """
    soup = BeautifulSoup(html_content, "html.parser", multi_valued_attributes=None)

    headings: list[Heading] = []
    used_ids: set[str] = set()

    for element in soup.find_all(HEADING_TAG_PATTERN):
        text = element.get_text().strip()
        if not text:
            continue

        existing = element.get("id")
        existing = existing.strip() if isinstance(existing, str) else ""

        if existing and is_valid_id(existing) and existing not in used_ids:
            final_id = existing
        else:
            final_id = unique_id(slugify(text), used_ids)

        used_ids.add(final_id)
        element["id"] = final_id
        headings.append(Heading(level=int(element.name[1]), text=text, id=final_id))

    return HeadingInjection(html=str(soup), headings=tuple(headings))


def retain_anchored_headings(
    html_content: str,
    headings: tuple[Heading, ...],
) -> tuple[Heading, ...]:
    """Keep only headings whose anchor id is still present in html_content."""
    if not headings:
        return headings
    soup = BeautifulSoup(html_content, "html.parser", multi_valued_attributes=None)
    anchors = {element.get("id") for element in soup.find_all(HEADING_TAG_PATTERN)}
    return tuple(h for h in headings if h.id in anchors)
