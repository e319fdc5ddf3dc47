"""
HTML Sanitizer - allowlist filter for rendered content.

Key behaviors:
- Only allowlisted tags survive; other tags are unwrapped so their text stays
- Script-like containers (script, style, ...) and comments are removed whole
- Only allowlisted attributes survive, each then passed through an attribute filter
- Blocks javascript: URLs everywhere and data: URLs in links
- Reduces style to a single color declaration
- Restricts image sources to web/relative/inline-image URLs and iframes to
  known embed hosts

The attribute filter is an explicit argument: a pure function
(tag_name, attr_name, attr_value) -> new value, or None to drop the attribute.
The sanitizer is total: any input string yields a string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

logger = logging.getLogger(__name__)

# --- Configuration ---


@dataclass(frozen=True)
class SanitizeConfig:
    """Sanitizer allowlists from rules."""

    allowed_tags: frozenset[str] = field(
        default_factory=lambda: frozenset(
            [
                "h1",
                "h2",
                "h3",
                "h4",
                "h5",
                "h6",
                "p",
                "br",
                "strong",
                "em",
                "u",
                "s",
                "a",
                "img",
                "iframe",
                "ul",
                "ol",
                "li",
                "blockquote",
                "code",
                "pre",
                "table",
                "thead",
                "tbody",
                "tr",
                "th",
                "td",
                "div",
                "span",
                "hr",
                "mark",
                "input",
                "label",
                "math",
                "semantics",
                "mrow",
                "mi",
                "mo",
                "mn",
                "msup",
                "msub",
                "mfrac",
                "annotation",
            ]
        )
    )

    allowed_attributes: frozenset[str] = field(
        default_factory=lambda: frozenset(
            [
                "href",
                "src",
                "alt",
                "title",
                "class",
                "target",
                "rel",
                "loading",
                "id",
                "style",
                "colspan",
                "rowspan",
                "type",
                "checked",
                "disabled",
                "width",
                "height",
                "frameborder",
                "allowfullscreen",
                "allow",
                "encoding",
                "xmlns",
            ]
        )
    )

    image_src_prefixes: tuple[str, ...] = (
        "http://",
        "https://",
        "/",
        "./",
        "../",
        "data:image/",
    )

    iframe_src_prefixes: tuple[str, ...] = (
        "https://www.youtube-nocookie.com/embed/",
        "https://www.youtube.com/embed/",
    )

    # Tags removed together with everything inside them
    drop_content_tags: frozenset[str] = field(
        default_factory=lambda: frozenset(
            ["script", "style", "template", "noscript", "object", "embed"]
        )
    )


DEFAULT_SANITIZE_CONFIG = SanitizeConfig()

AttributeFilter = Callable[[str, str, str], "str | None"]

# Browsers ignore whitespace and control characters inside URL schemes.
URL_NOISE_PATTERN = re.compile(r"[\x00-\x20\x7f-\x9f]+")

COLOR_PATTERN = re.compile(
    r"(?<![\w-])color\s*:\s*("
    r"#[0-9a-f]{3,8}\b"
    r"|rgba?\(\s*[\d\s.,%/]+\)"
    r"|hsla?\(\s*(?:[\d\s.,%/]|deg)+\)"
    r")",
    re.IGNORECASE,
)


# --- Attribute Filter ---


def _normalize_url(value: str) -> str:
    return URL_NOISE_PATTERN.sub("", value).lower()


def sanitize_style(value: str) -> str | None:
    """Reduce a style attribute to its color declaration, if any."""
    match = COLOR_PATTERN.search(value)
    if match is None:
        return None
    return f"color: {match.group(1).lower()}"


def is_permitted_attribute(
    attr_name: str,
    attr_value: str,
    config: SanitizeConfig = DEFAULT_SANITIZE_CONFIG,
) -> bool:
    """Allowlist and scheme checks that hold no matter which attribute filter runs."""
    name = attr_name.lower()
    if name == "srcset" or name not in config.allowed_attributes:
        return False
    return not _normalize_url(attr_value).startswith(("javascript:", "vbscript:"))


def sanitize_attribute(
    tag_name: str,
    attr_name: str,
    attr_value: str,
    config: SanitizeConfig = DEFAULT_SANITIZE_CONFIG,
) -> str | None:
    """
    Decide the fate of one attribute.

    Returns:
        The value to keep (possibly rewritten), or None to drop the attribute.
    """
    if not is_permitted_attribute(attr_name, attr_value, config):
        return None

    name = attr_name.lower()
    value = attr_value.strip()
    normalized = _normalize_url(value)

    if name == "href" and normalized.startswith("data:"):
        return None

    if name == "style":
        return sanitize_style(value)

    if name == "src" and tag_name == "img":
        return value if normalized.startswith(config.image_src_prefixes) else None

    if name == "src" and tag_name == "iframe":
        return value if normalized.startswith(config.iframe_src_prefixes) else None

    return attr_value


# --- HTML Sanitizer ---


def sanitize_html(
    html_content: str,
    config: SanitizeConfig = DEFAULT_SANITIZE_CONFIG,
    attribute_filter: AttributeFilter | None = None,
) -> str:
    """
    Sanitize HTML against the allowlist.

    Args:
        html_content: HTML fragment to clean.
        config: Tag and attribute allowlists.
        attribute_filter: Per-attribute decision function; defaults to
            sanitize_attribute bound to config. It only sees attributes that
            pass is_permitted_attribute, and a custom filter's result goes
            through sanitize_attribute again.

    Returns:
        HTML containing only allowlisted tags and attributes.
    """
    if not html_content:
        return ""

    keep_attribute = attribute_filter or partial(sanitize_attribute, config=config)
    soup = BeautifulSoup(html_content, "html.parser", multi_valued_attributes=None)

    # Comments, doctypes, CDATA and processing instructions
    for special in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
        special.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue

        name = tag.name.lower()
        if name in config.drop_content_tags:
            tag.decompose()
            continue

        if name not in config.allowed_tags:
            tag.unwrap()
            continue

        if name == "input" and str(tag.get("type", "")).strip().lower() != "checkbox":
            tag.decompose()
            continue

        for attr_name, attr_value in list(tag.attrs.items()):
            if isinstance(attr_value, list):
                attr_value = " ".join(attr_value)
            new_value: str | None = None
            if is_permitted_attribute(attr_name, str(attr_value), config):
                new_value = keep_attribute(name, attr_name, str(attr_value))
            if new_value is not None and attribute_filter is not None:
                new_value = sanitize_attribute(name, attr_name, new_value, config)
            if new_value is None:
                logger.debug("Dropped attribute %s on <%s>", attr_name, name)
                del tag[attr_name]
            elif new_value != attr_value:
                tag[attr_name] = new_value

    return str(soup)
