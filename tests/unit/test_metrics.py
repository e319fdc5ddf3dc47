"""
Tests for plain text extraction, word counts and read time.
"""

from __future__ import annotations

import pytest

from content_pipeline.core.services.metrics import (
    MetricsConfig,
    calculate_read_time,
    count_words,
    extract_html_text,
    extract_tree_text,
)
from content_pipeline.domain.document import DocumentNode


def _tree(data: dict) -> DocumentNode:
    return DocumentNode.from_dict(data)


class TestExtractTreeText:
    """Test plain text from structured trees."""

    def test_blocks_separated(self) -> None:
        tree = _tree(
            {
                "type": "doc",
                "content": [
                    {
                        "type": "heading",
                        "attrs": {"level": 1},
                        "content": [{"type": "text", "text": "T"}],
                    },
                    {"type": "paragraph", "content": [{"type": "text", "text": "Body"}]},
                ],
            }
        )
        assert extract_tree_text(tree) == "T\n\nBody"

    def test_inline_runs_joined(self) -> None:
        tree = _tree(
            {
                "type": "doc",
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {"type": "text", "text": "Hello "},
                            {"type": "text", "text": "world", "marks": [{"type": "bold"}]},
                        ],
                    }
                ],
            }
        )
        assert extract_tree_text(tree) == "Hello world"

    def test_unknown_kinds_contribute_nothing(self) -> None:
        tree = _tree(
            {
                "type": "doc",
                "content": [
                    {"type": "mystery", "content": [{"type": "text", "text": "hidden"}]},
                    {"type": "paragraph", "content": [{"type": "text", "text": "shown"}]},
                ],
            }
        )
        assert extract_tree_text(tree) == "shown"

    def test_empty_doc(self) -> None:
        assert extract_tree_text(_tree({"type": "doc"})) == ""


class TestExtractHtmlText:
    """Test plain text from HTML."""

    def test_strips_tags(self) -> None:
        assert extract_html_text("<p>Hello <em>world</em></p>") == "Hello world"

    def test_headings_excluded_by_default(self) -> None:
        html = "<h1>Title</h1><p>Body</p>"

        assert extract_html_text(html) == "Body"
        assert "Title" in extract_html_text(html, include_headings=True)

    def test_empty(self) -> None:
        assert extract_html_text("") == ""


class TestWordCount:
    """Test whitespace word counting."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0),
            ("   ", 0),
            ("one", 1),
            ("one two\nthree\tfour", 4),
            ("안녕하세요 세계", 2),
        ],
    )
    def test_count_words(self, text: str, expected: int) -> None:
        assert count_words(text) == expected


class TestReadTime:
    """Test read time law: max(1, ceil(words / wpm))."""

    @pytest.mark.parametrize(
        "words,expected",
        [(0, 1), (1, 1), (200, 1), (201, 2), (400, 2), (401, 3)],
    )
    def test_default_speed(self, words: int, expected: int) -> None:
        assert calculate_read_time(words) == expected

    def test_custom_speed(self) -> None:
        assert calculate_read_time(150, MetricsConfig(words_per_minute=100)) == 2
