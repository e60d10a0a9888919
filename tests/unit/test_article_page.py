# tests/unit/test_article_page.py
"""Unit tests for single-article page extraction."""

from datetime import datetime, timezone

import pytest

from currentaffairs.pipeline.extractors import (
    extract_article_page,
    key_points,
    practice_questions,
    reading_time,
)


@pytest.mark.unit
class TestExtractArticlePage:
    """Tests for extract_article_page."""

    def test_reads_page_fields(self, sample_article_html):
        page = extract_article_page(sample_article_html)

        assert page is not None
        assert page.title == "Budget raises capital spending on infrastructure"
        assert page.author == "Staff Reporter"
        assert page.published_at == datetime(2026, 1, 13, 4, 0, tzinfo=timezone.utc)
        assert "capital expenditure" in page.content
        assert "finance ministry" in page.content

    def test_short_content_returns_none(self):
        """Should give up on pages without substantial article text."""
        html = "<html><body><h1>Headline here</h1><div class='article-content'>Too short.</div></body></html>"
        assert extract_article_page(html) is None

    def test_missing_title_returns_none(self):
        html = f"<html><body><div class='article-content'>{'word ' * 40}</div></body></html>"
        assert extract_article_page(html) is None

    def test_default_author(self):
        html = (
            "<html><body><h1>Headline for the article</h1>"
            f"<div class='story-content'>{'Substantial article text. ' * 10}</div></body></html>"
        )

        page = extract_article_page(html)

        assert page.author == "The Hindu"
        assert page.published_at is None


@pytest.mark.unit
class TestDerivedFields:
    """Tests for reading time, key points and practice questions."""

    def test_reading_time_rounds_up(self):
        assert reading_time("word " * 201) == 2

    def test_reading_time_minimum(self):
        assert reading_time("") == 1

    def test_key_points_from_long_paragraphs(self, sample_article_html):
        page = extract_article_page(sample_article_html)

        points = key_points(page.content)

        assert points == [
            "The Union Budget increased capital expenditure on infrastructure and railways.",
            "The finance ministry said the economy grew faster than expected in the last quarter.",
        ]

    def test_key_points_capped(self):
        content = "\n\n".join(
            f"Paragraph number {i} carries a long enough opening sentence. Then more." for i in range(8)
        )
        assert len(key_points(content)) == 5

    def test_questions_by_category(self):
        assert "foreign policy" in practice_questions("International Relations")[0]
        assert len(practice_questions("Polity")) == 3

    def test_generic_questions(self):
        assert practice_questions("Sports")[1] == "How is this relevant to UPSC preparation?"
