# tests/unit/test_html_extractor.py
"""Unit tests for the HTML selector chain."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from currentaffairs.pipeline.extractors import (
    HTMLExtractor,
    container_strategy,
    extract_blocks,
    extract_topics_of_day,
    heading_fallback,
)

PAGE_URL = "https://www.drishtiias.com/news-analysis/13-01-2026"
PUBLISHED = datetime(2026, 1, 13, tzinfo=timezone.utc)


@pytest.mark.unit
class TestSelectorChain:
    """Tests for extract_blocks and its strategies."""

    def test_first_matching_container_wins(self, sample_analysis_html):
        """Should read both blocks of the first matching selector."""
        blocks = extract_blocks(sample_analysis_html, PAGE_URL)

        assert [b.title for b in blocks] == [
            "India and Japan sign bilateral infrastructure agreement",
            "RBI keeps repo rate unchanged in policy review",
        ]
        assert all(b.selector == ".news-analysis-content" for b in blocks)

    def test_relative_links_resolved(self, sample_analysis_html):
        blocks = extract_blocks(sample_analysis_html, PAGE_URL)

        assert blocks[0].url == "https://www.drishtiias.com/daily-updates/india-japan-agreement"
        assert blocks[1].url == "https://www.drishtiias.com/daily-updates/rbi-policy"

    def test_body_joins_descendant_text(self, sample_analysis_html):
        blocks = extract_blocks(sample_analysis_html, PAGE_URL)

        assert "bilateral agreement on infrastructure financing" in blocks[0].body
        assert "\n\n" in blocks[0].body

    def test_title_falls_back_to_first_link(self):
        """Should use the first link text when no heading exists."""
        html = (
            '<article><a href="/story">Cabinet approves new rural housing scheme</a>'
            "<p>The Union Cabinet approved a housing scheme for rural families across states.</p>"
            "</article>"
        )
        blocks = extract_blocks(html, PAGE_URL)

        assert blocks[0].title == "Cabinet approves new rural housing scheme"
        assert blocks[0].selector == "article"

    def test_short_container_skipped(self):
        """Should ignore containers whose body is 50 characters or less."""
        html = '<div class="main-content"><h2>Long enough headline here</h2><p>Brief.</p></div>'
        strategy = container_strategy(".main-content")

        assert strategy(BeautifulSoup(html, "html.parser"), PAGE_URL) is None

    def test_heading_fallback(self, heading_only_html):
        """Should pair headings with following paragraphs when no container matches."""
        blocks = extract_blocks(heading_only_html, PAGE_URL)

        assert len(blocks) == 1
        assert blocks[0].title == "Supreme Court verdict on electoral bonds"
        assert blocks[0].selector == "fallback"
        assert blocks[0].url == PAGE_URL

    def test_heading_fallback_truncates_body(self):
        html = "<h2>A sufficiently long heading</h2><p>" + "word " * 200 + "</p>"
        blocks = heading_fallback(BeautifulSoup(html, "html.parser"), PAGE_URL)

        assert len(blocks[0].body) == 300

    def test_heading_fallback_caps_at_ten(self):
        html = "".join(
            f"<h3>Heading number {i:02d} text</h3><p>{'Paragraph body text. ' * 3}</p>"
            for i in range(15)
        )
        blocks = heading_fallback(BeautifulSoup(html, "html.parser"), PAGE_URL)

        assert len(blocks) == 10

    def test_heading_fallback_length_bounds(self):
        """Should accept 10-character headings and reject 200-character ones."""
        body = "<p>" + "Enough body text to pass the limit. " * 2 + "</p>"
        html = f"<h2>{'a' * 10}</h2>{body}<h2>{'b' * 200}</h2>{body}"
        blocks = heading_fallback(BeautifulSoup(html, "html.parser"), PAGE_URL)

        assert [b.title for b in blocks] == ["a" * 10]

    def test_empty_page_yields_nothing(self):
        assert extract_blocks("<html><body><p>Nothing here</p></body></html>", PAGE_URL) == []


@pytest.mark.unit
class TestTopicsOfDay:
    """Tests for sidebar topic extraction."""

    def test_reads_topics_widget(self, sample_analysis_html):
        """Should read the widget titled with today/topics and dedupe links."""
        topics = extract_topics_of_day(sample_analysis_html, PAGE_URL)

        assert [t.title for t in topics] == [
            "National Green Hydrogen Mission",
            "Places of Worship Act",
        ]
        assert topics[0].url == "https://www.drishtiias.com/topics/green-hydrogen-mission"

    def test_caps_topics(self):
        links = "".join(f'<a href="/t/{i}">Important topic number {i}</a>' for i in range(30))
        html = f'<div class="sidebar-content"><h4>News Topics</h4>{links}</div>'

        assert len(extract_topics_of_day(html, PAGE_URL)) == 15

    def test_no_sidebar(self, heading_only_html):
        assert extract_topics_of_day(heading_only_html, PAGE_URL) == []


@pytest.mark.unit
class TestHTMLExtractor:
    """Tests for HTMLExtractor."""

    def test_items_carry_page_date_and_selector(self, scrape_source, sample_analysis_html):
        extraction = HTMLExtractor().extract(
            scrape_source, sample_analysis_html, PAGE_URL, PUBLISHED, include_topics=True
        )

        assert len(extraction.items) == 2
        assert all(item.published_at == PUBLISHED for item in extraction.items)
        assert extraction.items[0].selector_used == ".news-analysis-content"
        assert len(extraction.topics) == 2

    def test_topics_only_when_requested(self, scrape_source, sample_analysis_html):
        extraction = HTMLExtractor().extract(scrape_source, sample_analysis_html, PAGE_URL, PUBLISHED)

        assert extraction.topics == ()

    def test_empty_page_is_not_an_error(self, scrape_source):
        """Should return an empty extraction for a page with no content."""
        extraction = HTMLExtractor().extract(scrape_source, "<html></html>", PAGE_URL, PUBLISHED)

        assert extraction.is_empty

    def test_custom_strategy_chain(self, scrape_source, heading_only_html):
        """Should honour an injected strategy list."""
        extractor = HTMLExtractor(strategies=[heading_fallback])
        extraction = extractor.extract(scrape_source, heading_only_html, PAGE_URL, PUBLISHED)

        assert extraction.items[0].selector_used == "fallback"

    def test_page_parsed_once(self, scrape_source, sample_analysis_html):
        """Should share one parsed document between items and topics."""
        with patch(
            "currentaffairs.pipeline.extractors.html.BeautifulSoup", wraps=BeautifulSoup
        ) as parser:
            extraction = HTMLExtractor().extract(
                scrape_source, sample_analysis_html, PAGE_URL, PUBLISHED, include_topics=True
            )

        assert parser.call_count == 1
        assert len(extraction.items) == 2
        assert len(extraction.topics) == 2
