"""Single-article page extraction for the detail view."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from currentaffairs.utils.date_utils import parse_date
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import clean_whitespace

logger = get_logger(__name__)

TITLE_SELECTOR = "h1.title, h1.headline, .article-title, h1"
CONTENT_SELECTORS = (
    ".article-content",
    ".story-content",
    ".content-body",
    ".article-body",
    ".story-element-text",
    ".paywall",
)
AUTHOR_SELECTOR = '.author-name, .byline, .story-byline, [rel="author"]'
DATE_SELECTOR = "time, .publish-date, .story-date, .article-date"

MIN_CONTENT_CHARS = 100
WORDS_PER_MINUTE = 200
MAX_KEY_POINTS = 5
KEY_POINT_MIN_PARAGRAPH = 50
KEY_POINT_MIN_SENTENCE = 20

PRACTICE_QUESTIONS: Dict[str, Tuple[str, ...]] = {
    "Polity": (
        "What are the key constitutional implications discussed in this article?",
        "How does this development affect the federal structure of India?",
        "What role do different institutions play in this context?",
    ),
    "Economics": (
        "What are the economic implications of the policies discussed?",
        "How might this affect India's GDP and economic growth?",
        "What are the fiscal and monetary policy aspects mentioned?",
    ),
    "International Relations": (
        "How does this development affect India's foreign policy?",
        "What are the strategic implications for India?",
        "How does this relate to India's neighborhood policy?",
    ),
}
GENERIC_QUESTIONS: Tuple[str, ...] = (
    "What are the main points discussed in this article?",
    "How is this relevant to UPSC preparation?",
    "What are the policy implications mentioned?",
)


@dataclass(frozen=True)
class ArticlePage:
    """Raw fields read from an article page."""

    title: str
    content: str
    author: str
    published_at: Optional[datetime]


def extract_article_page(html: str, default_author: str = "The Hindu") -> Optional[ArticlePage]:
    """Read title, content, author and date from an article page.

    Content comes from the first selector whose matches, joined by blank
    lines, exceed 100 characters.

    Returns:
        ArticlePage, or None when the title or content is missing
    """
    soup = BeautifulSoup(html, "html.parser")

    title_el = soup.select_one(TITLE_SELECTOR)
    title = clean_whitespace(title_el.get_text()) if title_el else ""

    content = ""
    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        if elements:
            content = "\n\n".join(el.get_text().strip() for el in elements).strip()
            if len(content) > MIN_CONTENT_CHARS:
                break

    if not title or len(content) < MIN_CONTENT_CHARS:
        logger.info("article_page_incomplete", has_title=bool(title), content_chars=len(content))
        return None

    author_el = soup.select_one(AUTHOR_SELECTOR)
    author = clean_whitespace(author_el.get_text()) if author_el else ""

    published_at = None
    date_el = soup.select_one(DATE_SELECTOR)
    if date_el is not None:
        published_at = parse_date(date_el.get("datetime")) or parse_date(date_el.get_text().strip())

    return ArticlePage(
        title=title,
        content=content,
        author=author or default_author,
        published_at=published_at,
    )


def reading_time(content: str) -> int:
    """Minutes to read at 200 words per minute, at least 1."""
    return max(1, math.ceil(len(content.split()) / WORDS_PER_MINUTE))


def key_points(content: str) -> List[str]:
    """First substantial sentence of each of the first five long paragraphs."""
    points = []
    paragraphs = [p for p in content.split("\n\n") if len(p.strip()) > KEY_POINT_MIN_PARAGRAPH]

    for paragraph in paragraphs[:MAX_KEY_POINTS]:
        sentences = [s.strip() for s in paragraph.split(".") if len(s.strip()) > KEY_POINT_MIN_SENTENCE]
        if sentences:
            points.append(clean_whitespace(sentences[0]) + ".")

    return points


def practice_questions(category: str) -> List[str]:
    """Three practice questions for an article category."""
    return list(PRACTICE_QUESTIONS.get(category, GENERIC_QUESTIONS))
