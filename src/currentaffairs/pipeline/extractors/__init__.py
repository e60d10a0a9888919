"""Item extraction from fetched payloads."""

from currentaffairs.pipeline.extractors.article_page import (
    ArticlePage,
    extract_article_page,
    key_points,
    practice_questions,
    reading_time,
)
from currentaffairs.pipeline.extractors.html import (
    DEFAULT_STRATEGIES,
    HTMLExtractor,
    container_strategy,
    extract_blocks,
    extract_topics_of_day,
    heading_fallback,
)
from currentaffairs.pipeline.extractors.rss import RSSExtractor

__all__ = [
    "ArticlePage",
    "DEFAULT_STRATEGIES",
    "HTMLExtractor",
    "RSSExtractor",
    "container_strategy",
    "extract_article_page",
    "extract_blocks",
    "extract_topics_of_day",
    "heading_fallback",
    "key_points",
    "practice_questions",
    "reading_time",
]
