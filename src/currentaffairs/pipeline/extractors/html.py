"""HTML scrape extraction via an ordered selector chain.

Each strategy is a pure function ``(soup, page_url) -> list | None``. The
chain stops at the first strategy returning a non-empty list; the page-wide
heading scan is the last link. An empty result is a normal outcome for a
day with no published analysis.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from currentaffairs.core.article import PageExtraction, RawItem, TopicOfDay
from currentaffairs.core.config import SourceConfig
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import clean_whitespace

logger = get_logger(__name__)

CONTENT_SELECTORS = (
    ".news-analysis-content",
    ".daily-news-analysis",
    ".content-wrapper",
    ".main-content",
    "article",
    ".post-content",
    ".entry-content",
    ".page-content",
    ".single-content",
)
TITLE_SELECTOR = "h1, h2, h3, .title, .headline"
BODY_SELECTOR = "p, h1, h2, h3, h4, h5, h6, li"
FALLBACK_HEADING_SELECTOR = "h1, h2, h3, h4"
FALLBACK_SELECTOR_NAME = "fallback"

SIDEBAR_SELECTORS = (
    ".sidebar .widget",
    ".right-sidebar",
    ".secondary-sidebar",
    ".widget-area",
    ".sidebar-content",
)
WIDGET_TITLE_SELECTOR = "h3, h4, .widget-title"
WIDGET_MARKERS = ("today", "news", "topics")

MIN_TITLE_CHARS = 10
MIN_BODY_CHARS = 50
FALLBACK_MIN_BODY_CHARS = 30
FALLBACK_BODY_CHARS = 300
TITLE_MAX_CHARS = 200
BODY_MAX_CHARS = 500
MAX_ITEMS = 10
MAX_TOPICS = 15


@dataclass(frozen=True)
class ScrapedBlock:
    """Title/body pair found on a page, before it becomes a RawItem."""

    title: str
    body: str
    url: str
    selector: str


SelectorStrategy = Callable[[BeautifulSoup, str], Optional[List[ScrapedBlock]]]


def _text(element: Tag) -> str:
    return element.get_text().strip()


def container_strategy(selector: str) -> SelectorStrategy:
    """Build a strategy reading article blocks from ``selector`` containers.

    A container is usable when its title (first heading-like element, else
    first link text) is longer than 10 characters and its body (text of
    paragraph, heading and list-item descendants) is longer than 50.
    """

    def strategy(soup: BeautifulSoup, page_url: str) -> Optional[List[ScrapedBlock]]:
        blocks = []
        for element in soup.select(selector):
            heading = element.select_one(TITLE_SELECTOR)
            title = clean_whitespace(_text(heading)) if heading else ""
            if not title:
                first_link = element.select_one("a")
                title = clean_whitespace(_text(first_link)) if first_link else ""

            body = "\n\n".join(_text(el) for el in element.select(BODY_SELECTOR)).strip()

            url = page_url
            link = element.select_one("a[href]")
            if link is not None and link.get("href"):
                url = urljoin(page_url, link["href"])

            if len(title) > MIN_TITLE_CHARS and len(body) > MIN_BODY_CHARS:
                blocks.append(
                    ScrapedBlock(
                        title=title[:TITLE_MAX_CHARS],
                        body=body[:BODY_MAX_CHARS],
                        url=url,
                        selector=selector,
                    )
                )
        return blocks or None

    strategy.__name__ = f"container_strategy[{selector}]"
    return strategy


def heading_fallback(soup: BeautifulSoup, page_url: str) -> Optional[List[ScrapedBlock]]:
    """Pair page-wide headings with the nearest following paragraph or div.

    Headings need 10 to 199 characters; bodies are cut to 300 characters
    and must keep more than 30. At most 10 blocks are returned.
    """
    blocks = []
    for heading in soup.select(FALLBACK_HEADING_SELECTOR):
        if len(blocks) >= MAX_ITEMS:
            break

        title = clean_whitespace(_text(heading))
        if not MIN_TITLE_CHARS <= len(title) < TITLE_MAX_CHARS:
            continue

        sibling = heading.find_next_sibling(["p", "div"])
        body = _text(sibling)[:FALLBACK_BODY_CHARS] if sibling is not None else ""

        if len(body) > FALLBACK_MIN_BODY_CHARS:
            blocks.append(
                ScrapedBlock(title=title, body=body, url=page_url, selector=FALLBACK_SELECTOR_NAME)
            )
    return blocks or None


DEFAULT_STRATEGIES: Sequence[SelectorStrategy] = tuple(
    container_strategy(selector) for selector in CONTENT_SELECTORS
) + (heading_fallback,)


def extract_blocks(
    html: str,
    page_url: str,
    strategies: Sequence[SelectorStrategy] = DEFAULT_STRATEGIES,
) -> List[ScrapedBlock]:
    """Run the selector chain over a page.

    Returns:
        Blocks from the first strategy with results, at most 10; empty if none
    """
    return blocks_from_soup(BeautifulSoup(html, "html.parser"), page_url, strategies)


def blocks_from_soup(
    soup: BeautifulSoup,
    page_url: str,
    strategies: Sequence[SelectorStrategy] = DEFAULT_STRATEGIES,
) -> List[ScrapedBlock]:
    for strategy in strategies:
        blocks = strategy(soup, page_url)
        if blocks:
            return blocks[:MAX_ITEMS]
    return []


def extract_topics_of_day(html: str, page_url: str, limit: int = MAX_TOPICS) -> List[TopicOfDay]:
    """Read "today's topics" style links from sidebar widgets.

    A widget qualifies when its heading mentions today, news or topics.
    """
    return topics_from_soup(BeautifulSoup(html, "html.parser"), page_url, limit)


def topics_from_soup(soup: BeautifulSoup, page_url: str, limit: int = MAX_TOPICS) -> List[TopicOfDay]:
    topics: List[TopicOfDay] = []
    seen = set()

    for selector in SIDEBAR_SELECTORS:
        for widget in soup.select(selector):
            widget_title = " ".join(_text(el) for el in widget.select(WIDGET_TITLE_SELECTOR)).lower()
            if not any(marker in widget_title for marker in WIDGET_MARKERS):
                continue

            for link in widget.select("a, li"):
                title = clean_whitespace(_text(link))
                if not MIN_TITLE_CHARS < len(title) < TITLE_MAX_CHARS:
                    continue

                href = link.get("href")
                if not href:
                    nested = link.select_one("a[href]")
                    href = nested["href"] if nested is not None else ""
                url = urljoin(page_url, href) if href else page_url

                if (title, url) in seen:
                    continue
                seen.add((title, url))
                topics.append(TopicOfDay(title=title, url=url))

                if len(topics) >= limit:
                    return topics

    return topics


class HTMLExtractor:
    """Scrape extractor producing ``RawItem``s for one dated page."""

    def __init__(self, strategies: Sequence[SelectorStrategy] = DEFAULT_STRATEGIES):
        self.strategies = strategies

    def extract(
        self,
        source: SourceConfig,
        payload: str,
        page_url: str,
        published_at: datetime,
        include_topics: bool = False,
    ) -> PageExtraction:
        """Extract items (and optionally sidebar topics) from a page.

        Args:
            source: Scrape target configuration
            payload: Raw HTML
            page_url: URL the payload came from; base for relative links
            published_at: Timestamp assigned to every item on the page
            include_topics: Also read the topics-of-day sidebar

        Returns:
            Page extraction; empty when nothing usable was found
        """
        soup = BeautifulSoup(payload, "html.parser")
        blocks = blocks_from_soup(soup, page_url, self.strategies)

        items = []
        for block in blocks[: source.max_items]:
            try:
                items.append(
                    RawItem(
                        source_id=source.id,
                        title=block.title,
                        body_text=block.body,
                        link=block.url,
                        published_at=published_at,
                        selector_used=block.selector,
                    )
                )
            except ValidationError as e:
                logger.debug("scrape_block_invalid", source_id=source.id, error=str(e))

        topics = topics_from_soup(soup, page_url) if include_topics else []

        if not items and not topics:
            logger.info("extraction_empty", source_id=source.id, url=page_url)
        else:
            logger.info(
                "scrape_extraction_complete",
                source_id=source.id,
                url=page_url,
                items=len(items),
                topics=len(topics),
                selector=items[0].selector_used if items else None,
            )

        return PageExtraction(items=tuple(items), topics=tuple(topics))
