"""RSS item extraction."""

from datetime import datetime
from typing import List

import feedparser
from pydantic import ValidationError

from currentaffairs.core.article import PageExtraction, RawItem
from currentaffairs.core.config import SourceConfig
from currentaffairs.utils.date_utils import parse_date
from currentaffairs.utils.exceptions import FeedParseError
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import clean_whitespace, extract_text_from_html

logger = get_logger(__name__)

TITLE_MAX_CHARS = 200
BODY_MAX_CHARS = 500


class RSSExtractor:
    """Map the first N items of an RSS document to ``RawItem``s."""

    def extract(
        self,
        source: SourceConfig,
        payload: str,
        fetched_at: datetime,
    ) -> PageExtraction:
        """Parse an RSS payload.

        Malformed XML that still yields entries is used as-is (feedparser
        is lenient). Malformed XML with no entries counts as an unavailable
        source, so the slot is retried instead of cached as empty.

        Args:
            source: Feed configuration (``max_items`` bounds the result)
            payload: Raw XML text
            fetched_at: Timestamp used for items without a parseable date

        Returns:
            Extraction holding the valid items, in feed order

        Raises:
            FeedParseError: Payload is malformed and has no entries
        """
        feed = feedparser.parse(payload)

        if feed.bozo:
            error = str(getattr(feed, "bozo_exception", ""))
            if not feed.entries:
                logger.warning("rss_parse_failed", source_id=source.id, exception=error)
                raise FeedParseError(
                    f"Malformed feed from {source.id}: {error}", url=source.endpoint
                )
            logger.info("rss_parse_warning", source_id=source.id, exception=error)

        items = self._extract_items(source, feed.entries[: source.max_items], fetched_at)

        logger.info(
            "rss_extraction_complete",
            source_id=source.id,
            entries=len(feed.entries),
            items=len(items),
        )
        return PageExtraction(items=tuple(items))

    def _extract_items(self, source: SourceConfig, entries, fetched_at: datetime) -> List[RawItem]:
        items = []

        for entry in entries:
            title = clean_whitespace(entry.get("title", ""))
            description = entry.get("description") or entry.get("summary") or ""
            body = extract_text_from_html(description)

            if not title or not body:
                logger.debug("rss_entry_dropped", source_id=source.id, title=title[:50])
                continue

            published_at = (
                parse_date(entry.get("published"))
                or parse_date(entry.get("updated"))
                or fetched_at
            )

            try:
                items.append(
                    RawItem(
                        source_id=source.id,
                        title=title[:TITLE_MAX_CHARS],
                        body_text=body[:BODY_MAX_CHARS],
                        link=entry.get("link", ""),
                        published_at=published_at,
                    )
                )
            except ValidationError as e:
                logger.debug("rss_entry_invalid", source_id=source.id, error=str(e))

        return items
