"""Merge classified articles into the final response."""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from currentaffairs.core.article import Article, ArticlesResponse, DateRange
from currentaffairs.core.config import Config
from currentaffairs.core.enums import Degradation
from currentaffairs.pipeline.context import AggregationContext
from currentaffairs.utils.date_utils import start_of_day
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import normalize_url

logger = get_logger(__name__)

DEADLINE_EXCEEDED_ERROR = "deadline exceeded"

FALLBACK_CATEGORY = "General Studies"
FALLBACK_TAGS = ("current-affairs", "upsc", "analysis")
FALLBACK_SUMMARY = (
    "Today's comprehensive analysis of current affairs and their relevance to "
    "UPSC preparation. Visit the DrishtiIAS website for detailed coverage."
)


class FallbackContentFactory:
    """Placeholder articles pointing at the dated analysis archive."""

    def __init__(self, url_template: str, date_format: str = "%d-%m-%Y"):
        self.url_template = url_template
        self.date_format = date_format

    def for_date(self, day: date) -> Article:
        formatted = day.strftime(self.date_format)
        return Article(
            id=f"fallback-{day.isoformat()}",
            title=f"Daily News Analysis - {formatted}",
            summary=FALLBACK_SUMMARY,
            url=self.url_template.format(date=formatted),
            published_at=start_of_day(day),
            category=FALLBACK_CATEGORY,
            tags=list(FALLBACK_TAGS),
            source_category=FALLBACK_CATEGORY,
            is_fallback=True,
        )

    def for_dates(self, days: Iterable[date]) -> List[Article]:
        return [self.for_date(day) for day in days]


def dedup_key(article: Article) -> Tuple[str, str]:
    return normalize_url(article.url), article.title.strip().lower()


def matches_category(article: Article, category: Optional[str]) -> bool:
    """Case-insensitive match on the article or source category."""
    if not category:
        return True
    wanted = category.strip().lower()
    return article.category.lower() == wanted or article.source_category.lower() == wanted


def matches_date_range(article: Article, date_range: Optional[DateRange]) -> bool:
    return date_range is None or date_range.contains(article.published_at)


class Aggregator:
    """Filter, deduplicate, order and cap articles; never return an empty list."""

    def __init__(self, config: Config, fallback_factory: Optional[FallbackContentFactory] = None):
        self.config = config
        self.fallback_factory = fallback_factory or FallbackContentFactory(
            config.fallback_url_template, config.fallback_date_format
        )

    def aggregate(self, context: AggregationContext, limit: Optional[int] = None) -> ArticlesResponse:
        """Build the response for one run.

        Articles are filtered by the context's category and date range,
        deduplicated on normalized URL plus lowercased title (newest copy
        kept), sorted by ``published_at`` descending and capped at
        ``limit``. With nothing left, one placeholder per requested date is
        returned instead. When sources missed the deadline, placeholders are
        added for requested dates without any completed article.

        Args:
            context: Accumulated run state
            limit: Maximum number of articles; defaults to ``max_articles``

        Returns:
            Response with at least one article
        """
        if limit is None:
            limit = self.config.max_articles

        selected = [
            article
            for article in context.articles
            if matches_category(article, context.category)
            and matches_date_range(article, context.date_range)
        ]
        articles = self.order(self.deduplicate(self.order(selected)))[:limit]
        scraped_count = sum(1 for article in articles if article.scraped_from)

        error = None
        if context.deadline_exceeded:
            error = DEADLINE_EXCEEDED_ERROR
            covered = {article.published_at.date() for article in articles}
            missing = [day for day in context.requested_dates if day not in covered]
            articles = self.order(articles + self.fallback_factory.for_dates(missing))[:limit]

        if not articles:
            logger.warning(
                Degradation.PIPELINE_EMPTY.value,
                requested_dates=[day.isoformat() for day in context.requested_dates],
                failed_slots=len(context.failures),
            )
            articles = self.fallback_factory.for_dates(context.requested_dates)

        logger.info(
            "aggregation_complete",
            candidates=len(context.articles),
            returned=len(articles),
            fallback=sum(1 for article in articles if article.is_fallback),
            failed_slots=len(context.failures),
            incomplete_sources=list(context.incomplete_sources),
        )

        return ArticlesResponse(
            articles=articles,
            count=len(articles),
            scraped_count=scraped_count,
            error=error,
        )

    def fallback_response(self, requested_dates: Sequence[date], error: str) -> ArticlesResponse:
        """Placeholder-only response used when aggregation itself failed."""
        articles = self.fallback_factory.for_dates(requested_dates)
        return ArticlesResponse(articles=articles, count=len(articles), error=error)

    @staticmethod
    def order(articles: List[Article]) -> List[Article]:
        """Newest first; ties broken by id so output is stable."""
        return sorted(articles, key=lambda a: (a.published_at, a.id), reverse=True)

    @staticmethod
    def deduplicate(articles: List[Article]) -> List[Article]:
        seen: Set[Tuple[str, str]] = set()
        unique = []
        for article in articles:
            key = dedup_key(article)
            if key in seen:
                continue
            seen.add(key)
            unique.append(article)

        if len(unique) < len(articles):
            logger.debug("duplicates_removed", count=len(articles) - len(unique))
        return unique
