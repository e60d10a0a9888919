"""Pipeline orchestrator: fetch, extract, classify and aggregate.

Sources run concurrently and in isolation; items within one source are
classified sequentially. The whole run is bounded by a request deadline,
after which unfinished sources are cancelled and whatever was already
classified is returned.
"""

import asyncio
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from currentaffairs.core.article import (
    Article,
    ArticlesResponse,
    Classification,
    DateRange,
    PageExtraction,
    RawItem,
    TopicOfDay,
)
from currentaffairs.core.config import Config, SourceConfig
from currentaffairs.core.enums import ClassificationTier, Degradation, SourceKind
from currentaffairs.pipeline.aggregator import Aggregator
from currentaffairs.pipeline.classifiers import TwoTierClassifier
from currentaffairs.pipeline.context import AggregationContext, SourceFailure, SourceResult
from currentaffairs.pipeline.extractors import HTMLExtractor, RSSExtractor
from currentaffairs.pipeline.fetchers import Fetcher
from currentaffairs.services.cache_service import CacheService
from currentaffairs.utils.date_utils import (
    archive_dates,
    dates_between,
    is_weekend,
    now_utc,
    start_of_day,
    today_utc,
)
from currentaffairs.utils.exceptions import SourceUnavailableError
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import title_prefix

logger = get_logger(__name__)

LATEST_WINDOW = "latest"

TOPIC_CATEGORY = "Today's Topics"
TOPIC_TAGS = ("daily-topics", "current-affairs")
TOPIC_SUMMARY = "Today's important topic from DrishtiIAS. Click to read the full analysis."


def article_id(source_id: str, published_at: datetime, title: str) -> str:
    """Deterministic id from source, unix timestamp and title prefix."""
    return f"{source_id}-{int(published_at.timestamp())}-{title_prefix(title)}"


def requested_dates(date_range: Optional[DateRange], today: date) -> List[date]:
    """Dates a caller asked for, newest first; just today without a range."""
    if date_range is None:
        return [today]
    return dates_between(date_range.start, date_range.end)


class IngestionPipeline:
    """One-shot ingestion run over the configured sources."""

    def __init__(
        self,
        config: Config,
        sources: Sequence[SourceConfig],
        classifier: TwoTierClassifier,
        cache_service: CacheService,
        fetcher: Optional[Fetcher] = None,
        rss_extractor: Optional[RSSExtractor] = None,
        html_extractor: Optional[HTMLExtractor] = None,
        aggregator: Optional[Aggregator] = None,
        today: Callable[[], date] = today_utc,
    ):
        """Initialize pipeline.

        Args:
            config: Application configuration
            sources: Source registry; inactive entries are skipped
            classifier: Two-tier item classifier
            cache_service: Shared extraction/classification cache
            fetcher: HTTP fetcher (built from config when omitted)
            rss_extractor: RSS extractor
            html_extractor: Scrape extractor
            aggregator: Final merge stage
            today: Current-date source; tests pin it
        """
        self.config = config
        self.sources = list(sources)
        self.classifier = classifier
        self.cache_service = cache_service
        self.fetcher = fetcher or Fetcher(config)
        self.rss_extractor = rss_extractor or RSSExtractor()
        self.html_extractor = html_extractor or HTMLExtractor()
        self.aggregator = aggregator or Aggregator(config)
        self._today = today

    @property
    def active_sources(self) -> List[SourceConfig]:
        return [source for source in self.sources if source.active]

    async def run(
        self,
        category: Optional[str] = None,
        date_range: Optional[DateRange] = None,
        limit: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> ArticlesResponse:
        """Run the pipeline once.

        Args:
            category: Optional category filter
            date_range: Optional publication date filter; also selects
                which archive pages scrape sources read
            limit: Maximum number of articles
            deadline: Overall time budget in seconds

        Returns:
            Aggregated response (never empty)
        """
        if deadline is None:
            deadline = self.config.request_deadline_sec
        today = self._today()
        sources = self.active_sources

        context = AggregationContext(
            requested_dates=tuple(requested_dates(date_range, today)),
            category=category,
            date_range=date_range,
        )

        logger.info(
            "pipeline_starting",
            sources=len(sources),
            category=category,
            deadline_sec=deadline,
        )

        if not sources:
            logger.warning("no_active_sources")
            return self.aggregator.aggregate(context, limit)

        semaphore = asyncio.Semaphore(len(sources))
        sinks: Dict[str, List[Article]] = {source.id: [] for source in sources}
        tasks: Dict[asyncio.Task, SourceConfig] = {
            asyncio.create_task(
                self._run_bounded(semaphore, source, date_range, today, sinks[source.id])
            ): source
            for source in sources
        }

        done, pending = await asyncio.wait(tasks, timeout=deadline)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        for task, source in tasks.items():
            if task in done:
                context = context.with_result(self._task_result(task, source, sinks[source.id]))
            else:
                logger.warning(
                    Degradation.DEADLINE_EXCEEDED.value,
                    source_id=source.id,
                    completed_articles=len(sinks[source.id]),
                )
                context = context.with_result(
                    SourceResult(source_id=source.id, articles=tuple(sinks[source.id]))
                ).with_incomplete(source.id)

        response = self.aggregator.aggregate(context, limit)

        logger.info(
            "pipeline_completed",
            articles=response.count,
            degradations=sorted({d.value for d in context.degradations}),
        )
        return response

    async def _run_bounded(
        self,
        semaphore: asyncio.Semaphore,
        source: SourceConfig,
        date_range: Optional[DateRange],
        today: date,
        sink: List[Article],
    ) -> SourceResult:
        async with semaphore:
            return await self.process_source(source, date_range, today, sink)

    def _task_result(
        self, task: asyncio.Task, source: SourceConfig, sink: List[Article]
    ) -> SourceResult:
        error = task.exception()
        if error is None:
            return task.result()

        # A bug in one source must not take the others down
        logger.error("source_task_failed", source_id=source.id, error=repr(error))
        return SourceResult(
            source_id=source.id,
            articles=tuple(sink),
            failures=(SourceFailure(source.id, "*", repr(error)),),
        )

    async def process_source(
        self,
        source: SourceConfig,
        date_range: Optional[DateRange],
        today: date,
        sink: List[Article],
    ) -> SourceResult:
        """Fetch, extract and classify every window of one source.

        Classified articles are appended to ``sink`` as they complete, so a
        caller that cancels this coroutine keeps the finished ones.
        """
        failures: List[SourceFailure] = []
        empty_windows: List[str] = []
        degraded = 0

        for window, day in self.windows_for(source, date_range, today):
            try:
                extraction, page_url = await self._load_window(source, day)
            except SourceUnavailableError as e:
                logger.warning(
                    Degradation.SOURCE_UNAVAILABLE.value,
                    source_id=source.id,
                    window=window,
                    url=e.url,
                    error=str(e),
                )
                failures.append(SourceFailure(source.id, window, str(e)))
                continue

            if extraction.is_empty:
                empty_windows.append(window)
                continue

            if day is not None and window == self._newest_window(source, date_range, today):
                sink.extend(self._topic_articles(source, extraction.topics, day, page_url))

            for item in extraction.items:
                classification = await self.classifier.classify(
                    item.title, item.body_text, source.category
                )
                if self.classifier.client is not None and classification.tier == ClassificationTier.RULES:
                    degraded += 1
                sink.append(self._build_article(source, item, classification, page_url))

        logger.info(
            "source_processed",
            source_id=source.id,
            articles=len(sink),
            failed_windows=len(failures),
            empty_windows=len(empty_windows),
        )

        return SourceResult(
            source_id=source.id,
            articles=tuple(sink),
            failures=tuple(failures),
            empty_windows=tuple(empty_windows),
            degraded_classifications=degraded,
        )

    def windows_for(
        self, source: SourceConfig, date_range: Optional[DateRange], today: date
    ) -> List[Tuple[str, Optional[date]]]:
        """(cache window key, archive date) pairs to read for ``source``.

        Live feeds have a single undated window. Dated archives read the
        requested range, or the trailing window ending today, skipping
        weekends for business-day sources.
        """
        if source.kind == SourceKind.RSS or not source.is_dated:
            return [(LATEST_WINDOW, None)]

        if date_range is not None:
            days = [
                day
                for day in dates_between(date_range.start, date_range.end)
                if not (source.business_days_only and is_weekend(day))
            ]
        else:
            days = archive_dates(today, source.date_window_days, source.business_days_only)

        return [(day.isoformat(), day) for day in days]

    def _newest_window(
        self, source: SourceConfig, date_range: Optional[DateRange], today: date
    ) -> Optional[str]:
        if not source.extract_topics_of_day:
            return None
        windows = self.windows_for(source, date_range, today)
        return windows[0][0] if windows else None

    async def _load_window(
        self, source: SourceConfig, day: Optional[date]
    ) -> Tuple[PageExtraction, str]:
        """Cached fetch + extraction for one window."""
        url = source.url_for(day)
        window = day.isoformat() if day is not None else LATEST_WINDOW

        async def load() -> PageExtraction:
            payload = await self.fetcher.fetch(source, url)
            if source.kind == SourceKind.RSS:
                return self.rss_extractor.extract(source, payload, fetched_at=now_utc())
            return self.html_extractor.extract(
                source,
                payload,
                page_url=url,
                published_at=start_of_day(day) if day is not None else now_utc(),
                include_topics=source.extract_topics_of_day,
            )

        extraction = await self.cache_service.get_or_load_extraction(
            source.id, window, source.fetch_interval_minutes, load
        )
        return extraction, url

    def _build_article(
        self,
        source: SourceConfig,
        item: RawItem,
        classification: Classification,
        page_url: str,
    ) -> Article:
        scraped = source.kind == SourceKind.SCRAPE
        return Article(
            id=article_id(source.id, item.published_at, item.title),
            title=item.title,
            summary=classification.summary,
            url=item.link or page_url,
            published_at=item.published_at,
            category=classification.category,
            tags=list(classification.tags),
            source_category=source.category,
            source_id=source.id,
            relevance=classification.relevance,
            syllabus_topics=list(classification.syllabus_topics),
            classified_by=classification.tier,
            scraped_from=page_url if scraped else None,
            selector_used=item.selector_used,
        )

    def _topic_articles(
        self,
        source: SourceConfig,
        topics: Sequence[TopicOfDay],
        day: date,
        page_url: str,
    ) -> List[Article]:
        published_at = start_of_day(day)
        timestamp = int(published_at.timestamp())
        return [
            Article(
                id=f"{source.id}-topic-{timestamp}-{index}",
                title=topic.title,
                summary=TOPIC_SUMMARY,
                url=topic.url,
                published_at=published_at,
                category=TOPIC_CATEGORY,
                tags=list(TOPIC_TAGS),
                source_category=source.category,
                source_id=source.id,
                is_topic_of_day=True,
                scraped_from=page_url,
            )
            for index, topic in enumerate(topics)
        ]
