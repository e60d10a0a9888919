"""Read-path entry point used by the presentation layer."""

from datetime import date
from typing import Callable, List, Optional, Sequence

from currentaffairs.core.article import ArticleDetail, ArticlesResponse, DateRange
from currentaffairs.core.config import Config, SourceConfig
from currentaffairs.integrations.provider_factory import LLMClient, ProviderFactory
from currentaffairs.pipeline.aggregator import Aggregator
from currentaffairs.pipeline.classifiers import TwoTierClassifier
from currentaffairs.pipeline.extractors import (
    extract_article_page,
    key_points,
    practice_questions,
    reading_time,
)
from currentaffairs.pipeline.fetchers import Fetcher
from currentaffairs.pipeline.orchestrator import IngestionPipeline, article_id, requested_dates
from currentaffairs.services.cache_service import CacheService
from currentaffairs.services.config_loader import ConfigLoader
from currentaffairs.utils.date_utils import now_utc, today_utc
from currentaffairs.utils.exceptions import SourceUnavailableError
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import extract_domain

logger = get_logger(__name__)

DETAIL_SUMMARY_CHARS = 300


class ArticleService:
    """Builds and runs the pipeline; converts any failure into fallback content.

    One instance is meant to live for the whole process so the cache
    carries over between requests.
    """

    def __init__(
        self,
        config: Config,
        sources: Optional[Sequence[SourceConfig]] = None,
        client: Optional[LLMClient] = None,
        cache_service: Optional[CacheService] = None,
        fetcher: Optional[Fetcher] = None,
        config_loader: Optional[ConfigLoader] = None,
        today: Callable[[], date] = today_utc,
    ):
        """Initialize article service.

        Args:
            config: Application configuration
            sources: Source registry (loaded from ``sources.yaml`` when omitted)
            client: Tier 1 client (resolved through ``ProviderFactory`` when omitted)
            cache_service: Cache shared across requests
            fetcher: HTTP fetcher
            config_loader: Loader for the YAML configuration
            today: Current-date source; tests pin it
        """
        self.config = config
        self._today = today
        loader = config_loader or ConfigLoader(config.config_dir)

        self.sources: List[SourceConfig] = (
            list(sources) if sources is not None else loader.load_sources_config()
        )
        self.cache_service = cache_service or CacheService(
            classification_ttl_minutes=config.classification_cache_ttl_minutes
        )
        self.fetcher = fetcher or Fetcher(config)

        if client is None:
            client = ProviderFactory(config).get_classification_client()

        self.classifier = TwoTierClassifier(
            rules=loader.load_classifier_rules(),
            prompt=loader.load_prompt_config("classification"),
            client=client,
            cache_service=self.cache_service,
            timeout_sec=config.classification_timeout_sec,
        )
        self.aggregator = Aggregator(config)
        self.pipeline = IngestionPipeline(
            config=config,
            sources=self.sources,
            classifier=self.classifier,
            cache_service=self.cache_service,
            fetcher=self.fetcher,
            aggregator=self.aggregator,
            today=today,
        )

        logger.info(
            "article_service_initialized",
            sources=len(self.sources),
            active_sources=len(self.pipeline.active_sources),
            tier1_enabled=client is not None,
        )

    async def get_articles(
        self,
        category: Optional[str] = None,
        date_range: Optional[DateRange] = None,
        limit: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> ArticlesResponse:
        """Articles for the presentation layer. Never raises.

        Args:
            category: Optional category filter
            date_range: Optional publication date range
            limit: Maximum number of articles
            deadline: Overall time budget in seconds

        Returns:
            Response with at least one article; on unexpected failure a
            fallback-only response carrying an ``error`` string
        """
        try:
            return await self.pipeline.run(
                category=category,
                date_range=date_range,
                limit=limit,
                deadline=deadline,
            )
        except Exception as e:
            logger.exception("get_articles_failed", error=str(e))
            return self.aggregator.fallback_response(
                requested_dates(date_range, self._today()),
                error=f"Aggregation failed, showing fallback content: {e}",
            )

    async def get_article_detail(self, url: str) -> Optional[ArticleDetail]:
        """Deep-scrape one article page.

        Returns:
            ArticleDetail, or None if the page cannot be fetched or lacks a
            title or enough content
        """
        try:
            html = await self.fetcher.get(url)
        except SourceUnavailableError as e:
            logger.warning("article_fetch_failed", url=url, error=str(e))
            return None

        page = extract_article_page(html)
        if page is None:
            return None

        classification = await self.classifier.classify(page.title, page.content, "General")
        published_at = page.published_at or now_utc()

        return ArticleDetail(
            id=article_id(extract_domain(url) or "article", published_at, page.title),
            title=page.title,
            content=page.content,
            summary=page.content[:DETAIL_SUMMARY_CHARS].strip() + "...",
            author=page.author,
            published_at=published_at,
            url=url,
            category=classification.category,
            tags=list(classification.tags),
            reading_time=reading_time(page.content),
            relevance=classification.relevance,
            syllabus_topics=list(classification.syllabus_topics),
            key_points=key_points(page.content),
            questions=practice_questions(classification.category),
        )
