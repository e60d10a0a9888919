# tests/integration/test_article_service.py
"""Integration tests for the read-path service."""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from currentaffairs.core.enums import ClassificationTier, Relevance
from currentaffairs.services.article_service import ArticleService

ARTICLE_URL = "https://www.thehindu.com/business/budget/article4.ece"


@pytest.fixture
def service(test_config, rss_source, fixed_today):
    return ArticleService(test_config, sources=[rss_source], today=lambda: fixed_today)


@pytest.mark.integration
@pytest.mark.asyncio
class TestGetArticles:
    """Tests for ArticleService.get_articles."""

    async def test_returns_classified_articles(self, service, rss_source, sample_rss_feed):
        with respx.mock() as mock:
            mock.get(rss_source.endpoint).mock(return_value=httpx.Response(200, text=sample_rss_feed))

            response = await service.get_articles()

        assert response.success
        parliament = next(a for a in response.articles if a.title.startswith("Parliament"))
        assert parliament.relevance == Relevance.HIGH
        assert parliament.classified_by == ClassificationTier.RULES
        assert parliament.category == "Economics"
        assert parliament.tags == ["parliament", "passes", "constitutional", "amendment", "bill"]

    async def test_never_raises(self, service):
        """Should turn an unexpected failure into fallback content with an error."""
        service.pipeline.run = AsyncMock(side_effect=RuntimeError("boom"))

        response = await service.get_articles()

        assert response.success
        assert response.error == "Aggregation failed, showing fallback content: boom"
        assert [a.id for a in response.articles] == ["fallback-2026-01-14"]

    async def test_payload_shape(self, service, rss_source):
        with respx.mock() as mock:
            mock.get(rss_source.endpoint).mock(return_value=httpx.Response(404))

            payload = (await service.get_articles()).to_payload()

        assert payload["count"] == 1
        assert payload["articles"][0]["isFallback"] is True
        assert set(payload) >= {"success", "articles", "count", "lastUpdated"}


@pytest.mark.integration
@pytest.mark.asyncio
class TestGetArticleDetail:
    """Tests for ArticleService.get_article_detail."""

    async def test_detail_from_article_page(self, service, sample_article_html):
        with respx.mock() as mock:
            mock.get(ARTICLE_URL).mock(return_value=httpx.Response(200, text=sample_article_html))

            detail = await service.get_article_detail(ARTICLE_URL)

        assert detail is not None
        assert detail.title == "Budget raises capital spending on infrastructure"
        assert detail.author == "Staff Reporter"
        assert detail.category == "Economics"
        assert detail.reading_time == 1
        assert len(detail.key_points) == 2
        assert detail.questions[0].startswith("What are the economic implications")
        assert detail.summary.endswith("...")
        assert detail.id.startswith("www.thehindu.com-")

    async def test_unreachable_page(self, service):
        with respx.mock() as mock:
            mock.get(ARTICLE_URL).mock(return_value=httpx.Response(404))

            assert await service.get_article_detail(ARTICLE_URL) is None

    async def test_page_without_content(self, service):
        """Should return None when the page has no usable article body."""
        with respx.mock() as mock:
            mock.get(ARTICLE_URL).mock(
                return_value=httpx.Response(200, text="<html><h1>Only a headline</h1></html>")
            )

            assert await service.get_article_detail(ARTICLE_URL) is None


@pytest.mark.integration
class TestConstruction:
    def test_loads_packaged_sources(self, test_config):
        service = ArticleService(test_config)

        assert len(service.pipeline.active_sources) >= 1
        assert service.classifier.client is None
