"""HTTP fetcher for RSS feeds and scrape targets."""

from typing import Dict, Optional

import httpx

from currentaffairs.core.config import Config, SourceConfig
from currentaffairs.core.enums import SourceKind
from currentaffairs.pipeline.fetchers.rate_limiter import RateLimiter
from currentaffairs.utils.exceptions import (
    FetchHTTPError,
    FetchNetworkError,
    FetchTimeoutError,
)
from currentaffairs.utils.logging import get_logger
from currentaffairs.utils.text_utils import extract_domain

logger = get_logger(__name__)

# Browser-like headers; bare clients get blocked by most editorial sites
SCRAPE_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class Fetcher:
    """Single-attempt HTTP GET with typed failures.

    Scrape targets go through the per-host rate limiter; RSS feeds do not.
    """

    def __init__(
        self,
        config: Config,
        rate_limiter: Optional[RateLimiter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize fetcher.

        Args:
            config: Application configuration
            rate_limiter: Politeness limiter for scrape targets
            client: Shared HTTP client; one is opened per request when omitted
        """
        self.config = config
        self.timeout = config.request_timeout_sec
        self.rate_limiter = rate_limiter or RateLimiter(config.crawl_delay_sec)
        self._client = client

    def headers_for(self, source: SourceConfig) -> Dict[str, str]:
        if source.kind == SourceKind.SCRAPE:
            return dict(SCRAPE_HEADERS)
        return {"User-Agent": self.config.rss_user_agent}

    async def fetch(self, source: SourceConfig, url: str) -> str:
        """Fetch one payload for ``source``.

        Args:
            source: Source being fetched
            url: Concrete URL (dated archives render their endpoint first)

        Returns:
            Response body as text

        Raises:
            FetchTimeoutError: Request exceeded the timeout
            FetchHTTPError: Non-2xx response
            FetchNetworkError: Any other transport failure
        """
        headers = self.headers_for(source)

        if source.kind == SourceKind.SCRAPE:
            async with self.rate_limiter.slot(extract_domain(url)):
                return await self.get(url, headers)

        return await self.get(url, headers)

    async def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """GET ``url`` once and return the body text."""
        headers = headers if headers is not None else dict(SCRAPE_HEADERS)
        logger.debug("fetch_started", url=url)

        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    follow_redirects=True,
                ) as client:
                    response = await client.get(url, headers=headers)

        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Timed out fetching {url}: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise FetchNetworkError(f"HTTP request failed for {url}: {e}", url=url) from e

        if not response.is_success:
            raise FetchHTTPError(
                f"{url} returned HTTP {response.status_code}",
                status=response.status_code,
                url=url,
            )

        logger.debug("fetch_complete", url=url, status=response.status_code, size=len(response.text))
        return response.text
