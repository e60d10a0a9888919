"""Network access for configured sources."""

from currentaffairs.pipeline.fetchers.http_fetcher import SCRAPE_HEADERS, Fetcher
from currentaffairs.pipeline.fetchers.rate_limiter import RateLimiter

__all__ = [
    "Fetcher",
    "RateLimiter",
    "SCRAPE_HEADERS",
]
