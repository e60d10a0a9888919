"""Utility modules for CurrentAffairs."""

from currentaffairs.utils.date_utils import (
    archive_dates,
    dates_between,
    now_utc,
    parse_date,
    start_of_day,
    today_utc,
)
from currentaffairs.utils.exceptions import (
    AIServiceError,
    APIError,
    ClassificationError,
    ConfigurationError,
    CurrentAffairsError,
    FeedParseError,
    FetchHTTPError,
    FetchNetworkError,
    FetchTimeoutError,
    PipelineError,
    ResponseParseError,
    SourceUnavailableError,
)
from currentaffairs.utils.logging import get_logger, setup_logging
from currentaffairs.utils.text_utils import (
    clean_whitespace,
    content_hash,
    extract_domain,
    extract_text_from_html,
    normalize_url,
    title_prefix,
    truncate_words,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "CurrentAffairsError",
    "ConfigurationError",
    "PipelineError",
    "SourceUnavailableError",
    "FetchTimeoutError",
    "FeedParseError",
    "FetchHTTPError",
    "FetchNetworkError",
    "APIError",
    "AIServiceError",
    "ClassificationError",
    "ResponseParseError",
    # Date utils
    "parse_date",
    "now_utc",
    "today_utc",
    "start_of_day",
    "archive_dates",
    "dates_between",
    # Text utils
    "normalize_url",
    "content_hash",
    "extract_text_from_html",
    "truncate_words",
    "clean_whitespace",
    "title_prefix",
    "extract_domain",
]
