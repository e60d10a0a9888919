"""Custom exceptions for CurrentAffairs."""

from typing import Optional


class CurrentAffairsError(Exception):
    """Base exception for CurrentAffairs."""


class ConfigurationError(CurrentAffairsError):
    """Configuration error."""


class PipelineError(CurrentAffairsError):
    """Pipeline execution error."""


class SourceUnavailableError(PipelineError):
    """A source could not be fetched."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class FetchTimeoutError(SourceUnavailableError):
    """Fetch did not complete before the request timeout."""


class FetchHTTPError(SourceUnavailableError):
    """Source answered with a non-2xx status."""

    def __init__(self, message: str, status: int, url: Optional[str] = None):
        super().__init__(message, url=url)
        self.status = status


class FetchNetworkError(SourceUnavailableError):
    """Connection-level failure (DNS, refused, reset, TLS)."""


class FeedParseError(SourceUnavailableError):
    """Feed payload is malformed XML with no usable entries."""


class APIError(CurrentAffairsError):
    """External API error."""


class AIServiceError(APIError):
    """AI service error."""


class ClassificationError(CurrentAffairsError):
    """Model-assisted classification could not be used."""


class ResponseParseError(ClassificationError):
    """Model reply held no valid classification object."""
