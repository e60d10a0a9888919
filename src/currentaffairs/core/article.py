"""Article domain models."""

from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from currentaffairs.core.enums import ClassificationTier, Relevance
from currentaffairs.utils.date_utils import now_utc


class RawItem(BaseModel):
    """Extracted item, not yet classified.

    Lives only for one aggregation cycle (and in the fetch cache).
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    source_id: str
    title: str = Field(..., min_length=1, max_length=200)
    body_text: str = Field(..., min_length=1, max_length=500)
    link: str
    published_at: datetime
    selector_used: Optional[str] = None


class Classification(BaseModel):
    """Relevance and topical tagging for one item."""

    relevance: Relevance
    syllabus_topics: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list, max_length=5)
    category: str
    summary: str
    tier: ClassificationTier

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "relevance": "high",
                "syllabus_topics": ["Polity", "Economics"],
                "tags": ["parliament", "passed", "constitutional", "amendment", "bill"],
                "category": "Economics",
                "summary": "The Parliament passed a constitutional amendment bill...",
                "tier": "rules",
            }
        },
    }


class Article(BaseModel):
    """Classified article as returned to callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    summary: str
    url: str
    published_at: datetime
    category: str
    tags: List[str] = Field(default_factory=list)
    source_category: str
    is_fallback: bool = False

    source_id: Optional[str] = None
    relevance: Optional[Relevance] = None
    syllabus_topics: List[str] = Field(default_factory=list)
    classified_by: Optional[ClassificationTier] = None
    is_topic_of_day: bool = False
    scraped_from: Optional[str] = None
    selector_used: Optional[str] = None


class DateRange(BaseModel):
    """Inclusive calendar range requested by a caller."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _ordered(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError("start must not be after end")
        return self

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment.date() <= self.end


class ArticlesResponse(BaseModel):
    """Read-path response. Always well-formed, even when degraded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    articles: List[Article]
    count: int
    last_updated: datetime = Field(default_factory=now_utc)
    scraped_count: Optional[int] = None
    error: Optional[str] = None

    def to_payload(self) -> dict:
        """JSON-ready dict with camelCase keys for the presentation layer."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ArticleDetail(BaseModel):
    """Deep-scraped single article page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    content: str
    summary: str
    author: str
    published_at: datetime
    url: str
    category: str
    tags: List[str] = Field(default_factory=list)
    reading_time: int = Field(..., ge=1)
    relevance: Relevance
    syllabus_topics: List[str] = Field(default_factory=list)
    key_points: List[str] = Field(default_factory=list)
    questions: List[str] = Field(default_factory=list)


class TopicOfDay(BaseModel):
    """Sidebar link flagged as one of the day's important topics."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    url: str


class PageExtraction(BaseModel):
    """Everything extracted from one (source, date) fetch; the cached unit."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[RawItem, ...] = ()
    topics: Tuple[TopicOfDay, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.topics
