"""Configuration models."""

from datetime import date
from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from currentaffairs.core.enums import SourceKind, SourcePriority


class SourceConfig(BaseModel):
    """A configured RSS feed or scrape target.

    Scrape archives address one page per day; their ``endpoint`` carries a
    ``{date}`` placeholder rendered with ``date_format``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    kind: SourceKind
    endpoint: str = Field(..., min_length=1)
    category: str
    fetch_interval_minutes: int = Field(..., gt=0)
    priority: SourcePriority = SourcePriority.MEDIUM
    active: bool = True

    max_items: int = Field(default=10, gt=0)

    # Scrape archive settings
    date_format: str = "%d-%m-%Y"
    date_window_days: int = Field(default=5, gt=0)
    business_days_only: bool = True
    extract_topics_of_day: bool = False

    @property
    def is_dated(self) -> bool:
        """True when the endpoint is a per-day archive page."""
        return "{date}" in self.endpoint

    def url_for(self, day: Optional[date] = None) -> str:
        """Render the endpoint for ``day`` (ignored for undated sources)."""
        if self.is_dated:
            if day is None:
                raise ValueError(f"Source {self.id} needs a date to build its URL")
            return self.endpoint.format(date=day.strftime(self.date_format))
        return self.endpoint


class CategoryRule(BaseModel):
    """Category assigned when any keyword is present."""

    category: str
    keywords: List[str] = Field(..., min_length=1)


class ClassifierRules(BaseModel):
    """Keyword data for the deterministic classifier.

    Thresholds reproduce the relevance rule:
    high  if high >= high_min_high or (high >= high_min_mixed_high and medium >= high_min_mixed_medium)
    medium if high >= medium_min_high or medium >= medium_min_medium
    low otherwise
    """

    high_relevance_keywords: List[str]
    medium_relevance_keywords: List[str]

    high_min_high: int = 2
    high_min_mixed_high: int = 1
    high_min_mixed_medium: int = 1
    medium_min_high: int = 1
    medium_min_medium: int = 2

    # Insertion order is the taxonomy order
    syllabus_topics: Dict[str, List[str]]
    category_rules: List[CategoryRule]
    stop_words: List[str]

    max_tags: int = Field(default=5, gt=0)
    min_tag_length: int = Field(default=4, gt=0)
    summary_length: int = Field(default=200, gt=0)

    @property
    def taxonomy(self) -> List[str]:
        return list(self.syllabus_topics)


class PromptConfig(BaseModel):
    """Prompt template configuration."""

    system_prompt: str
    user_prompt_template: str
    output_schema: Dict


class Config(BaseSettings):
    """Main application configuration from environment variables."""

    # Model-assisted classification (Tier 1)
    classification_provider: Literal["gemini", "openai", "none"] = "gemini"
    google_api_key: Optional[str] = Field(default=None)
    gemini_model: str = "gemini-2.0-flash"
    openai_api_key: Optional[str] = Field(default=None)
    openai_base_url: Optional[str] = Field(default=None)
    openai_model: str = "gpt-4o-mini"

    # Network
    request_timeout_sec: float = Field(default=10.0, gt=0)
    crawl_delay_sec: float = Field(default=1.0, ge=0.0)
    rss_user_agent: str = "Mozilla/5.0 (compatible; CurrentAffairs/1.0)"

    # Deadlines
    classification_timeout_sec: float = Field(default=15.0, gt=0)
    request_deadline_sec: float = Field(default=60.0, gt=0)

    # Results
    max_articles: int = Field(default=50, gt=0)
    classification_cache_ttl_minutes: int = Field(default=60, gt=0)

    # Fallback content
    fallback_url_template: str = (
        "https://www.drishtiias.com/current-affairs-news-analysis-editorials/news-analysis/{date}"
    )
    fallback_date_format: str = "%d-%m-%Y"

    # Declarative data; None means the defaults shipped with the package
    config_dir: Optional[Path] = None

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    log_dir: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def tier1_configured(self) -> bool:
        """Whether a model-assisted classifier can be built at all."""
        if self.classification_provider == "gemini":
            return bool(self.google_api_key)
        if self.classification_provider == "openai":
            return bool(self.openai_api_key)
        return False

