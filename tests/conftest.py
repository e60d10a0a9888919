# tests/conftest.py
"""Shared test fixtures and configuration."""

from datetime import date
from typing import Callable, List
from unittest.mock import AsyncMock, Mock

import pytest

from currentaffairs.core.config import ClassifierRules, Config, PromptConfig, SourceConfig
from currentaffairs.core.enums import SourceKind, SourcePriority
from currentaffairs.services.config_loader import load_classifier_rules, load_prompt_config


class FakeClock:
    """Monotonic clock advanced by hand or by ``sleep``."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fixed_today() -> date:
    """A Wednesday; the trailing five-day archive window holds Mon-Wed only."""
    return date(2026, 1, 14)


@pytest.fixture
def test_config() -> Config:
    """Test configuration with Tier 1 disabled and no politeness delay."""
    return Config(
        _env_file=None,
        classification_provider="none",
        google_api_key=None,
        openai_api_key=None,
        request_timeout_sec=5.0,
        crawl_delay_sec=0.0,
        classification_timeout_sec=1.0,
        request_deadline_sec=10.0,
        max_articles=50,
    )


@pytest.fixture
def classifier_rules() -> ClassifierRules:
    return load_classifier_rules()


@pytest.fixture
def prompt_config() -> PromptConfig:
    return load_prompt_config("classification")


@pytest.fixture
def rss_source() -> SourceConfig:
    return SourceConfig(
        id="hindu-national",
        name="The Hindu - National",
        kind=SourceKind.RSS,
        endpoint="https://www.thehindu.com/news/national/feeder/default.rss",
        category="National",
        fetch_interval_minutes=5,
        priority=SourcePriority.HIGH,
    )


@pytest.fixture
def second_rss_source() -> SourceConfig:
    return SourceConfig(
        id="hindu-business",
        name="The Hindu - Business",
        kind=SourceKind.RSS,
        endpoint="https://www.thehindu.com/business/feeder/default.rss",
        category="Business",
        fetch_interval_minutes=5,
    )


@pytest.fixture
def scrape_source() -> SourceConfig:
    return SourceConfig(
        id="drishti-editorials",
        name="DrishtiIAS News Analysis",
        kind=SourceKind.SCRAPE,
        endpoint="https://www.drishtiias.com/news-analysis/{date}",
        category="Editorial",
        fetch_interval_minutes=30,
        priority=SourcePriority.HIGH,
        extract_topics_of_day=True,
    )


@pytest.fixture
def sample_rss_feed() -> str:
    """Hindu-style RSS feed with entity-encoded HTML descriptions."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>The Hindu - National</title>
    <link>https://www.thehindu.com/news/national/</link>
    <description>National news</description>
    <item>
      <title>Parliament passes constitutional amendment bill</title>
      <link>https://www.thehindu.com/news/national/amendment-bill/article1.ece</link>
      <description>&lt;p&gt;The Parliament passed a constitutional amendment bill on trade policy and budget allocation.&lt;/p&gt;</description>
      <pubDate>Tue, 13 Jan 2026 10:00:00 +0000</pubDate>
    </item>
    <item>
      <title>Monsoon forecast revised by weather office</title>
      <link>https://www.thehindu.com/news/national/monsoon/article2.ece</link>
      <description>&lt;p&gt;The weather office revised its monsoon forecast for the northern river basins.&lt;/p&gt;</description>
      <pubDate>Tue, 13 Jan 2026 12:30:00 +0000</pubDate>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def second_rss_feed() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>The Hindu - Business</title>
    <item>
      <title>Inflation eases as food prices cool</title>
      <link>https://www.thehindu.com/business/inflation/article3.ece</link>
      <description>Retail inflation eased in December as food prices cooled across markets.</description>
      <pubDate>Tue, 13 Jan 2026 11:00:00 +0000</pubDate>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def sample_analysis_html() -> str:
    """Daily news-analysis page with two article blocks and a topics sidebar."""
    return """<!DOCTYPE html>
<html>
<body>
  <div class="news-analysis-content">
    <h2>India and Japan sign bilateral infrastructure agreement</h2>
    <p>India and Japan signed a bilateral agreement on infrastructure financing during the annual summit.</p>
    <a href="/daily-updates/india-japan-agreement">Read more</a>
  </div>
  <div class="news-analysis-content">
    <h2>RBI keeps repo rate unchanged in policy review</h2>
    <p>The Reserve Bank kept the repo rate unchanged, citing a stable inflation outlook and fiscal data.</p>
    <a href="https://www.drishtiias.com/daily-updates/rbi-policy">Read more</a>
  </div>
  <div class="sidebar">
    <div class="widget">
      <h3>Today's Topics</h3>
      <ul>
        <li><a href="/topics/green-hydrogen-mission">National Green Hydrogen Mission</a></li>
        <li><a href="/topics/places-of-worship-act">Places of Worship Act</a></li>
        <li><a href="/topics/short">Short</a></li>
      </ul>
    </div>
    <div class="widget">
      <h3>Subscribe</h3>
      <a href="/subscribe">Subscribe to our newsletter today please</a>
    </div>
  </div>
</body>
</html>"""


@pytest.fixture
def heading_only_html() -> str:
    """Page without any known content container."""
    return """<html><body>
  <h2>Supreme Court verdict on electoral bonds</h2>
  <p>The Supreme Court struck down the electoral bond scheme as unconstitutional in a unanimous ruling.</p>
  <h3>Tiny</h3>
  <p>This paragraph follows a heading that is too short to be a title.</p>
  <h3>Heading followed by a short body</h3>
  <p>Too short.</p>
</body></html>"""


@pytest.fixture
def sample_article_html() -> str:
    """Single article page for the detail view."""
    paragraph = (
        "The Union Budget increased capital expenditure on infrastructure and "
        "railways. Economists expect the fiscal deficit to narrow next year."
    )
    return f"""<!DOCTYPE html>
<html>
<body>
  <h1 class="title">Budget raises capital spending on infrastructure</h1>
  <span class="author-name">Staff Reporter</span>
  <time datetime="2026-01-13T09:30:00+05:30">January 13, 2026</time>
  <div class="article-content">
    <p>{paragraph}</p>
  </div>
  <div class="article-content">
    <p>The finance ministry said the economy grew faster than expected in the last quarter.</p>
  </div>
</body>
</html>"""


@pytest.fixture
def model_reply() -> Callable[[str], Mock]:
    """Build a mock LLM client whose completion returns ``text``."""

    def build(text: str) -> Mock:
        client = Mock()
        client.create_completion = AsyncMock(
            return_value={"content": text, "usage": {"input_tokens": 10, "output_tokens": 20}}
        )
        return client

    return build


# Pytest configuration
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "asyncio: Async tests")
