"""Articles command: run the pipeline once."""

import asyncio
import json
from datetime import datetime, timedelta
from typing import Optional

import click

from currentaffairs.cli.commands._common import load_config
from currentaffairs.core.article import ArticlesResponse, DateRange
from currentaffairs.services.article_service import ArticleService
from currentaffairs.utils.date_utils import today_utc
from currentaffairs.utils.exceptions import ConfigurationError


@click.command()
@click.option("--category", type=str, default=None, help="Only articles in this category")
@click.option(
    "--date",
    "end_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Newest publication date to include (YYYY-MM-DD)",
)
@click.option(
    "--days",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of days ending at --date to include",
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum number of articles")
@click.option("--deadline", type=float, default=None, help="Overall time budget in seconds")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON response")
def articles(
    category: Optional[str],
    end_date: Optional[datetime],
    days: int,
    limit: Optional[int],
    deadline: Optional[float],
    as_json: bool,
) -> None:
    """Fetch, classify and list current-affairs articles.

    Examples:
        currentaffairs articles                           # Latest articles
        currentaffairs articles --category Editorial      # One category
        currentaffairs articles --date 2026-01-15 --days 3
        currentaffairs articles --json --limit 20
    """
    config = load_config()

    date_range = None
    if end_date is not None or days > 1:
        end = end_date.date() if end_date is not None else today_utc()
        date_range = DateRange(start=end - timedelta(days=days - 1), end=end)

    try:
        service = ArticleService(config)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        raise click.Abort()

    try:
        response = asyncio.run(
            service.get_articles(
                category=category,
                date_range=date_range,
                limit=limit,
                deadline=deadline,
            )
        )
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user.", err=True)
        raise click.Abort()

    if as_json:
        click.echo(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))
        return

    _display_response(response)


def _display_response(response: ArticlesResponse) -> None:
    click.echo(f"Articles: {response.count}")
    if response.scraped_count:
        click.echo(f"Scraped:  {response.scraped_count}")
    if response.error:
        click.echo(f"Note:     {response.error}")
    click.echo("=" * 70)

    for item in response.articles:
        marker = "*" if item.is_fallback else " "
        relevance = item.relevance.value if item.relevance else "-"
        click.echo(
            f"{marker} {item.published_at:%Y-%m-%d %H:%M}  [{item.category}] ({relevance})"
        )
        click.echo(f"    {item.title}")
        click.echo(f"    {item.url}")
        if item.tags:
            click.echo(f"    tags: {', '.join(item.tags)}")
        click.echo()
