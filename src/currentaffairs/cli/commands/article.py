"""Article command: deep-scrape one page."""

import asyncio
import json

import click

from currentaffairs.cli.commands._common import load_config
from currentaffairs.services.article_service import ArticleService
from currentaffairs.utils.exceptions import ConfigurationError


@click.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
def article(url: str, as_json: bool) -> None:
    """Show title, key points and practice questions for one article URL."""
    config = load_config()

    try:
        service = ArticleService(config)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        raise click.Abort()

    detail = asyncio.run(service.get_article_detail(url))
    if detail is None:
        click.echo(f"Could not extract an article from {url}", err=True)
        raise SystemExit(1)

    if as_json:
        payload = detail.model_dump(mode="json", by_alias=True)
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    click.echo(detail.title)
    click.echo("=" * 70)
    click.echo(f"Author:       {detail.author}")
    click.echo(f"Published:    {detail.published_at:%Y-%m-%d %H:%M}")
    click.echo(f"Category:     {detail.category} ({detail.relevance.value} relevance)")
    click.echo(f"Topics:       {', '.join(detail.syllabus_topics) or '-'}")
    click.echo(f"Reading time: {detail.reading_time} min")

    if detail.key_points:
        click.echo("\nKey points:")
        for point in detail.key_points:
            click.echo(f"  - {point}")

    click.echo("\nPractice questions:")
    for number, question in enumerate(detail.questions, start=1):
        click.echo(f"  {number}. {question}")
