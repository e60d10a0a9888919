"""Command-line interface for CurrentAffairs."""

import click

from currentaffairs.__version__ import __version__
from currentaffairs.cli.commands import article, articles, sources


@click.group()
@click.version_option(version=__version__, prog_name="currentaffairs")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """CurrentAffairs - daily news ingestion for UPSC preparation.

    Collects articles from RSS feeds and dated analysis archives, tags them
    with syllabus relevance, topics and categories, and lists the result.
    """
    ctx.ensure_object(dict)


# Register commands
cli.add_command(articles)
cli.add_command(article)
cli.add_command(sources)


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
