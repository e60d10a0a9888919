"""CLI commands for CurrentAffairs."""

from currentaffairs.cli.commands.article import article
from currentaffairs.cli.commands.articles import articles
from currentaffairs.cli.commands.sources import sources

__all__ = ["articles", "article", "sources"]
