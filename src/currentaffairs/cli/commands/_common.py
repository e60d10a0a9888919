"""Shared setup for CLI commands."""

import click

from currentaffairs.core.config import Config
from currentaffairs.utils.logging import setup_logging


def load_config() -> Config:
    """Load configuration and set up logging, aborting on bad settings."""
    try:
        config = Config()  # type: ignore
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        click.echo("Check your environment variables or .env file.", err=True)
        raise click.Abort()

    setup_logging(log_level=config.log_level, log_format=config.log_format, log_dir=config.log_dir)
    return config
