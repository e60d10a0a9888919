"""Sources command: list the source registry."""

from pathlib import Path
from typing import Optional

import click

from currentaffairs.services.config_loader import ConfigLoader
from currentaffairs.utils.exceptions import ConfigurationError


@click.command()
@click.option(
    "--config-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory holding sources.yaml (defaults to the packaged registry)",
)
def sources(config_dir: Optional[Path]) -> None:
    """List configured sources, including inactive ones."""
    try:
        registry = ConfigLoader(config_dir).load_sources_config()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        raise click.Abort()

    click.echo(f"{'ID':<22} {'KIND':<7} {'EVERY':>6}  {'PRIORITY':<8} CATEGORY")
    click.echo("-" * 70)
    for source in registry:
        status = "" if source.active else "  (inactive)"
        click.echo(
            f"{source.id:<22} {source.kind.value:<7} {source.fetch_interval_minutes:>4}m  "
            f"{source.priority.value:<8} {source.category}{status}"
        )
        click.echo(f"    {source.endpoint}")

    click.echo(f"\n{len(registry)} sources, {sum(1 for s in registry if s.active)} active")
