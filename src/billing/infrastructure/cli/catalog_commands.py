"""CLI commands for the item catalog."""

from __future__ import annotations

import click

from billing.infrastructure.bootstrap import catalog_repository
from billing.infrastructure.config import get_config


@click.command("show")
@click.option("--catalog", "catalog_path", default=None, help="Catalog CSV file.")
def catalog_show(catalog_path: str | None) -> None:
    """List every item the server would price."""
    repo = catalog_repository(catalog_path)
    catalog = repo.load()

    if not len(catalog):
        click.echo("No catalog entries found.")
        return

    encoding = get_config().catalog_encoding
    click.echo(f"{'Code':<6} {'Description':<30} {'Unit Cost':>10}")
    click.echo("-" * 48)
    for code, entry in catalog.items():
        description = entry.description.decode(encoding, errors="replace")
        click.echo(f"{code:<6} {description:<30} {'$' + str(entry.unit_cost):>10}")
