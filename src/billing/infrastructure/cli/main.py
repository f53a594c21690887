import click

from billing.infrastructure.cli.catalog_commands import catalog_show
from billing.infrastructure.cli.decode_commands import decode_request, decode_response
from billing.infrastructure.cli.request_commands import request_submit
from billing.infrastructure.cli.serve_commands import serve
from billing.infrastructure.logging import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Log level (defaults to config).")
def cli(log_level: str | None) -> None:
    """Billing: priced line items over a binary TCP protocol."""
    configure_logging(log_level)


@cli.group()
def catalog() -> None:
    """Inspect the item catalog."""


@cli.group()
def decode() -> None:
    """Decode captured messages."""


# Register subcommands
cli.add_command(serve)
cli.add_command(request_submit)
catalog.add_command(catalog_show)
decode.add_command(decode_request)
decode.add_command(decode_response)
