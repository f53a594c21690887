"""CLI command for the server side."""

from __future__ import annotations

import click

from billing.infrastructure.bootstrap import billing_server


@click.command("serve")
@click.option("--host", default=None, help="Address to bind (defaults to config).")
@click.option("--port", default=None, type=int, help="Port to listen on (defaults to config).")
@click.option("--catalog", "catalog_path", default=None, help="Catalog CSV file.")
@click.option("--once", is_flag=True, default=False, help="Serve a single connection and exit.")
def serve(host: str | None, port: int | None, catalog_path: str | None, once: bool) -> None:
    """Run the billing server."""
    try:
        server = billing_server(host=host, port=port, catalog_path=catalog_path)
    except OSError as exc:
        raise click.ClickException(f"Cannot listen: {exc}")

    try:
        if once:
            server.handle_one()
        else:
            server.serve_forever()
    except KeyboardInterrupt:
        click.echo("Server stopped.")
    finally:
        server.close()
