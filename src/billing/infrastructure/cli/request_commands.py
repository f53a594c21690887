"""CLI command for the client side: submit a request and print the bill."""

from __future__ import annotations

import click

from billing.application.dto import BillDTO, LineItemSpec
from billing.domain.exceptions import DomainException, TotalMismatch
from billing.domain.model.value_objects import FIELD_MAX
from billing.infrastructure.bootstrap import submit_request_handler


def _parse_items(raw_items: tuple[str, ...]) -> list[LineItemSpec]:
    """Parse ('2:3', '1:999') into LineItemSpec list."""
    specs: list[LineItemSpec] = []
    for pair in raw_items:
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Quantity:Code'."
            )
        qty_str, code_str = pair.split(":", 1)
        try:
            qty, code = int(qty_str), int(code_str)
        except ValueError:
            raise click.BadParameter(f"Invalid numbers in item '{pair}'.")
        specs.append(LineItemSpec(quantity=qty, code=code))
    return specs


def _prompt_items() -> list[LineItemSpec]:
    """Collect pairs interactively until the quantity -1 is entered."""
    specs: list[LineItemSpec] = []
    while True:
        qty = click.prompt("Enter quantity Qi (or -1 to finish)", type=int)
        if qty == -1:
            return specs
        if qty < 0 or qty > FIELD_MAX:
            click.echo(f"Qi must be in range 0..{FIELD_MAX}")
            continue
        code = click.prompt("Enter code Ci", type=int)
        if code < 0 or code > FIELD_MAX:
            click.echo(f"Ci must be in range 0..{FIELD_MAX}")
            continue
        specs.append(LineItemSpec(quantity=qty, code=code))


def _display_bill(bill: BillDTO) -> None:
    click.echo(f"Bill for request #{bill.request_number}")
    click.echo()
    click.echo(
        f"  {'Item #':<7} {'Description':<30} {'Unit Cost':>10} {'Quantity':>9} {'Cost Per Item':>14}"
    )
    click.echo(f"  {'-'*74}")
    for line in bill.lines:
        click.echo(
            f"  {line.number:<7} {line.description:<30} {'$' + str(line.unit_cost):>10} "
            f"{line.quantity:>9} {'$' + str(line.line_cost):>14}"
        )
    click.echo(f"  {'-'*74}")
    click.echo(f"  {'Total':<49} {'$' + str(bill.total):>25}")


@click.command("request")
@click.option("--host", default=None, help="Server host (defaults to config).")
@click.option("--port", default=None, type=int, help="Server port (defaults to config).")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Item as 'Quantity:Code'; repeatable. Prompts when omitted.",
)
def request_submit(host: str | None, port: int | None, items: tuple[str, ...]) -> None:
    """Send a billing request and print the verified bill."""
    specs = _parse_items(items) if items else _prompt_items()

    handler = submit_request_handler(host=host, port=port)

    try:
        bill = handler.handle(specs)
    except TotalMismatch as exc:
        raise click.ClickException(
            "the total cost in the response does not match the total computed "
            f"by the client (server TC = {exc.declared}, client computed = {exc.computed})"
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except OSError as exc:
        raise click.ClickException(f"Cannot reach server: {exc}")

    _display_bill(bill)
