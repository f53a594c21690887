"""CLI commands that decode captured messages offline."""

from __future__ import annotations

import click

from billing.domain.exceptions import ProtocolError
from billing.domain.model.messages import ErrorResponse
from billing.domain.service.billing_service import aggregate_total
from billing.infrastructure.config import get_config
from billing.protocol import request_codec, response_codec


def _parse_hex(text: str) -> bytes:
    """Accept '00 01 00 0A', '0x00 0x01', or '0001000A'."""
    cleaned = text.replace("0x", "").replace("0X", "").replace(",", "")
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise click.BadParameter(f"Not a hex byte string: {text!r}")


@click.command("request")
@click.argument("hex_bytes", nargs=-1, required=True)
def decode_request(hex_bytes: tuple[str, ...]) -> None:
    """Decode a request from its hex bytes."""
    data = _parse_hex(" ".join(hex_bytes))
    try:
        request = request_codec.decode_request(data)
    except ProtocolError as exc:
        raise click.ClickException(f"{exc.kind.value}: {exc}")

    click.echo(f"Request #{request.request_number}  (TML={request.total_message_length})")
    for item in request.items:
        click.echo(f"  quantity={item.quantity} code={item.code}")


@click.command("response")
@click.argument("hex_bytes", nargs=-1, required=True)
def decode_response(hex_bytes: tuple[str, ...]) -> None:
    """Decode a response (or error response) from its hex bytes."""
    data = _parse_hex(" ".join(hex_bytes))
    try:
        response = response_codec.decode_response(data)
    except ProtocolError as exc:
        raise click.ClickException(f"{exc.kind.value}: {exc}")

    if isinstance(response, ErrorResponse):
        click.echo(f"Error response for request #{response.request_number}")
        return

    click.echo(
        f"Response #{response.request_number}  "
        f"(TML={response.total_message_length}, total={response.total_cost})"
    )
    encoding = get_config().catalog_encoding
    for item in response.items:
        description = item.description.decode(encoding, errors="replace")
        click.echo(
            f"  [{item.description_length}] {description} "
            f"unit_cost={item.unit_cost} quantity={item.quantity}"
        )
    computed = aggregate_total(response.items)
    if computed != response.total_cost:
        click.echo(f"Total mismatch: declared {response.total_cost}, computed {computed}")
