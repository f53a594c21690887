"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. Arguments left as None
fall back to the application configuration.
"""

from __future__ import annotations

from pathlib import Path

from billing.application.price_request import PriceRequestHandler
from billing.application.submit_request import SubmitRequestHandler
from billing.infrastructure.config import get_config
from billing.infrastructure.net.tcp_server import BillingServer
from billing.infrastructure.net.tcp_transport import TcpTransport
from billing.infrastructure.persistence.csv_catalog_repository import (
    CsvCatalogRepository,
)


def catalog_repository(path: str | Path | None = None) -> CsvCatalogRepository:
    config = get_config()
    return CsvCatalogRepository(
        Path(path or config.catalog_path), encoding=config.catalog_encoding
    )


def billing_server(
    host: str | None = None,
    port: int | None = None,
    catalog_path: str | Path | None = None,
) -> BillingServer:
    config = get_config()
    catalog = catalog_repository(catalog_path).load()
    return BillingServer.listening(
        host or config.host,
        config.port if port is None else port,
        PriceRequestHandler(catalog),
    )


def submit_request_handler(
    host: str | None = None,
    port: int | None = None,
) -> SubmitRequestHandler:
    config = get_config()
    transport = TcpTransport(
        host or config.host,
        config.port if port is None else port,
        timeout_s=config.socket_timeout_s,
    )
    return SubmitRequestHandler(transport, encoding=config.catalog_encoding)
