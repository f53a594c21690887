"""TCP implementation of BillingTransport (one connection per exchange)."""

from __future__ import annotations

import socket

from billing.application.transport import BillingTransport
from billing.domain.exceptions import InvalidLength, TruncatedBody, TruncatedHeader
from billing.infrastructure.logging import get_logger
from billing.infrastructure.net.stream import read_exactly
from billing.protocol.codec import to_hex
from billing.protocol.constants import HEADER_SIZE
from billing.protocol.framing import is_error_header, read_header

log = get_logger(__name__)


class TcpTransport(BillingTransport):

    def __init__(self, host: str, port: int, timeout_s: float | None = None) -> None:
        self._host = host
        self._port = port
        self._timeout_s = timeout_s

    def exchange(self, payload: bytes) -> bytes:
        with socket.create_connection(
            (self._host, self._port), timeout=self._timeout_s
        ) as sock:
            log.info("request bytes: {}", to_hex(payload))
            sock.sendall(payload)

            header = read_exactly(sock, HEADER_SIZE)
            if header is None:
                raise TruncatedHeader("Server closed the connection before sending a header")

            if is_error_header(header):
                log.warning("response bytes (error): {}", to_hex(header))
                return header
            _, tml = read_header(header)
            if tml < HEADER_SIZE:
                raise InvalidLength(f"Invalid TML in response: {tml}")

            rest = read_exactly(sock, tml - HEADER_SIZE)
            if rest is None:
                raise TruncatedBody("Server closed the connection before the full response")

            reply = header + rest
            log.info("response bytes: {}", to_hex(reply))
            return reply
