"""TCP listener serving one billing exchange per connection.

Connections are handled one at a time. Any request that cannot be
decoded, or whose reply cannot be encoded, is answered with a 4-byte
error response carrying the request number from the header.
"""

from __future__ import annotations

import socket
from typing import Tuple

from billing.application.price_request import PriceRequestHandler
from billing.domain.exceptions import ProtocolError, ValidationError
from billing.infrastructure.logging import get_logger
from billing.infrastructure.net.stream import read_exactly
from billing.protocol import request_codec, response_codec
from billing.protocol.codec import to_hex
from billing.protocol.constants import HEADER_SIZE, MIN_REQUEST_LENGTH
from billing.protocol.framing import read_header

log = get_logger(__name__)


class BillingServer:
    def __init__(self, sock: socket.socket, handler: PriceRequestHandler) -> None:
        self.sock = sock
        self._handler = handler

    @classmethod
    def listening(
        cls,
        host: str,
        port: int,
        handler: PriceRequestHandler,
        backlog: int = 1,
    ) -> "BillingServer":
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(backlog)
        return cls(sock, handler)

    @property
    def address(self) -> Tuple[str, int]:
        host, port = self.sock.getsockname()[:2]
        return host, port

    def serve_forever(self) -> None:
        host, port = self.address
        log.info("server listening on {}:{}", host, port)
        while True:
            self.handle_one()

    def handle_one(self) -> None:
        """Accept one connection and serve its single exchange."""
        conn, addr = self.sock.accept()
        with conn:
            log.info("client connected: {}:{}", addr[0], addr[1])
            try:
                self._serve(conn)
            except OSError as exc:
                log.warning("connection with {}:{} failed: {}", addr[0], addr[1], exc)

    def close(self) -> None:
        self.sock.close()

    # --- Per-connection exchange ----------------------------------------------

    def _serve(self, conn: socket.socket) -> None:
        header = read_exactly(conn, HEADER_SIZE)
        if header is None:
            log.info("client closed before sending a header")
            return

        request_number, tml = read_header(header)
        if tml < MIN_REQUEST_LENGTH:
            log.warning("invalid TML {} in request #{}", tml, request_number)
            self._reply_error(conn, request_number)
            return

        rest = read_exactly(conn, tml - HEADER_SIZE)
        if rest is None:
            log.warning("client closed before the full request #{} arrived", request_number)
            self._reply_error(conn, request_number)
            return

        raw = header + rest
        log.info("request bytes: {}", to_hex(raw))

        try:
            request = request_codec.decode_request(raw)
        except ProtocolError as exc:
            log.warning("rejecting request #{} ({}): {}", request_number, exc.kind.value, exc)
            self._reply_error(conn, request_number)
            return

        response = self._handler.handle(request)
        try:
            payload = response_codec.encode(response)
        except ValidationError as exc:
            log.warning("cannot encode reply to request #{}: {}", request_number, exc)
            self._reply_error(conn, request_number)
            return

        log.info("response bytes: {}", to_hex(payload))
        conn.sendall(payload)

    @staticmethod
    def _reply_error(conn: socket.socket, request_number: int) -> None:
        payload = response_codec.encode_error_response(request_number)
        conn.sendall(payload)
        log.info("sent error response: {}", to_hex(payload))
