"""Loopback tests for the TCP server and client transport."""

import socket
import threading

import pytest

from billing.application.dto import LineItemSpec
from billing.application.price_request import PriceRequestHandler
from billing.application.submit_request import RequestNumberSequence, SubmitRequestHandler
from billing.domain.exceptions import ServerRejectedError, TruncatedHeader
from billing.domain.model.messages import ErrorResponse, PricedLineItem, Response
from billing.infrastructure.net.stream import read_exactly
from billing.infrastructure.net.tcp_server import BillingServer
from billing.infrastructure.net.tcp_transport import TcpTransport
from billing.protocol import response_codec
from tests.fakes import sample_catalog


@pytest.fixture
def server():
    srv = BillingServer.listening("127.0.0.1", 0, PriceRequestHandler(sample_catalog()))
    yield srv
    srv.close()


def _serve_once(srv: BillingServer) -> threading.Thread:
    thread = threading.Thread(target=srv.handle_one, daemon=True)
    thread.start()
    return thread


def _raw_exchange(srv: BillingServer, payload: bytes, half_close: bool = False) -> bytes:
    """Send raw bytes and read whatever the server answers until it closes."""
    thread = _serve_once(srv)
    with socket.create_connection(srv.address, timeout=5) as sock:
        sock.sendall(payload)
        if half_close:
            sock.shutdown(socket.SHUT_WR)
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    thread.join(timeout=5)
    return b"".join(chunks)


class TestReadExactly:

    def test_assembles_partial_reads(self):
        left, right = socket.socketpair()
        with left, right:
            left.sendall(b"\x00\x01")
            left.sendall(b"\x00\x0a")
            assert read_exactly(right, 4) == b"\x00\x01\x00\x0a"

    def test_returns_none_on_early_close(self):
        left, right = socket.socketpair()
        with right:
            left.sendall(b"\x00")
            left.close()
            assert read_exactly(right, 4) is None


class TestBillingServer:

    def test_prices_scenario_request(self, server):
        reply = _raw_exchange(server, bytes.fromhex("0001000A00020003FFFF"))
        assert response_codec.decode_response(reply) == Response(
            1, 2, (PricedLineItem(b"Pencil #HB", 1, 2),)
        )

    def test_invalid_length_gets_error_response(self, server):
        reply = _raw_exchange(server, bytes.fromhex("00070005"))
        assert reply == b"\x00\x07\xff\xff"

    def test_malformed_body_gets_error_response(self, server):
        reply = _raw_exchange(server, bytes.fromhex("0002000800020003"))
        assert response_codec.decode_response(reply) == ErrorResponse(2)

    def test_early_close_gets_error_response(self, server):
        reply = _raw_exchange(server, bytes.fromhex("0003000A0002"), half_close=True)
        assert reply == b"\x00\x03\xff\xff"

    def test_unencodable_reply_gets_error_response(self, server):
        # Quantity 0x8000 decodes but cannot be written back in a response
        reply = _raw_exchange(server, bytes.fromhex("0001000A80000003FFFF"))
        assert reply == b"\x00\x01\xff\xff"

    def test_close_before_header_gets_nothing(self, server):
        assert _raw_exchange(server, b"\x00", half_close=True) == b""


class TestTcpTransport:

    def test_end_to_end_bill(self, server):
        thread = _serve_once(server)
        host, port = server.address
        handler = SubmitRequestHandler(
            TcpTransport(host, port, timeout_s=5), RequestNumberSequence(1)
        )
        bill = handler.handle([LineItemSpec(2, 3), LineItemSpec(1, 999)])
        thread.join(timeout=5)
        assert bill.request_number == 1
        assert [line.description for line in bill.lines] == [
            "Pencil #HB",
            "Article Not Available",
        ]
        assert bill.total == 2

    def _fake_server(self, reply: bytes) -> tuple[socket.socket, threading.Thread]:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)

        def run():
            conn, _ = listener.accept()
            with conn:
                read_exactly(conn, 6)
                conn.sendall(reply)

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        return listener, thread

    def test_error_reply_returned_as_four_bytes(self):
        listener, thread = self._fake_server(b"\x00\x09\xff\xff")
        with listener:
            host, port = listener.getsockname()
            handler = SubmitRequestHandler(
                TcpTransport(host, port, timeout_s=5), RequestNumberSequence(9)
            )
            with pytest.raises(ServerRejectedError):
                handler.handle([])
            thread.join(timeout=5)

    def test_server_closing_without_reply(self):
        listener, thread = self._fake_server(b"")
        with listener:
            host, port = listener.getsockname()
            with pytest.raises(TruncatedHeader):
                TcpTransport(host, port, timeout_s=5).exchange(b"\x00\x01\x00\x06\xff\xff")
            thread.join(timeout=5)
