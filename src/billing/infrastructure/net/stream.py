from __future__ import annotations

import socket


def read_exactly(sock: socket.socket, count: int) -> bytes | None:
    """Read exactly *count* bytes, looping over partial reads.

    Returns None if the peer closes the connection first.
    """
    buf = bytearray()
    while len(buf) < count:
        chunk = sock.recv(count - len(buf))
        if not chunk:
            return None
        buf.extend(chunk)
    return bytes(buf)
