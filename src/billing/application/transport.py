"""Abstract transport used by the client use case.

Defined next to the application layer so use cases never depend on
sockets. The TCP implementation lives in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BillingTransport(ABC):

    @abstractmethod
    def exchange(self, payload: bytes) -> bytes:
        """Send an encoded request and return one complete reply.

        The reply is either a full response (TML bytes) or a 4-byte
        error response.
        """
