"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.

Decoding failures are ProtocolError subclasses; each one carries the
ErrorKind it reports so transports can branch on ``exc.kind`` without
an isinstance ladder.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    TRUNCATED_HEADER = "TruncatedHeader"
    INVALID_LENGTH = "InvalidLength"
    TRUNCATED_BODY = "TruncatedBody"
    MALFORMED_BODY = "MalformedBody"
    TOTAL_MISMATCH = "TotalMismatch"


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A precondition or invariant was violated."""


class ProtocolError(DomainException):
    """A message could not be decoded or failed integrity checks."""

    kind: ErrorKind


class TruncatedHeader(ProtocolError):
    """Fewer bytes than the fixed header were available."""

    kind = ErrorKind.TRUNCATED_HEADER


class InvalidLength(ProtocolError):
    """The declared total message length is below the structural minimum."""

    kind = ErrorKind.INVALID_LENGTH


class TruncatedBody(ProtocolError):
    """The declared total message length exceeds the bytes available."""

    kind = ErrorKind.TRUNCATED_BODY


class MalformedBody(ProtocolError):
    """The body structure broke mid-parse."""

    kind = ErrorKind.MALFORMED_BODY


class TotalMismatch(ProtocolError):
    """A response's declared total disagrees with the recomputed sum."""

    kind = ErrorKind.TOTAL_MISMATCH

    def __init__(self, declared: int, computed: int) -> None:
        super().__init__(
            f"Declared total {declared} does not match computed total {computed}"
        )
        self.declared = declared
        self.computed = computed


class ServerRejectedError(DomainException):
    """The server answered with an error response."""

    def __init__(self, request_number: int) -> None:
        super().__init__(f"Server rejected request #{request_number}")
        self.request_number = request_number
