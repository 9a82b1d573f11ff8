"""Error taxonomy shared by the transport, repositories and controller."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    API = "api"
    DECODE = "decode"


class ScreenerError(Exception):
    """Base class for every failure surfaced by the API client."""

    kind: ErrorKind = ErrorKind.API

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(ScreenerError):
    """The server could not be reached (connection refused, DNS, timeout)."""

    kind = ErrorKind.TRANSPORT


class ApiError(ScreenerError):
    """The server answered with a non-2xx status."""

    kind = ErrorKind.API

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status})"


class DecodeError(ScreenerError):
    """The response body was malformed or had an unexpected shape."""

    kind = ErrorKind.DECODE
