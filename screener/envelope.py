"""Turn raw HTTP responses into ``Ok`` / ``Err`` results.

The decoder is a pure function of (status, content type, body); it never
raises and never logs. Callers decide whether to ``unwrap()`` (raise) or to
keep the ``Err`` around as a value.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from screener.errors import ApiError, DecodeError, ErrorKind, ScreenerError, TransportError

JSON_CONTENT_TYPE = "application/json"
MALFORMED_BODY = "malformed response body"


@dataclass(frozen=True)
class Ok:
    value: Any = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    status: int | None = None

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> ScreenerError:
        if self.kind is ErrorKind.TRANSPORT:
            return TransportError(self.message)
        if self.kind is ErrorKind.DECODE:
            return DecodeError(self.message)
        return ApiError(self.message, self.status)

    def unwrap(self) -> Any:
        raise self.to_exception()

    @classmethod
    def from_exception(cls, exc: ScreenerError) -> "Err":
        return cls(exc.kind, exc.message, getattr(exc, "status", None))


Result = Union[Ok, Err]


def _default_message(status: int) -> str:
    return f"Request failed with status {status}"


def decode_response(status: int, content_type: str | None, body: bytes | str | None) -> Result:
    if status == 204:
        return Ok(None)

    payload: Any = None
    if JSON_CONTENT_TYPE in (content_type or "").lower():
        try:
            payload = json.loads(body or b"")
        except (ValueError, UnicodeDecodeError):
            return Err(ErrorKind.DECODE, MALFORMED_BODY, status)

    if not 200 <= status < 300:
        message = None
        if isinstance(payload, dict):
            message = payload.get("message")
        if not isinstance(message, str) or not message.strip():
            message = _default_message(status)
        return Err(ErrorKind.API, message, status)

    return Ok(payload)
