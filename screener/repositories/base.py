from __future__ import annotations

from typing import Any, Callable, TypeVar

from screener.errors import DecodeError
from screener.transport import ApiClient

T = TypeVar("T")


class Repository:
    """Thin accessor over one API resource. No retries, no caching."""

    resource: str = ""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def _path(self, *parts: Any) -> str:
        return "/" + "/".join(str(p).strip("/") for p in (self.resource, *parts) if str(p))

    @staticmethod
    def _as_list(payload: Any, factory: Callable[[Any], T], endpoint: str) -> list[T]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise DecodeError(f"{endpoint}: expected a list, got {type(payload).__name__}")
        return [factory(item) for item in payload]

    @staticmethod
    def _as_one(payload: Any, factory: Callable[[Any], T], endpoint: str) -> T:
        if payload is None:
            raise DecodeError(f"{endpoint}: empty response body")
        return factory(payload)
