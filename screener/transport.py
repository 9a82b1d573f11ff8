"""Async HTTP client for the screener REST API."""
from __future__ import annotations

from typing import Any

import httpx

from screener.config import Settings
from screener.envelope import decode_response
from screener.errors import TransportError
from screener.log import get_logger
from screener.retry import retry

log = get_logger(__name__)


class ApiClient:
    """One ``httpx.AsyncClient`` bound to the API base URL.

    Use as an async context manager; every request goes through
    :func:`screener.envelope.decode_response` and either returns the decoded
    payload or raises a :class:`screener.errors.ScreenerError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        ping_attempts: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.ping_attempts = ping_attempts
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "ApiClient":
        return cls(
            settings.api_url,
            timeout=settings.timeout,
            ping_attempts=settings.ping_attempts,
            **kwargs,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method, endpoint, json=json, files=files, data=data
            )
        except httpx.HTTPError as exc:
            log.warning("%s %s unreachable: %s", method, endpoint, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        log.debug("%s %s -> %d", method, endpoint, response.status_code)
        result = decode_response(
            response.status_code,
            response.headers.get("content-type"),
            response.content,
        )
        return result.unwrap()

    async def get(self, endpoint: str) -> Any:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("POST", endpoint, **kwargs)

    @retry(max_attempts=2, base_delay=0.5, max_delay=4.0, retryable=(httpx.TransportError,))
    async def _get_root(self) -> int:
        root = self._client.base_url.copy_with(path="/")
        response = await self._client.get(root)
        return response.status_code

    async def ping(self) -> bool:
        """True when the server answers at all, whatever the status code."""
        try:
            status = await self._get_root(attempts=self.ping_attempts)
        except httpx.HTTPError as exc:
            log.warning("API at %s unreachable: %s", self.base_url, exc)
            return False
        log.debug("API ping -> %d", status)
        return True
