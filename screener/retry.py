"""Retry decorator with exponential backoff for coroutines — stdlib only."""
from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import random
from typing import Any, Awaitable, Callable, Tuple, Type

logger = logging.getLogger(__name__)


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable:
    """Decorator: retries the wrapped coroutine function with exponential backoff.

    ``max_attempts`` may also be overridden per call with an ``attempts=``
    keyword, which is consumed by the wrapper.
    """

    def decorator(fn: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"retry() expects a coroutine function, got {fn!r}")

        @functools.wraps(fn)
        async def wrapper(*args: Any, attempts: int | None = None, **kwargs: Any) -> Any:
            limit = max(1, attempts if attempts is not None else max_attempts)
            last_exc: BaseException | None = None
            for attempt in range(1, limit + 1):
                try:
                    return await fn(*args, **kwargs)
                except retryable as exc:
                    last_exc = exc
                    if attempt == limit:
                        logger.error(
                            "%s failed after %d attempts: %s",
                            fn.__qualname__,
                            limit,
                            exc,
                        )
                        raise
                    delay = min(
                        base_delay * (backoff_factor ** (attempt - 1)), max_delay
                    )
                    if jitter:
                        delay *= 0.5 + random.random()
                    logger.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__,
                        attempt,
                        limit,
                        exc,
                        delay,
                    )
                    await asyncio.sleep(delay)
            raise last_exc  # type: ignore[misc]

        return wrapper

    return decorator
