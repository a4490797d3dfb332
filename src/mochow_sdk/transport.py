"""httpx transport that retries transient failures and traces every attempt."""

from __future__ import annotations

import asyncio
import time

import httpx
from loguru import logger

RETRYABLE_STATUS_CODES = frozenset({408, 429})


def is_retryable_status(status_code: int) -> bool:
    """Return True for statuses worth retrying: timeouts, throttling, 5xx."""
    return status_code in RETRYABLE_STATUS_CODES or status_code >= 500


class RetryTransport(httpx.AsyncBaseTransport):
    """Wrap another async transport with retry and exponential backoff.

    A request is sent at most ``max_retries + 1`` times. Connection errors,
    timeouts, 408, 429 and 5xx responses are retried after
    ``backoff_seconds * 2**attempt`` seconds. Other responses, including 4xx
    business errors, are returned on the first attempt. When retries run out the
    last response is returned, or the last transport error re-raised.
    """

    def __init__(
        self,
        wrapped: httpx.AsyncBaseTransport | None = None,
        *,
        max_retries: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        if max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {max_retries}")
        self._wrapped = wrapped or httpx.AsyncHTTPTransport()
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        attempts = self.max_retries + 1
        attempt = 0
        while True:
            started = time.perf_counter()
            try:
                response = await self._wrapped.handle_async_request(request)
            except httpx.TransportError as e:
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.warning(
                    f"{request.method} {request.url} failed after {elapsed_ms:.0f}ms "
                    f"(attempt {attempt + 1}/{attempts}): {e!r}"
                )
                if attempt < attempts - 1:
                    await self._backoff(attempt)
                    attempt += 1
                    continue
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug(
                f"{request.method} {request.url} -> {response.status_code} in {elapsed_ms:.0f}ms "
                f"(attempt {attempt + 1}/{attempts})"
            )
            if is_retryable_status(response.status_code) and attempt < attempts - 1:
                logger.warning(
                    f"{request.method} {request.url} returned {response.status_code}, retrying "
                    f"(attempt {attempt + 1}/{attempts})"
                )
                await response.aclose()
                await self._backoff(attempt)
                attempt += 1
                continue
            return response

    async def _backoff(self, attempt: int) -> None:
        delay = self.backoff_seconds * 2**attempt
        if delay > 0:
            await asyncio.sleep(delay)

    async def aclose(self) -> None:
        await self._wrapped.aclose()


__all__ = ["RETRYABLE_STATUS_CODES", "RetryTransport", "is_retryable_status"]
