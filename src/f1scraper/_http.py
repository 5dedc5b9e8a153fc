"""Low-level HTTP transport layer wrapping httpx, with retries and error classification."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

from f1scraper.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
)
from f1scraper.envelope import ScraperResult
from f1scraper.errors import ErrorKind, ScraperError

logger = logging.getLogger(__name__)

USER_AGENT = "f1scraper/0.1.0"

Sleep = Callable[[float], Awaitable[Any]]


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Delay to wait before ``attempt`` (1-based); the first attempt never waits."""
    if attempt < 2:
        return 0.0
    return base_delay * 2 ** (attempt - 2)


def ensure_list(payload: Any, context: str) -> ScraperResult[list[Any]]:
    """Assert that a parsed payload is a JSON array.

    OpenF1 always answers with an array; anything else is a logic error and is
    reported as ``INVALID_RESPONSE`` without retrying or coercing.
    """
    if not isinstance(payload, list):
        return ScraperResult.fail(ScraperError(
            kind=ErrorKind.INVALID_RESPONSE,
            message=f"Invalid response for {context}: expected a list",
            details={"received_type": type(payload).__name__},
        ))
    return ScraperResult.ok(payload)


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient.

    ``get`` never raises: every outcome is returned as a ``ScraperResult``
    holding either the parsed JSON payload or a classified ``ScraperError``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]]) -> ScraperResult[Any]:
        """Perform a GET request, retrying transient failures with exponential backoff."""
        last_error: ScraperError | None = None
        for attempt in range(1, self.max_attempts + 1):
            if last_error is not None:
                delay = backoff_delay(attempt, self.retry_delay)
                logger.warning(
                    "Attempt %d/%d for %s failed (%s). Retrying in %.2fs...",
                    attempt - 1, self.max_attempts, endpoint, last_error.kind.value, delay,
                )
                await self._sleep(delay)

            outcome = await self._attempt(endpoint, params)
            if outcome.success or outcome.error.kind is ErrorKind.INVALID_RESPONSE:  # type: ignore[union-attr]
                return outcome
            last_error = outcome.error

        logger.error("Giving up on %s after %d attempts: %s", endpoint, self.max_attempts, last_error)
        return ScraperResult.fail(ScraperError(
            kind=ErrorKind.MAX_RETRIES_EXCEEDED,
            message=f"Maximum number of attempts reached for {endpoint}",
            details={"endpoint": endpoint, "attempts": self.max_attempts},
            cause=last_error,
        ))

    async def _attempt(self, endpoint: str, params: list[tuple[str, str]]) -> ScraperResult[Any]:
        try:
            # httpx limits each phase separately; this caps the whole attempt.
            async with asyncio.timeout(self.timeout):
                response = await self._client.get(endpoint, params=params)
        except (httpx.TimeoutException, TimeoutError) as exc:
            return ScraperResult.fail(ScraperError(
                kind=ErrorKind.TIMEOUT,
                message="Request timed out",
                details={"endpoint": endpoint, "original_error": str(exc) or type(exc).__name__},
            ))
        except httpx.TransportError as exc:
            return ScraperResult.fail(ScraperError(
                kind=ErrorKind.NETWORK_ERROR,
                message="Network error",
                details={"endpoint": endpoint, "original_error": str(exc)},
            ))
        except Exception as exc:
            return ScraperResult.fail(ScraperError(
                kind=ErrorKind.UNKNOWN_ERROR,
                message=str(exc) or type(exc).__name__,
                details={"endpoint": endpoint},
            ))
        return _handle_response(response, endpoint)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncTransport:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def _handle_response(response: httpx.Response, endpoint: str) -> ScraperResult[Any]:
    """Classify the response status and return parsed JSON."""
    if not response.is_success:
        return ScraperResult.fail(
            ScraperError.from_status(response.status_code, response.reason_phrase),
        )
    try:
        return ScraperResult.ok(response.json())
    except ValueError as exc:
        return ScraperResult.fail(ScraperError(
            kind=ErrorKind.INVALID_RESPONSE,
            message=f"Response from {endpoint} is not valid JSON",
            details={"original_error": str(exc)},
        ))
