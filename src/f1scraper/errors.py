"""Error taxonomy shared by the transport, accessor and scraper layers."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    """Discriminant for every failure the scraper can report."""

    # Transport
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # HTTP status
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT = "RATE_LIMIT"
    SERVER_ERROR = "SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    HTTP_ERROR = "HTTP_ERROR"

    # Exhaustion
    MAX_RETRIES_EXCEEDED = "MAX_RETRIES_EXCEEDED"

    # Shape / content
    INVALID_RESPONSE = "INVALID_RESPONSE"
    NO_DATA = "NO_DATA"

    # Orchestration
    SCRAPE_FAILED = "SCRAPE_FAILED"


_STATUS_KINDS: dict[int, tuple[ErrorKind, str]] = {
    400: (ErrorKind.BAD_REQUEST, "Bad request"),
    404: (ErrorKind.NOT_FOUND, "Resource not found"),
    429: (ErrorKind.RATE_LIMIT, "Too many requests, retry later"),
    500: (ErrorKind.SERVER_ERROR, "OpenF1 server error"),
    503: (ErrorKind.SERVICE_UNAVAILABLE, "Service temporarily unavailable"),
}

HTTP_KINDS = frozenset(kind for kind, _ in _STATUS_KINDS.values()) | {ErrorKind.HTTP_ERROR}


class ScraperError(BaseModel):
    """A classified failure, passed around by value."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    status: int | None = None
    status_text: str | None = None
    details: dict[str, Any] | None = None
    cause: ScraperError | None = None

    @classmethod
    def from_status(cls, status: int, status_text: str = "") -> ScraperError:
        """Classify a non-2xx HTTP status."""
        kind, message = _STATUS_KINDS.get(
            status, (ErrorKind.HTTP_ERROR, f"HTTP error {status}: {status_text}"),
        )
        return cls(kind=kind, message=message, status=status, status_text=status_text)

    @property
    def is_http_error(self) -> bool:
        return self.kind in HTTP_KINDS

    def root_cause(self) -> ScraperError:
        """Follow the ``cause`` chain down to the innermost error."""
        error = self
        while error.cause is not None:
            error = error.cause
        return error

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.message}"
        if self.cause is not None:
            text += f" (caused by {self.cause})"
        return text


class ScraperResultError(Exception):
    """Raised by ``ScraperResult.unwrap()`` on a failed envelope."""

    def __init__(self, error: ScraperError) -> None:
        self.error = error
        super().__init__(str(error))
