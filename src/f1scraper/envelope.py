"""Uniform success/error envelope returned by every fetch operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar

from f1scraper.errors import ScraperError, ScraperResultError

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScraperResult(Generic[T]):
    """Outcome of one operation: either ``data`` or a classified ``error``.

    Usage:
        result = await f1.get_drivers(9161)
        if result.success:
            drivers = result.data
        else:
            print(result.error.kind)
    """

    success: bool
    data: T | None = None
    error: ScraperError | None = None
    timestamp: datetime = field(default_factory=utcnow)

    @classmethod
    def ok(cls, data: T) -> ScraperResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ScraperError) -> ScraperResult[T]:
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return ``data`` or raise ``ScraperResultError`` with the error."""
        if not self.success:
            raise ScraperResultError(self.error)  # type: ignore[arg-type]
        return self.data  # type: ignore[return-value]
