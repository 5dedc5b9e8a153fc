"""Typed accessor for the OpenF1 API returning uniform envelopes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from f1scraper._filters import LATEST, build_query_params
from f1scraper._http import AsyncTransport, Sleep, ensure_list
from f1scraper._logging import log_api_call
from f1scraper.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    ScraperSettings,
)
from f1scraper.envelope import ScraperResult
from f1scraper.errors import ErrorKind, ScraperError
from f1scraper.models.document import SessionDocument
from f1scraper.models.driver import Driver
from f1scraper.models.lap import Lap
from f1scraper.models.meeting import Meeting
from f1scraper.models.pit import Pit
from f1scraper.models.race_control import RaceControl
from f1scraper.models.session import Session
from f1scraper.models.session_result import SessionResult
from f1scraper.models.starting_grid import StartingGrid
from f1scraper.models.stint import Stint

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionOptions(BaseModel):
    """Which optional sub-resources to attach to a session document."""

    model_config = ConfigDict(frozen=True)

    include_laps: bool = False
    include_stints: bool = False
    include_pits: bool = False
    include_race_control: bool = False
    include_starting_grid: bool = False


def _validate_list(model_type: type[T], data: list[Any], context: str) -> ScraperResult[list[T]]:
    """Validate a list of dicts against a Pydantic model."""
    try:
        adapter = TypeAdapter(list[model_type])
        return ScraperResult.ok(adapter.validate_python(data))
    except ValidationError as exc:
        return ScraperResult.fail(ScraperError(
            kind=ErrorKind.INVALID_RESPONSE,
            message=f"Failed to validate {model_type.__name__} records for {context}",
            details={"errors": exc.error_count(), "first_error": str(exc.errors()[0]["msg"])},
        ))


def _no_data(message: str) -> ScraperResult[Any]:
    return ScraperResult.fail(ScraperError(kind=ErrorKind.NO_DATA, message=message))


class OpenF1Client:
    """Asynchronous, envelope-returning client for the OpenF1 API.

    No method raises: every outcome is a ``ScraperResult``.

    Usage:
        async with OpenF1Client() as f1:
            result = await f1.get_drivers(9161)
            if result.success:
                print(len(result.data))
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._transport = AsyncTransport(
            base_url=base_url,
            timeout=timeout,
            max_attempts=max_attempts,
            retry_delay=retry_delay,
            sleep=sleep,
        )

    @classmethod
    def from_settings(cls, settings: ScraperSettings | None = None) -> OpenF1Client:
        settings = settings or ScraperSettings()
        return cls(
            base_url=settings.base_url,
            timeout=settings.timeout,
            max_attempts=settings.max_attempts,
            retry_delay=settings.retry_delay,
        )

    async def __aenter__(self) -> OpenF1Client:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    async def _get(
        self,
        endpoint: str,
        model: type[T],
        context: str,
        **kwargs: Any,
    ) -> ScraperResult[list[T]]:
        params = build_query_params(**kwargs)
        response = await self._transport.get(endpoint, params)
        if not response.success:
            return ScraperResult.fail(response.error)  # type: ignore[arg-type]
        payload = ensure_list(response.data, context)
        if not payload.success:
            return ScraperResult.fail(payload.error)  # type: ignore[arg-type]
        return _validate_list(model, payload.data, context)  # type: ignore[arg-type]

    # ── Meetings and sessions (empty is an error) ──────────────

    @log_api_call
    async def get_meetings(self, year: int) -> ScraperResult[list[Meeting]]:
        """Get every meeting of a season."""
        result = await self._get("/meetings", Meeting, "meetings", year=year)
        if result.success and not result.data:
            return _no_data(f"No meetings found for year {year}")
        return result

    @log_api_call
    async def get_latest_meeting(self) -> ScraperResult[Meeting]:
        """Get the most recent meeting."""
        result = await self._get("/meetings", Meeting, "latest meeting", meeting_key=LATEST)
        if not result.success:
            return ScraperResult.fail(result.error)  # type: ignore[arg-type]
        if not result.data:
            return _no_data("No recent meeting found")
        return ScraperResult.ok(result.data[0])

    @log_api_call
    async def get_meeting(self, meeting_key: int) -> ScraperResult[Meeting]:
        """Get a single meeting by key."""
        result = await self._get("/meetings", Meeting, "meeting", meeting_key=meeting_key)
        if not result.success:
            return ScraperResult.fail(result.error)  # type: ignore[arg-type]
        if not result.data:
            return _no_data(f"Meeting {meeting_key} not found")
        return ScraperResult.ok(result.data[0])

    @log_api_call
    async def get_sessions(self, meeting_key: int) -> ScraperResult[list[Session]]:
        """Get every session of a meeting."""
        result = await self._get("/sessions", Session, "sessions", meeting_key=meeting_key)
        if result.success and not result.data:
            return _no_data(f"No sessions found for meeting {meeting_key}")
        return result

    # ── Per-session resources (empty is valid) ─────────────────

    @log_api_call
    async def get_drivers(self, session_key: int) -> ScraperResult[list[Driver]]:
        """Get driver entries for a session."""
        return await self._get("/drivers", Driver, "drivers", session_key=session_key)

    @log_api_call
    async def get_session_results(self, session_key: int) -> ScraperResult[list[SessionResult]]:
        """Get final standings after a session."""
        return await self._get("/session_result", SessionResult, "session_result", session_key=session_key)

    @log_api_call
    async def get_laps(self, session_key: int) -> ScraperResult[list[Lap]]:
        return await self._get("/laps", Lap, "laps", session_key=session_key)

    @log_api_call
    async def get_stints(self, session_key: int) -> ScraperResult[list[Stint]]:
        return await self._get("/stints", Stint, "stints", session_key=session_key)

    @log_api_call
    async def get_pits(self, session_key: int) -> ScraperResult[list[Pit]]:
        return await self._get("/pit", Pit, "pits", session_key=session_key)

    @log_api_call
    async def get_race_control(self, session_key: int) -> ScraperResult[list[RaceControl]]:
        """Get race control messages (flags, safety cars, incidents)."""
        return await self._get("/race_control", RaceControl, "race_control", session_key=session_key)

    @log_api_call
    async def get_starting_grid(self, session_key: int) -> ScraperResult[list[StartingGrid]]:
        return await self._get("/starting_grid", StartingGrid, "starting_grid", session_key=session_key)

    # ── Aggregation ────────────────────────────────────────────

    async def get_complete_session_data(
        self,
        session: Session,
        options: SessionOptions | None = None,
    ) -> ScraperResult[SessionDocument]:
        """Fetch drivers, results and any requested extras for one session.

        Drivers and results are mandatory and fetched concurrently; if either
        fails the whole session fails with that error. Optional resources are
        fetched one after another and simply left out when they fail.
        """
        options = options or SessionOptions()
        key = session.session_key
        logger.info("Processing session %s (%s)", session.session_name, key)

        drivers, results = await asyncio.gather(
            self.get_drivers(key),
            self.get_session_results(key),
        )
        for mandatory in (drivers, results):
            if not mandatory.success:
                return ScraperResult.fail(mandatory.error)  # type: ignore[arg-type]

        optional = {
            "laps": (options.include_laps, self.get_laps),
            "stints": (options.include_stints, self.get_stints),
            "pits": (options.include_pits, self.get_pits),
            "race_control": (options.include_race_control, self.get_race_control),
            "starting_grid": (options.include_starting_grid, self.get_starting_grid),
        }
        extras: dict[str, list[Any]] = {}
        for field, (wanted, fetch) in optional.items():
            if not wanted:
                continue
            extra = await fetch(key)
            if extra.success:
                extras[field] = extra.data  # type: ignore[assignment]
            else:
                logger.warning("Omitting %s for session %s: %s", field, key, extra.error)

        try:
            document = SessionDocument(
                session=session,
                drivers=drivers.data,
                results=results.data,
                **extras,
            )
        except ValidationError as exc:
            return ScraperResult.fail(ScraperError(
                kind=ErrorKind.INVALID_RESPONSE,
                message=f"Inconsistent data for session {key}",
                details={"errors": [e["msg"] for e in exc.errors()]},
            ))

        logger.info("Session %s complete", session.session_name)
        return ScraperResult.ok(document)
