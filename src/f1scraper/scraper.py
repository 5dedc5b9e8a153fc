"""Orchestrates meeting, session and season scrapes into Grand Prix documents."""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, ConfigDict

from f1scraper.client import OpenF1Client, SessionOptions
from f1scraper.envelope import ScraperResult, utcnow
from f1scraper.errors import ErrorKind, ScraperError
from f1scraper.models.document import (
    GrandPrixDocument,
    GrandPrixMetadata,
    SessionDocument,
    SessionKind,
    SessionMap,
)
from f1scraper.models.meeting import Meeting
from f1scraper.models.session import Session

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")

SESSION_TYPES = ("Practice 1", "Practice 2", "Practice 3", "Qualifying", "Sprint", "Race")


def normalize_session_name(session_name: str | None) -> SessionKind | None:
    """Map a free-text session name onto a ``SessionKind``.

    "Practice 1" -> practice1, "Qualifying" -> qualifying. Names that do not
    normalize to a known kind (e.g. "Sprint Qualifying", "Day 1") give None.
    """
    if not session_name:
        return None
    key = _NON_ALNUM.sub("", session_name.lower())
    try:
        return SessionKind(key)
    except ValueError:
        return None


def estimate_round(meeting: Meeting) -> int:
    """Approximate championship round for a meeting.

    OpenF1 exposes no round number; ``meeting_key % 100`` is a heuristic only
    and is not guaranteed to match the official calendar.
    """
    return meeting.meeting_key % 100


class ScrapeConfig(BaseModel):
    """Caller options for a scrape.

    ``session_types`` filters sessions by exact ``session_name`` (e.g.
    ``("Qualifying", "Race")``); ``None`` keeps every session.
    """

    model_config = ConfigDict(frozen=True)

    session_types: tuple[str, ...] | None = None
    include_laps: bool = False
    include_stints: bool = False
    include_pits: bool = False
    include_race_control: bool = False
    include_starting_grid: bool = False

    def wants(self, session: Session) -> bool:
        return self.session_types is None or session.session_name in self.session_types

    def session_options(self, session: Session) -> SessionOptions:
        """Inclusion flags for one session; races always get their starting grid."""
        return SessionOptions(
            include_laps=self.include_laps,
            include_stints=self.include_stints,
            include_pits=self.include_pits,
            include_race_control=self.include_race_control,
            include_starting_grid=self.include_starting_grid or session.is_race,
        )


def _scrape_failed(message: str, cause: ScraperError | None) -> ScraperResult:
    return ScraperResult.fail(ScraperError(
        kind=ErrorKind.SCRAPE_FAILED, message=message, cause=cause,
    ))


class GrandPrixScraper:
    """Builds ``GrandPrixDocument``s from an ``OpenF1Client``.

    Sessions, and meetings within a season, are processed one at a time to
    keep the load on the API bounded. A session or meeting that fails is
    logged and left out; only failing to resolve the meeting or its session
    list fails the scrape.

    Usage:
        async with OpenF1Client() as f1:
            scraper = GrandPrixScraper(f1)
            result = await scraper.scrape_latest_grand_prix(
                ScrapeConfig(session_types=("Race",)),
            )
    """

    def __init__(self, client: OpenF1Client) -> None:
        self._client = client

    async def scrape_latest_grand_prix(
        self, config: ScrapeConfig | None = None,
    ) -> ScraperResult[GrandPrixDocument]:
        """Scrape the most recent meeting."""
        logger.info("Scraping latest Grand Prix")
        meeting = await self._client.get_latest_meeting()
        if not meeting.success:
            return _scrape_failed("Could not resolve the latest meeting", meeting.error)
        return await self._scrape_meeting(meeting.data, config or ScrapeConfig())  # type: ignore[arg-type]

    async def scrape_grand_prix(
        self,
        meeting_key: int,
        config: ScrapeConfig | None = None,
        year: int | None = None,
    ) -> ScraperResult[GrandPrixDocument]:
        """Scrape one meeting by key.

        With ``year`` the meeting is looked up in that season's meeting list,
        otherwise it is fetched directly by key.
        """
        config = config or ScrapeConfig()
        if year is None:
            meeting = await self._client.get_meeting(meeting_key)
            if not meeting.success:
                return _scrape_failed(f"Could not resolve meeting {meeting_key}", meeting.error)
            return await self._scrape_meeting(meeting.data, config)  # type: ignore[arg-type]

        meetings = await self._client.get_meetings(year)
        if not meetings.success:
            return _scrape_failed(f"Could not list meetings for {year}", meetings.error)
        found = next((m for m in meetings.data if m.meeting_key == meeting_key), None)  # type: ignore[union-attr]
        if found is None:
            return _scrape_failed(
                f"Could not resolve meeting {meeting_key}",
                ScraperError(
                    kind=ErrorKind.NOT_FOUND,
                    message=f"Meeting {meeting_key} not found in {year}",
                ),
            )
        return await self._scrape_meeting(found, config)

    async def scrape_season(
        self, year: int, config: ScrapeConfig | None = None,
    ) -> ScraperResult[list[GrandPrixDocument]]:
        """Scrape every meeting of a season, skipping meetings that fail."""
        config = config or ScrapeConfig()
        logger.info("Scraping season %d", year)
        meetings = await self._client.get_meetings(year)
        if not meetings.success:
            return _scrape_failed(f"Could not list meetings for {year}", meetings.error)

        documents: list[GrandPrixDocument] = []
        for meeting in meetings.data:  # type: ignore[union-attr]
            result = await self._scrape_meeting(meeting, config)
            if result.success:
                documents.append(result.data)  # type: ignore[arg-type]
            else:
                logger.warning(
                    "Skipping meeting %s (%s): %s",
                    meeting.meeting_key, meeting.meeting_name, result.error,
                )

        logger.info("Scraped %d of %d meetings for %d", len(documents), len(meetings.data), year)  # type: ignore[arg-type]
        return ScraperResult.ok(documents)

    async def _scrape_meeting(
        self, meeting: Meeting, config: ScrapeConfig,
    ) -> ScraperResult[GrandPrixDocument]:
        logger.info(
            "Meeting %s: %s, %s, %s",
            meeting.meeting_key, meeting.meeting_name, meeting.location, meeting.country_name,
        )
        sessions = await self._client.get_sessions(meeting.meeting_key)
        if not sessions.success:
            return _scrape_failed(
                f"Could not list sessions for meeting {meeting.meeting_key}", sessions.error,
            )

        selected = [s for s in sessions.data if config.wants(s)]  # type: ignore[union-attr]
        logger.info("Sessions to process: %d", len(selected))

        collected: dict[SessionKind, SessionDocument] = {}
        for session in selected:
            if session.meeting_key != meeting.meeting_key:
                logger.warning(
                    "Dropping session %s: belongs to meeting %s, not %s",
                    session.session_key, session.meeting_key, meeting.meeting_key,
                )
                continue
            kind = normalize_session_name(session.session_name)
            if kind is None:
                logger.info("Skipping unrecognized session %r", session.session_name)
                continue

            result = await self._client.get_complete_session_data(
                session, config.session_options(session),
            )
            if not result.success:
                logger.warning(
                    "Skipping session %s (%s): %s",
                    session.session_key, session.session_name, result.error,
                )
                continue
            if kind in collected:
                logger.warning("Session %s replaces an earlier %s session", session.session_key, kind.value)
            collected[kind] = result.data  # type: ignore[assignment]

        document = GrandPrixDocument(
            meeting=meeting,
            sessions=SessionMap.from_kinds(collected),
            metadata=GrandPrixMetadata(
                scraped_at=utcnow(),
                season=meeting.year,
                round=estimate_round(meeting),
            ),
        )
        logger.info(
            "Meeting %s complete with sessions: %s",
            meeting.meeting_key, ", ".join(k.value for k in document.sessions.kinds()) or "none",
        )
        return ScraperResult.ok(document)
