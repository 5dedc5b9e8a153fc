"""Session model (practice, qualifying, sprint, race)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

RACE_SESSION_TYPE = "Race"


class Session(BaseModel):
    """One timed activity within a meeting."""

    model_config = ConfigDict(frozen=True)

    session_key: int
    meeting_key: int
    session_name: str | None = None
    session_type: str | None = None
    date_start: datetime | None = None
    date_end: datetime | None = None
    circuit_key: int | None = None
    circuit_short_name: str | None = None
    country_code: str | None = None
    country_key: int | None = None
    country_name: str | None = None
    gmt_offset: str | None = None
    location: str | None = None
    year: int | None = None

    @property
    def is_race(self) -> bool:
        """True for race-type sessions (a sprint is also reported as type "Race")."""
        return self.session_type == RACE_SESSION_TYPE
