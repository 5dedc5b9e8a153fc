"""Driver entry model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Driver(BaseModel):
    """A competitor entry scoped to one session."""

    model_config = ConfigDict(frozen=True)

    driver_number: int
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    broadcast_name: str | None = None
    name_acronym: str | None = None
    team_name: str | None = None
    team_colour: str | None = None
    country_code: str | None = None
    headshot_url: str | None = None
    meeting_key: int | None = None
    session_key: int | None = None
