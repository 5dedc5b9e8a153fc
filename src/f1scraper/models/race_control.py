"""Race control message model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RaceControl(BaseModel):
    """A control message: flags, safety car periods, penalties, incidents."""

    model_config = ConfigDict(frozen=True)

    date: datetime | None = None
    category: str | None = None
    message: str | None = None
    flag: str | None = None
    scope: str | None = None
    sector: int | None = None
    lap_number: int | None = None
    driver_number: int | None = None
    meeting_key: int | None = None
    session_key: int | None = None
