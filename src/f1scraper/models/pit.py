"""Pit stop model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Pit(BaseModel):
    model_config = ConfigDict(frozen=True)

    driver_number: int | None = None
    lap_number: int | None = None
    date: datetime | None = None
    pit_duration: float | None = None
    meeting_key: int | None = None
    session_key: int | None = None
