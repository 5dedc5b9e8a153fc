"""Tyre stint model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Stint(BaseModel):
    model_config = ConfigDict(frozen=True)

    driver_number: int | None = None
    stint_number: int | None = None
    compound: str | None = None
    lap_start: int | None = None
    lap_end: int | None = None
    tyre_age_at_start: int | None = None
    meeting_key: int | None = None
    session_key: int | None = None
