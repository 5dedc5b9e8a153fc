"""Lap timing model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Lap(BaseModel):
    """One lap of one driver, with sector times and speed traps."""

    model_config = ConfigDict(frozen=True)

    driver_number: int | None = None
    lap_number: int | None = None
    date_start: datetime | None = None
    lap_duration: float | None = None
    duration_sector_1: float | None = None
    duration_sector_2: float | None = None
    duration_sector_3: float | None = None
    segments_sector_1: list[int | None] | None = None
    segments_sector_2: list[int | None] | None = None
    segments_sector_3: list[int | None] | None = None
    i1_speed: float | None = None
    i2_speed: float | None = None
    st_speed: float | None = None
    is_pit_out_lap: bool | None = None
    meeting_key: int | None = None
    session_key: int | None = None
