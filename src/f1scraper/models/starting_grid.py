"""Starting grid model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StartingGrid(BaseModel):
    """One grid slot: position and the qualifying lap that earned it."""

    model_config = ConfigDict(frozen=True)

    position: int | None = None
    driver_number: int | None = None
    lap_duration: float | None = None
    meeting_key: int | None = None
    session_key: int | None = None
