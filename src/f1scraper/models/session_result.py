"""Session result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Seconds behind the leader, a "+N LAP(S)" string, or one entry per
# qualifying segment (Q1, Q2, Q3).
GapValue = float | str | list[float | None] | None
DurationValue = float | list[float | None] | None


class SessionResult(BaseModel):
    """One driver's final standing in a session."""

    model_config = ConfigDict(frozen=True)

    driver_number: int
    position: int | None = None
    gap_to_leader: GapValue = None
    duration: DurationValue = None
    number_of_laps: int | None = None
    dnf: bool = False
    dns: bool = False
    dsq: bool = False
    meeting_key: int | None = None
    session_key: int | None = None

    @property
    def is_classified(self) -> bool:
        """Classified results are those that both started and finished."""
        return not (self.dnf or self.dns)
