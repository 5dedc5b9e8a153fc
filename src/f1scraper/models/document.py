"""Aggregated output documents: one session, and one whole Grand Prix."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from enum import Enum
from typing import Iterable

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from f1scraper.models.driver import Driver
from f1scraper.models.lap import Lap
from f1scraper.models.meeting import Meeting
from f1scraper.models.pit import Pit
from f1scraper.models.race_control import RaceControl
from f1scraper.models.session import Session
from f1scraper.models.session_result import SessionResult
from f1scraper.models.starting_grid import StartingGrid
from f1scraper.models.stint import Stint


class SessionKind(str, Enum):
    """Normalized identifiers under which sessions are stored in a document."""

    PRACTICE1 = "practice1"
    PRACTICE2 = "practice2"
    PRACTICE3 = "practice3"
    QUALIFYING = "qualifying"
    SPRINT = "sprint"
    RACE = "race"


def _duplicates(values: Iterable[int | None]) -> list[int]:
    counts = Counter(v for v in values if v is not None)
    return sorted(v for v, n in counts.items() if n > 1)


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


class SessionDocument(BaseModel):
    """A session with its drivers and results, plus any requested extras.

    Optional sub-resources stay ``None`` unless they were requested and
    fetched, and are then left out of the serialized document. A requested
    extra that came back empty serializes as ``[]``.
    """

    model_config = ConfigDict(frozen=True)

    session: Session
    drivers: list[Driver]
    results: list[SessionResult]
    laps: list[Lap] | None = None
    stints: list[Stint] | None = None
    pits: list[Pit] | None = None
    race_control: list[RaceControl] | None = None
    starting_grid: list[StartingGrid] | None = None

    @model_validator(mode="after")
    def check_invariants(self) -> SessionDocument:
        dupes = _duplicates(d.driver_number for d in self.drivers)
        if dupes:
            raise ValueError(f"duplicate driver numbers in drivers: {dupes}")

        dupes = _duplicates(r.driver_number for r in self.results)
        if dupes:
            raise ValueError(f"duplicate driver numbers in results: {dupes}")

        dupes = _duplicates(r.position for r in self.results if r.is_classified)
        if dupes:
            raise ValueError(f"duplicate positions among classified results: {dupes}")

        key = self.session.session_key
        foreign = [
            record.session_key
            for record in [*self.drivers, *self.results]
            if record.session_key is not None and record.session_key != key
        ]
        if foreign:
            raise ValueError(f"records from other sessions {sorted(set(foreign))} in session {key}")
        return self

    @model_serializer(mode="wrap")
    def omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict:
        return _drop_none(handler(self))

    def driver(self, driver_number: int) -> Driver | None:
        return next((d for d in self.drivers if d.driver_number == driver_number), None)


class SessionMap(BaseModel):
    """Session documents keyed by ``SessionKind``; unknown keys are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    practice1: SessionDocument | None = None
    practice2: SessionDocument | None = None
    practice3: SessionDocument | None = None
    qualifying: SessionDocument | None = None
    sprint: SessionDocument | None = None
    race: SessionDocument | None = None

    @model_serializer(mode="wrap")
    def omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict:
        return _drop_none(handler(self))

    @classmethod
    def from_kinds(cls, documents: dict[SessionKind, SessionDocument]) -> SessionMap:
        return cls(**{kind.value: doc for kind, doc in documents.items()})

    def get(self, kind: SessionKind) -> SessionDocument | None:
        return getattr(self, kind.value)

    def kinds(self) -> list[SessionKind]:
        """Kinds that hold a document, in canonical weekend order."""
        return [kind for kind in SessionKind if self.get(kind) is not None]

    def __len__(self) -> int:
        return len(self.kinds())


class GrandPrixMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    scraped_at: datetime
    season: int
    # Best-effort estimate, see ``estimate_round``.
    round: int


class GrandPrixDocument(BaseModel):
    """Everything scraped for one meeting."""

    model_config = ConfigDict(frozen=True)

    meeting: Meeting
    sessions: SessionMap
    metadata: GrandPrixMetadata

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize; absent sessions and extras are left out, record fields are kept."""
        return self.model_dump_json(indent=indent)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")

    @classmethod
    def from_json(cls, text: str | bytes) -> GrandPrixDocument:
        return cls.model_validate_json(text)
