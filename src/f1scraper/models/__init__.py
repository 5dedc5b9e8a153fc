"""OpenF1 record models and aggregated documents."""

from f1scraper.models.document import (
    GrandPrixDocument,
    GrandPrixMetadata,
    SessionDocument,
    SessionKind,
    SessionMap,
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

__all__ = [
    "Driver",
    "GrandPrixDocument",
    "GrandPrixMetadata",
    "Lap",
    "Meeting",
    "Pit",
    "RaceControl",
    "Session",
    "SessionDocument",
    "SessionKind",
    "SessionMap",
    "SessionResult",
    "StartingGrid",
    "Stint",
]
