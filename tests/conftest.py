"""Shared test fixtures and sample API responses."""

from __future__ import annotations

import pytest
import pytest_asyncio

from f1scraper import OpenF1Client

BASE_URL = "https://api.openf1.org/v1"


SAMPLE_MEETING = {
    "circuit_key": 63,
    "circuit_short_name": "Sakhir",
    "country_code": "BRN",
    "country_key": 36,
    "country_name": "Bahrain",
    "date_start": "2025-04-11T11:30:00+00:00",
    "gmt_offset": "03:00:00",
    "location": "Sakhir",
    "meeting_key": 1257,
    "meeting_name": "Example GP",
    "meeting_official_name": "FORMULA 1 EXAMPLE GRAND PRIX 2025",
    "year": 2025,
}

SAMPLE_SESSION = {
    "circuit_key": 63,
    "circuit_short_name": "Sakhir",
    "country_code": "BRN",
    "country_key": 36,
    "country_name": "Bahrain",
    "date_end": "2025-04-13T17:00:00+00:00",
    "date_start": "2025-04-13T15:00:00+00:00",
    "gmt_offset": "03:00:00",
    "location": "Sakhir",
    "meeting_key": 1257,
    "session_key": 9500,
    "session_name": "Race",
    "session_type": "Race",
    "year": 2025,
}

SAMPLE_DRIVER = {
    "broadcast_name": "A DRIVER",
    "country_code": "NED",
    "driver_number": 1,
    "first_name": "Alex",
    "full_name": "A. Driver",
    "headshot_url": None,
    "last_name": "Driver",
    "meeting_key": 1257,
    "name_acronym": "ADR",
    "session_key": 9500,
    "team_colour": "3671C6",
    "team_name": "Team X",
}

SAMPLE_RESULT = {
    "dnf": False,
    "dns": False,
    "dsq": False,
    "driver_number": 1,
    "duration": 5520.123,
    "gap_to_leader": 0,
    "number_of_laps": 58,
    "meeting_key": 1257,
    "position": 1,
    "session_key": 9500,
}

SAMPLE_LAP = {
    "date_start": "2025-04-13T15:10:00",
    "driver_number": 1,
    "duration_sector_1": 28.5,
    "duration_sector_2": 35.2,
    "duration_sector_3": 30.1,
    "i1_speed": 305,
    "i2_speed": 280,
    "is_pit_out_lap": False,
    "lap_duration": 93.8,
    "lap_number": 5,
    "meeting_key": 1257,
    "segments_sector_1": [2048, 2049, 2051],
    "segments_sector_2": [2048, None],
    "segments_sector_3": [2048, 2049, 2050],
    "session_key": 9500,
    "st_speed": 310,
}

SAMPLE_STINT = {
    "compound": "SOFT",
    "driver_number": 1,
    "lap_end": 20,
    "lap_start": 1,
    "meeting_key": 1257,
    "session_key": 9500,
    "stint_number": 1,
    "tyre_age_at_start": 0,
}

SAMPLE_PIT = {
    "date": "2025-04-13T15:30:00",
    "driver_number": 1,
    "lap_number": 20,
    "meeting_key": 1257,
    "pit_duration": 23.5,
    "session_key": 9500,
}

SAMPLE_RACE_CONTROL = {
    "category": "Flag",
    "date": "2025-04-13T15:03:00",
    "driver_number": None,
    "flag": "GREEN",
    "lap_number": 1,
    "meeting_key": 1257,
    "message": "GREEN LIGHT - PIT EXIT OPEN",
    "scope": "Track",
    "sector": None,
    "session_key": 9500,
}

SAMPLE_STARTING_GRID = {
    "driver_number": 1,
    "lap_duration": 89.841,
    "meeting_key": 1257,
    "position": 1,
    "session_key": 9500,
}


def make_session(session_key: int, name: str, session_type: str, meeting_key: int = 1257) -> dict:
    return {
        **SAMPLE_SESSION,
        "meeting_key": meeting_key,
        "session_key": session_key,
        "session_name": name,
        "session_type": session_type,
    }


class RecordingSleep:
    """Stands in for ``asyncio.sleep`` and records every requested delay."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest_asyncio.fixture
async def client(sleep: RecordingSleep):
    f1 = OpenF1Client(retry_delay=1.0, sleep=sleep)
    yield f1
    await f1.close()
