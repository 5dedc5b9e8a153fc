"""f1scraper — Grand Prix documents assembled from the OpenF1 API."""

from f1scraper.client import OpenF1Client, SessionOptions
from f1scraper.config import ScraperSettings
from f1scraper.envelope import ScraperResult
from f1scraper.errors import ErrorKind, ScraperError, ScraperResultError
from f1scraper.models.document import (
    GrandPrixDocument,
    GrandPrixMetadata,
    SessionDocument,
    SessionKind,
    SessionMap,
)
from f1scraper.scraper import (
    GrandPrixScraper,
    ScrapeConfig,
    estimate_round,
    normalize_session_name,
)

__all__ = [
    "ErrorKind",
    "GrandPrixDocument",
    "GrandPrixMetadata",
    "GrandPrixScraper",
    "OpenF1Client",
    "ScrapeConfig",
    "ScraperError",
    "ScraperResult",
    "ScraperResultError",
    "ScraperSettings",
    "SessionDocument",
    "SessionKind",
    "SessionMap",
    "SessionOptions",
    "estimate_round",
    "normalize_session_name",
]

__version__ = "0.1.0"
