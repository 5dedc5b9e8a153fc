"""Environment-driven settings for the scraper."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.openf1.org/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0


class ScraperSettings(BaseSettings):
    """OpenF1 access settings, overridable via ``OPENF1_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="OPENF1_")

    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, ge=0)
    log_level: str = "INFO"
