"""Application configuration.

Two layers of configuration are used:

- `Settings`: process-wide defaults loaded from environment variables using
  pydantic-settings (prefix `WXCAL_`, optional `.env` file).
- `CalendarConfig`: the immutable per-run value built by the CLI from its
  arguments (falling back to `Settings`) and passed into the pipeline.

## Optional Environment Variables

- WXCAL_CONTACT_EMAIL: Contact email included in the weather.gov User-Agent
- WXCAL_FORCE_IPV4: Only connect to weather.gov over IPv4 (default: false)
- WXCAL_REQUEST_TIMEOUT_SECONDS: Per-request timeout (default: 5)
- WXCAL_FETCH_ATTEMPTS: Forecast fetch attempts before giving up (default: 3)
- WXCAL_FETCH_RETRY_DELAY_SECONDS: Delay between fetch attempts (default: 20)
- WXCAL_LOG_LEVEL: Logging level (default: INFO)

## Example .env file

```
WXCAL_CONTACT_EMAIL=me@example.com
WXCAL_FORCE_IPV4=true
```
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wxcal.models.location import Coordinates


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WXCAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # weather.gov client
    contact_email: str | None = Field(
        default=None,
        description="Contact email sent in the User-Agent header",
    )
    force_ipv4: bool = False
    request_timeout_seconds: float = Field(default=5.0, gt=0)
    fetch_attempts: int = Field(default=3, ge=1, le=10)
    fetch_retry_delay_seconds: float = Field(default=20.0, ge=0)

    # Link added to every weather event
    forecast_detail_url: str = Field(
        default="https://forecast.weather.gov/MapClick.php?textField1={lat:.2f}&textField2={lon:.2f}",
        description="Forecast detail link template, formatted with lat/lon",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


class CalendarConfig(BaseModel):
    """Everything one pipeline run needs to know, fixed for the run."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., min_length=1, description="Calendar location name, eg. 'Ann Arbor, MI'")
    domain: str = Field(..., min_length=1, description="Calendar domain, eg. 'ical.example.com'")
    title_prefix: str = Field(default="", description="Optional prefix for every event title")
    coordinates: Coordinates

    ical_file: Path = Field(..., description="Weather forecast calendar output path")
    sun_ical_file: Path | None = Field(
        default=None,
        description="Sunrise/sunset calendar output path; the document is skipped if unset",
    )

    contact_email: str | None = None
    force_ipv4: bool = False

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

    @property
    def wants_sun_calendar(self) -> bool:
        """Whether the sunrise/sunset document was requested."""
        return self.sun_ical_file is not None
