"""Pytest fixtures for wxcal tests.

This module provides test fixtures that ensure:
1. No external API calls are made (weather.gov is served by httpx.MockTransport)
2. Sunrise/sunset comes from a deterministic fake unless a test opts into astropy
3. Isolated test environment with controlled configuration
"""

import copy
import os
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("WXCAL_FETCH_RETRY_DELAY_SECONDS", "0")
os.environ.setdefault("WXCAL_LOG_LEVEL", "DEBUG")

from wxcal.astronomy.calculator import SunTimeError, SunTimes
from wxcal.config import CalendarConfig, Settings
from wxcal.models.forecast import ForecastResponse
from wxcal.models.location import Coordinates

FORECAST_URL = "https://api.weather.gov/gridpoints/DTX/65,33/forecast"

EDT = timezone(timedelta(hours=-4))


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from wxcal.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with no delay between fetch attempts."""
    return Settings(fetch_attempts=3, fetch_retry_delay_seconds=0)


# =============================================================================
# Sun times
# =============================================================================


class FakeSunTimes:
    """Deterministic stand-in for `get_sun_times`.

    Sunrise is 6:01:02 and sunset 21:10:40 local time on every date.
    `failures` maps a date to how many calls for it should fail first.
    """

    def __init__(self, failures: dict[date, int] | None = None):
        self.failures = dict(failures or {})
        self.calls: list[tuple[datetime, float]] = []

    def __call__(
        self,
        latitude: float,
        longitude: float,
        date: datetime,
        utc_offset_hours: float,
    ) -> SunTimes:
        self.calls.append((date, utc_offset_hours))
        remaining = self.failures.get(date.date(), 0)
        if remaining:
            self.failures[date.date()] = remaining - 1
            raise SunTimeError(f"no sun on {date:%Y-%m-%d}")
        tz = timezone(timedelta(hours=utc_offset_hours))
        return SunTimes(
            sunrise=datetime(date.year, date.month, date.day, 6, 1, 2, tzinfo=tz),
            sunset=datetime(date.year, date.month, date.day, 21, 10, 40, tzinfo=tz),
        )

    def calls_for(self, day: date) -> int:
        return sum(1 for called_date, _ in self.calls if called_date.date() == day)


@pytest.fixture
def fake_sun_times() -> FakeSunTimes:
    return FakeSunTimes()


@pytest.fixture
def failing_sun_times():
    """Factory for a FakeSunTimes that fails the first calls for some dates."""
    return FakeSunTimes


@pytest.fixture
def edt() -> timezone:
    return EDT


# =============================================================================
# Forecast data
# =============================================================================


def make_period(
    number: int,
    name: str,
    start: str,
    end: str,
    is_daytime: bool,
    temperature,
    short_forecast: str,
    detailed_forecast: str,
) -> dict:
    """A weather.gov period as it appears on the wire."""
    return {
        "number": number,
        "name": name,
        "startTime": start,
        "endTime": end,
        "isDaytime": is_daytime,
        "temperature": temperature,
        "temperatureUnit": "F",
        "temperatureTrend": None,
        "windSpeed": "5 to 10 mph",
        "windDirection": "SW",
        "icon": "https://api.weather.gov/icons/land/day/few?size=medium",
        "shortForecast": short_forecast,
        "detailedForecast": detailed_forecast,
    }


SAMPLE_PERIODS = [
    make_period(
        1, "This Afternoon",
        "2024-06-01T14:00:00-04:00", "2024-06-01T18:00:00-04:00",
        True, 75, "Sunny", "Sunny, with a high near 75.",
    ),
    make_period(
        2, "Tonight",
        "2024-06-01T18:00:00-04:00", "2024-06-02T06:00:00-04:00",
        False, 60, "Slight Chance Showers",
        "A slight chance of showers. Mostly cloudy, with a low around 60.",
    ),
    make_period(
        3, "Sunday",
        "2024-06-02T06:00:00-04:00", "2024-06-02T18:00:00-04:00",
        True, 78, "Partly Sunny then Slight Chance Showers And Thunderstorms",
        "Partly sunny, then a slight chance of showers and thunderstorms.",
    ),
    make_period(
        4, "Sunday Night",
        "2024-06-02T18:00:00-04:00", "2024-06-03T06:00:00-04:00",
        False, 62, "Areas Of Fog", "Areas of fog. Low around 62.",
    ),
    make_period(
        5, "Monday",
        "2024-06-03T06:00:00-04:00", "2024-06-03T18:00:00-04:00",
        True, 80, "Mostly Sunny", "Mostly sunny, with a high near 80.",
    ),
]


@pytest.fixture
def forecast_json() -> dict:
    """A trimmed /gridpoints/.../forecast response."""
    return {
        "type": "Feature",
        "properties": {
            "units": "us",
            "generatedAt": "2024-06-01T10:30:00+00:00",
            "updated": "2024-06-01T10:02:13+00:00",
            "periods": copy.deepcopy(SAMPLE_PERIODS),
        },
    }


@pytest.fixture
def points_json() -> dict:
    """A trimmed /points/... response."""
    return {"properties": {"forecast": FORECAST_URL, "gridId": "DTX"}}


@pytest.fixture
def forecast_response(forecast_json: dict) -> ForecastResponse:
    return ForecastResponse.model_validate(forecast_json)


@pytest.fixture
def weather_gov_transport(points_json: dict, forecast_json: dict) -> httpx.MockTransport:
    """Serve the points and forecast endpoints, 404 for anything else.

    The handler reads the fixture dicts on every request, so tests may edit
    them before fetching.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/points/"):
            return httpx.Response(200, json=points_json)
        if request.url.path.startswith("/gridpoints/"):
            return httpx.Response(200, json=forecast_json)
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def ann_arbor() -> Coordinates:
    return Coordinates(latitude=42.27, longitude=-83.74)


@pytest.fixture
def now() -> datetime:
    """The run's fixed current time."""
    return datetime(2024, 6, 1, 11, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def calendar_config(tmp_path: Path, ann_arbor: Coordinates) -> CalendarConfig:
    return CalendarConfig(
        location="Ann Arbor, MI",
        domain="ical.example.com",
        coordinates=ann_arbor,
        ical_file=tmp_path / "weather.ics",
        sun_ical_file=tmp_path / "sun.ics",
        contact_email="me@example.com",
    )
