"""Forecast models.

Two groups of models live here:

- Wire models (`PointsResponse`, `ForecastResponse`, `RawForecastPeriod`)
  mirror the subset of the weather.gov API that wxcal consumes. Field names
  follow Python conventions with the API's camelCase names as aliases.
- Calendar models (`ForecastPeriod`, `DayAggregate`, `ForecastCalendar`)
  hold the forecast folded into one record per calendar date.

## weather.gov Response Subset

```json
{
  "properties": {
    "updated": "2024-06-01T10:02:13+00:00",
    "periods": [
      {
        "number": 1,
        "name": "Today",
        "startTime": "2024-06-01T06:00:00-04:00",
        "endTime": "2024-06-01T18:00:00-04:00",
        "isDaytime": true,
        "temperature": 75,
        "temperatureUnit": "F",
        "windSpeed": "5 to 10 mph",
        "windDirection": "SW",
        "shortForecast": "Sunny",
        "detailedForecast": "Sunny, with a high near 75."
      }
    ]
  }
}
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Wire models
# =============================================================================


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PointsProperties(_WireModel):
    forecast_url: str = Field(..., alias="forecast")


class PointsResponse(_WireModel):
    """Subset of a response from the /points/{lat},{lon} API."""

    properties: PointsProperties

    @property
    def forecast_url(self) -> str:
        return self.properties.forecast_url


class RawForecastPeriod(_WireModel):
    """One forecast period exactly as weather.gov reports it.

    `temperature` is kept exactly as decoded from JSON (a `true` stays a bool
    rather than becoming 1); it is coerced to an integer when the period is
    normalized.
    """

    number: int = 0
    name: str = ""
    start_time: datetime = Field(..., alias="startTime")
    end_time: datetime = Field(..., alias="endTime")
    is_daytime: bool = Field(..., alias="isDaytime")
    temperature: Any = None
    temperature_unit: str = Field(default="", alias="temperatureUnit")
    wind_speed: str | None = Field(default=None, alias="windSpeed")
    wind_direction: str | None = Field(default=None, alias="windDirection")
    short_forecast: str = Field(default="", alias="shortForecast")
    detailed_forecast: str = Field(default="", alias="detailedForecast")


class ForecastProperties(_WireModel):
    updated: datetime
    periods: list[RawForecastPeriod] = Field(default_factory=list)


class ForecastResponse(_WireModel):
    """Subset of a response from the /gridpoints/{wfo}/{x},{y}/forecast API."""

    properties: ForecastProperties

    @property
    def updated(self) -> datetime:
        return self.properties.updated

    @property
    def periods(self) -> list[RawForecastPeriod]:
        return self.properties.periods


# =============================================================================
# Calendar models
# =============================================================================


@dataclass(frozen=True)
class ForecastPeriod:
    """One daytime or nighttime slot of a calendar day.

    The default instance (`is_populated=False`) means no period was recorded
    for the slot.
    """

    is_populated: bool = False
    name: str = ""
    short_forecast: str = ""
    detailed_forecast: str = ""
    temperature: int = 0
    temperature_unit: str = ""


@dataclass(frozen=True)
class ScheduledPeriod:
    """A normalized period together with when it occurs."""

    start_time: datetime
    end_time: datetime
    is_daytime: bool
    period: ForecastPeriod

    @property
    def utc_offset_hours(self) -> float:
        """UTC offset of the start instant, in hours."""
        offset = self.start_time.utcoffset() or timedelta(0)
        return offset.total_seconds() / 3600


def start_of_day(t: datetime) -> datetime:
    """Midnight of `t`'s calendar date, keeping `t`'s timezone."""
    return t.replace(hour=0, minute=0, second=0, microsecond=0)


@dataclass
class DayAggregate:
    """The merged daytime, nighttime and sun-time record for one date."""

    start: datetime  # midnight, in the UTC offset of the first period seen
    daytime_period: ForecastPeriod = field(default_factory=ForecastPeriod)
    nighttime_period: ForecastPeriod = field(default_factory=ForecastPeriod)
    sunrise: datetime | None = None
    sunset: datetime | None = None
    sun_times_available: bool = False

    @property
    def date(self) -> date:
        return self.start.date()

    def set_period(self, period: ForecastPeriod, is_daytime: bool) -> None:
        """Fill the daytime or nighttime slot, replacing what was there."""
        if is_daytime:
            self.daytime_period = period
        else:
            self.nighttime_period = period

    def set_sun_times(self, sunrise: datetime, sunset: datetime) -> None:
        """Record sunrise and sunset. Only the first call has any effect."""
        if self.sun_times_available:
            return
        self.sunrise = sunrise
        self.sunset = sunset
        self.sun_times_available = True


class ForecastCalendar:
    """Day aggregates in first-insertion (chronological) order.

    Lookup is by calendar date (year, month, day); a linear scan is fine for
    the couple of weeks a forecast covers.
    """

    def __init__(self, days: list[DayAggregate] | None = None):
        self._days: list[DayAggregate] = list(days or [])

    def index_for_date(self, day: date) -> int:
        """Return the index of the aggregate for `day`, or -1 if absent."""
        for i, aggregate in enumerate(self._days):
            if aggregate.date == day:
                return i
        return -1

    def get(self, day: date) -> DayAggregate | None:
        i = self.index_for_date(day)
        return self._days[i] if i >= 0 else None

    def append(self, aggregate: DayAggregate) -> None:
        self._days.append(aggregate)

    def __iter__(self) -> Iterator[DayAggregate]:
        return iter(self._days)

    def __len__(self) -> int:
        return len(self._days)

    def __getitem__(self, index: int) -> DayAggregate:
        return self._days[index]
