"""Fold chronological forecast periods into one record per calendar date."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from wxcal.astronomy.calculator import SunTimeError, SunTimeProvider, get_sun_times
from wxcal.models.forecast import (
    DayAggregate,
    ForecastCalendar,
    ScheduledPeriod,
    start_of_day,
)
from wxcal.models.location import Coordinates

logger = logging.getLogger(__name__)


def _attach_sun_times(
    aggregate: DayAggregate,
    coordinates: Coordinates,
    utc_offset_hours: float,
    sun_times: SunTimeProvider,
) -> None:
    """Compute sun times for the aggregate's date unless it already has them.

    Failures are logged and leave the aggregate without sun times, so a
    later period on the same date tries again.
    """
    if aggregate.sun_times_available:
        return

    day = aggregate.date
    try:
        result = sun_times(
            coordinates.latitude,
            coordinates.longitude,
            datetime(day.year, day.month, day.day, tzinfo=timezone.utc),
            utc_offset_hours,
        )
    except SunTimeError as e:
        logger.warning(f"Could not compute sunrise/sunset for {day.isoformat()}: {e}")
        return

    aggregate.set_sun_times(result.sunrise, result.sunset)


def build_forecast_calendar(
    periods: Iterable[ScheduledPeriod],
    coordinates: Coordinates,
    sun_times: SunTimeProvider = get_sun_times,
) -> ForecastCalendar:
    """Group periods by the calendar date they start on.

    Periods must arrive in chronological order; the result keeps that order.
    A date's daytime or nighttime slot is overwritten if the source lists
    two periods for it.

    Args:
        periods: Normalized periods, chronologically ordered
        coordinates: Location used for sunrise/sunset
        sun_times: Sunrise/sunset calculator

    Returns:
        ForecastCalendar with one DayAggregate per distinct start date
    """
    calendar = ForecastCalendar()

    for scheduled in periods:
        day = scheduled.start_time.date()
        aggregate = calendar.get(day)
        if aggregate is None:
            aggregate = DayAggregate(start=start_of_day(scheduled.start_time))
            calendar.append(aggregate)

        aggregate.set_period(scheduled.period, scheduled.is_daytime)
        _attach_sun_times(
            aggregate, coordinates, scheduled.utc_offset_hours, sun_times
        )

    return calendar
