"""Domain models for wxcal."""

from wxcal.models.location import Coordinates
from wxcal.models.forecast import (
    PointsResponse,
    ForecastResponse,
    RawForecastPeriod,
    ForecastPeriod,
    ScheduledPeriod,
    DayAggregate,
    ForecastCalendar,
)
from wxcal.models.calendar import (
    CalendarDocument,
    CalendarEvent,
)

__all__ = [
    # Location
    "Coordinates",
    # Wire
    "PointsResponse",
    "ForecastResponse",
    "RawForecastPeriod",
    # Forecast calendar
    "ForecastPeriod",
    "ScheduledPeriod",
    "DayAggregate",
    "ForecastCalendar",
    # Output
    "CalendarDocument",
    "CalendarEvent",
]
