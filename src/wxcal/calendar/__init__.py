"""Calendar document building and iCal output."""

from wxcal.calendar.builder import (
    PRODUCT_ID,
    CalendarBuilder,
    build_calendar_id,
    format_clock_time,
    round_to_minute,
)
from wxcal.calendar.writer import (
    OutputWriteError,
    render_calendar,
    serialize_calendar,
    write_calendar,
)

__all__ = [
    "PRODUCT_ID",
    "CalendarBuilder",
    "OutputWriteError",
    "build_calendar_id",
    "format_clock_time",
    "round_to_minute",
    "render_calendar",
    "serialize_calendar",
    "write_calendar",
]
