"""Build weather and sunrise/sunset calendar documents from a forecast.

## Identity

Every document has a calendar id built from its location, coordinates and
domain:

    "Ann Arbor, MI", 42.27, -83.74, "ical.example.com"
        -> "ann-arbor-mi{42.27,-83.74}@ical.example.com"

The sunrise/sunset document appends "-Sun" to the location first, so the two
documents never share ids. Each event's uid is the event date in compact form
followed by the calendar id ("20240601-ann-arbor-mi{42.27,-83.74}@..."), so
regenerating a calendar from the same inputs yields the same ids.

## Timestamps

The run's current time is passed in once and used for every event's
creation stamp. Weather events are marked modified at the forecast's update
time; sunrise/sunset events, which have no upstream update time, at the run
time.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from wxcal import PRODUCT_NAME, __version__
from wxcal.forecast.text import day_detailed_forecast, day_summary_line
from wxcal.models.calendar import CalendarDocument, CalendarEvent
from wxcal.models.forecast import DayAggregate, ForecastCalendar
from wxcal.models.location import Coordinates

SUN_CALENDAR_SUFFIX = "-Sun"
TIME_PLACEHOLDER = "--:--"

PRODUCT_ID = f"-//{PRODUCT_NAME}//{PRODUCT_NAME} {__version__}//EN"


def build_calendar_id(location: str, domain: str, latitude: float, longitude: float) -> str:
    """Stable identifier for a calendar document."""
    location = location.replace(" ", "-").replace(",", "")
    return f"{location.lower()}{{{latitude:.2f},{longitude:.2f}}}@{domain.lower()}"


def event_uid(day: DayAggregate, calendar_id: str) -> str:
    return f"{day.start:%Y%m%d}-{calendar_id}"


def round_to_minute(t: datetime) -> datetime:
    """Round to the nearest minute, halfway rounding up."""
    return (t + timedelta(seconds=30)).replace(second=0, microsecond=0)


def format_clock_time(t: datetime | None, with_seconds: bool = True) -> str:
    """12-hour clock time like '6:01:02 AM', or a placeholder for None."""
    if t is None:
        return TIME_PLACEHOLDER
    hour = t.hour % 12 or 12
    meridiem = "AM" if t.hour < 12 else "PM"
    if with_seconds:
        return f"{hour}:{t.minute:02d}:{t.second:02d} {meridiem}"
    return f"{hour}:{t.minute:02d} {meridiem}"


def sun_times_text(day: DayAggregate) -> str:
    """'Sunrise: ...' and 'Sunset: ...' lines at second precision."""
    sunrise = day.sunrise if day.sun_times_available else None
    sunset = day.sunset if day.sun_times_available else None
    return f"Sunrise: {format_clock_time(sunrise)}\nSunset: {format_clock_time(sunset)}"


def sun_summary_line(day: DayAggregate) -> str:
    """Title like '☼ ↑ 6:01 AM | ↓ 9:10 PM', times rounded to the minute."""
    if day.sun_times_available and day.sunrise and day.sunset:
        sunrise = format_clock_time(round_to_minute(day.sunrise), with_seconds=False)
        sunset = format_clock_time(round_to_minute(day.sunset), with_seconds=False)
    else:
        sunrise = sunset = TIME_PLACEHOLDER
    return f"☼ ↑ {sunrise} | ↓ {sunset}"


class CalendarBuilder:
    """Turns a `ForecastCalendar` into calendar documents.

    Example:
        ```python
        builder = CalendarBuilder(
            location="Ann Arbor, MI",
            domain="ical.example.com",
            coordinates=Coordinates(latitude=42.27, longitude=-83.74),
            now=datetime.now(timezone.utc),
        )
        weather = builder.build_weather_calendar(forecast, link, updated)
        sun = builder.build_sun_calendar(forecast)
        ```
    """

    def __init__(
        self,
        location: str,
        domain: str,
        coordinates: Coordinates,
        now: datetime,
        title_prefix: str = "",
    ):
        """Initialize the builder.

        Args:
            location: Location name shown in titles and event locations
            domain: Calendar domain used in ids
            coordinates: Forecast location
            now: The run's current time, stamped on every event
            title_prefix: Optional prefix for every event title
        """
        self.location = location
        self.domain = domain
        self.coordinates = coordinates
        self.now = now
        self.title_prefix = title_prefix

    @property
    def weather_calendar_id(self) -> str:
        return build_calendar_id(
            self.location,
            self.domain,
            self.coordinates.latitude,
            self.coordinates.longitude,
        )

    @property
    def sun_calendar_id(self) -> str:
        return build_calendar_id(
            self.location + SUN_CALENDAR_SUFFIX,
            self.domain,
            self.coordinates.latitude,
            self.coordinates.longitude,
        )

    def _title(self, summary: str) -> str:
        if self.title_prefix:
            return f"{self.title_prefix} {summary}"
        return summary

    def weather_event(
        self,
        day: DayAggregate,
        forecast_link: str,
        updated: datetime,
    ) -> CalendarEvent:
        description = day_detailed_forecast(day)
        if day.sun_times_available:
            description += f"\n\n{sun_times_text(day)}"
        description += f"\n\nForecast Detail: {forecast_link}"

        return CalendarEvent(
            uid=event_uid(day, self.weather_calendar_id),
            dt_stamp=self.now,
            last_modified=updated,
            all_day_start=day.date,
            all_day_end=day.date,
            location=self.location,
            summary=self._title(day_summary_line(day)),
            description=description,
            url=forecast_link,
        )

    def sun_event(self, day: DayAggregate) -> CalendarEvent:
        return CalendarEvent(
            uid=event_uid(day, self.sun_calendar_id),
            dt_stamp=self.now,
            last_modified=self.now,
            all_day_start=day.date,
            all_day_end=day.date,
            location=self.location,
            summary=self._title(sun_summary_line(day)),
            description=sun_times_text(day),
        )

    def build_weather_calendar(
        self,
        forecast: ForecastCalendar,
        forecast_link: str,
        updated: datetime,
    ) -> CalendarDocument:
        """One all-day event per forecast day.

        Args:
            forecast: Aggregated forecast days
            forecast_link: Forecast detail page, linked from every event
            updated: When the forecast was last updated upstream
        """
        return CalendarDocument(
            calendar_id=self.weather_calendar_id,
            name=f"{self.location} Weather",
            description=(
                f"Weather forecast for the next week in {self.location}, "
                "provided by weather.gov."
            ),
            product_id=PRODUCT_ID,
            last_modified=updated,
            events=[self.weather_event(day, forecast_link, updated) for day in forecast],
        )

    def build_sun_calendar(self, forecast: ForecastCalendar) -> CalendarDocument:
        """One all-day sunrise/sunset event per forecast day.

        Days without sun times are still included, with placeholder times.
        """
        return CalendarDocument(
            calendar_id=self.sun_calendar_id,
            name=f"{self.location} Sunrise/Sunset",
            description=f"Sunrise and sunset times for {self.location}.",
            product_id=PRODUCT_ID,
            last_modified=self.now,
            events=[self.sun_event(day) for day in forecast],
        )
