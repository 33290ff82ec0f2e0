"""Fetch a forecast and publish it as calendar files.

## Steps

1. Fetch the weather.gov forecast (retried a fixed number of times)
2. Normalize its periods
3. Fold the periods into one record per date, with sunrise/sunset
4. Build the weather document (and the sunrise/sunset document if requested)
5. Write each document to its path

Only the fetch is retried. A failure anywhere else ends the run; a document
already written is left in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from wxcal.astronomy.calculator import SunTimeProvider, get_sun_times
from wxcal.calendar.builder import CalendarBuilder
from wxcal.calendar.writer import OutputWriteError, write_calendar
from wxcal.config import CalendarConfig, Settings, get_settings
from wxcal.forecast.aggregate import build_forecast_calendar
from wxcal.forecast.normalize import TemperatureCoercionError, normalize_periods
from wxcal.models.calendar import CalendarDocument
from wxcal.models.forecast import ForecastResponse
from wxcal.providers.base import ForecastProvider, ProviderError
from wxcal.providers.weathergov import WeatherGovProvider, fetch_forecast_with_retry

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """A fatal failure, naming the stage that failed."""

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"failed to {stage}: {cause}")
        self.stage = stage
        self.cause = cause


@dataclass
class GeneratedCalendars:
    """The documents produced by one run."""

    weather: CalendarDocument
    sun: CalendarDocument | None = None


def forecast_link(config: CalendarConfig, settings: Settings) -> str:
    return settings.forecast_detail_url.format(lat=config.latitude, lon=config.longitude)


def generate_calendars(
    config: CalendarConfig,
    forecast: ForecastResponse,
    now: datetime,
    settings: Settings | None = None,
    sun_times: SunTimeProvider = get_sun_times,
) -> GeneratedCalendars:
    """Build the calendar documents for an already fetched forecast.

    Raises:
        TemperatureCoercionError: If a period's temperature is not an integer
    """
    settings = settings or get_settings()

    periods = normalize_periods(forecast.periods)
    days = build_forecast_calendar(periods, config.coordinates, sun_times=sun_times)
    logger.debug(f"Aggregated {len(periods)} periods into {len(days)} days")

    builder = CalendarBuilder(
        location=config.location,
        domain=config.domain,
        coordinates=config.coordinates,
        now=now,
        title_prefix=config.title_prefix,
    )
    weather = builder.build_weather_calendar(
        days, forecast_link(config, settings), forecast.updated
    )
    sun = builder.build_sun_calendar(days) if config.wants_sun_calendar else None
    return GeneratedCalendars(weather=weather, sun=sun)


def make_provider(config: CalendarConfig, settings: Settings) -> WeatherGovProvider:
    return WeatherGovProvider(
        contact_email=config.contact_email or settings.contact_email,
        timeout=settings.request_timeout_seconds,
        force_ipv4=config.force_ipv4 or settings.force_ipv4,
    )


async def run_pipeline(
    config: CalendarConfig,
    settings: Settings | None = None,
    now: datetime | None = None,
    provider: ForecastProvider | None = None,
    sun_times: SunTimeProvider = get_sun_times,
) -> GeneratedCalendars:
    """Run every step for one configuration.

    Args:
        config: What to generate and where to write it
        settings: Process settings (defaults to `get_settings()`)
        now: The run's current time (defaults to the clock, read once)
        provider: Forecast provider (defaults to weather.gov)
        sun_times: Sunrise/sunset calculator

    Returns:
        The documents that were written

    Raises:
        PipelineError: On any fatal failure
    """
    settings = settings or get_settings()
    now = now or datetime.now(timezone.utc)
    provider = provider or make_provider(config, settings)

    try:
        async with provider:
            forecast = await fetch_forecast_with_retry(
                provider,
                config.coordinates,
                attempts=settings.fetch_attempts,
                delay_seconds=settings.fetch_retry_delay_seconds,
            )
    except ProviderError as e:
        raise PipelineError("get forecast", e) from e
    logger.info(
        f"Fetched {len(forecast.periods)} forecast periods updated {forecast.updated.isoformat()}"
    )

    try:
        calendars = generate_calendars(
            config, forecast, now, settings=settings, sun_times=sun_times
        )
    except TemperatureCoercionError as e:
        raise PipelineError("normalize forecast periods", e) from e

    try:
        write_calendar(calendars.weather, config.ical_file)
    except OutputWriteError as e:
        raise PipelineError("write weather calendar", e) from e

    if calendars.sun is not None and config.sun_ical_file is not None:
        try:
            write_calendar(calendars.sun, config.sun_ical_file)
        except OutputWriteError as e:
            raise PipelineError("write sunrise/sunset calendar", e) from e

    return calendars
