"""weather.gov (National Weather Service) forecast provider.

## API Documentation Summary
Source: https://www.weather.gov/documentation/services-web-api

## Endpoints
- Points: https://api.weather.gov/points/{lat},{lon}
  `properties.forecast` holds the gridpoint forecast URL for the point.
- Forecast: https://api.weather.gov/gridpoints/{wfo}/{x},{y}/forecast
  `properties.periods[]` holds alternating daytime/nighttime periods in
  chronological order, `properties.updated` the last update instant.

## Authentication
- No API key required
- A User-Agent identifying the application (ideally with a contact) is
  expected; requests without one may be rejected

## Known Issues
- The API is intermittently unreachable over IPv6, hence the option to
  force IPv4 (https://github.com/weather-gov/api/discussions/763)
- Gridpoint forecasts fail transiently with 500/503; callers should retry
  the whole fetch (see `fetch_forecast_with_retry`)
"""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from wxcal.models.forecast import ForecastResponse, PointsResponse
from wxcal.models.location import Coordinates
from wxcal.providers.base import ForecastProvider, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_FETCH_ATTEMPTS = 3
DEFAULT_RETRY_DELAY_SECONDS = 20.0


class WeatherGovProvider(ForecastProvider):
    """National Weather Service period forecast provider.

    Example:
        ```python
        async with WeatherGovProvider(contact_email="me@example.com") as provider:
            forecast = await provider.get_forecast(
                Coordinates(latitude=42.27, longitude=-83.74)
            )
        ```
    """

    name = "weathergov"
    base_url = "https://api.weather.gov"
    accept = "application/geo+json"

    def points_url(self, coordinates: Coordinates) -> str:
        return f"{self.base_url}/points/{coordinates}"

    async def get_forecast(self, coordinates: Coordinates) -> ForecastResponse:
        """Look up the point's forecast URL, then fetch that forecast."""
        points = await self._fetch_model(self.points_url(coordinates), PointsResponse)
        logger.debug(f"Forecast URL for {coordinates}: {points.forecast_url}")
        return await self._fetch_model(points.forecast_url, ForecastResponse)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Forecast fetch attempt {retry_state.attempt_number} failed: {exc}; retrying"
    )


async def fetch_forecast_with_retry(
    provider: ForecastProvider,
    coordinates: Coordinates,
    attempts: int = DEFAULT_FETCH_ATTEMPTS,
    delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
) -> ForecastResponse:
    """Fetch a forecast, retrying any failure a fixed number of times.

    Raises:
        ProviderError: The last failure once all attempts are used up
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(delay_seconds),
        retry=retry_if_exception_type((ProviderError, httpx.HTTPError)),
        before_sleep=_log_retry,
        reraise=True,
    )
    return await retrying(provider.get_forecast, coordinates)
