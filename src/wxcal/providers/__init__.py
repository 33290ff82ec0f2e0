"""Forecast data providers."""

from wxcal.providers.base import ForecastProvider, ProviderError, user_agent
from wxcal.providers.weathergov import WeatherGovProvider, fetch_forecast_with_retry

__all__ = [
    "ForecastProvider",
    "ProviderError",
    "WeatherGovProvider",
    "fetch_forecast_with_retry",
    "user_agent",
]
