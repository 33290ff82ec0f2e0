"""Forecast aggregation and text formatting."""

from wxcal.forecast.aggregate import build_forecast_calendar
from wxcal.forecast.normalize import (
    TemperatureCoercionError,
    coerce_temperature,
    normalize_period,
    normalize_periods,
)
from wxcal.forecast.text import (
    day_detailed_forecast,
    day_summary_line,
    normalize_short_forecast,
    period_summary_line,
)

__all__ = [
    "TemperatureCoercionError",
    "build_forecast_calendar",
    "coerce_temperature",
    "day_detailed_forecast",
    "day_summary_line",
    "normalize_period",
    "normalize_periods",
    "normalize_short_forecast",
    "period_summary_line",
]
