"""Turn raw weather.gov periods into calendar forecast periods."""

from __future__ import annotations

from typing import Any

from wxcal.models.forecast import ForecastPeriod, RawForecastPeriod, ScheduledPeriod


class TemperatureCoercionError(ValueError):
    """Raised when a period's temperature is not an integer.

    This means the upstream schema is not what wxcal understands, so it is
    never retried.
    """

    def __init__(self, value: object, period_name: str = ""):
        where = f" for period '{period_name}'" if period_name else ""
        super().__init__(f"temperature {value!r}{where} is not an integer")
        self.value = value
        self.period_name = period_name


def coerce_temperature(value: Any, period_name: str = "") -> int:
    """Coerce a loosely typed temperature to an int.

    Integers, integral floats and integer strings are accepted.

    Raises:
        TemperatureCoercionError: For anything else
    """
    if isinstance(value, bool) or value is None:
        raise TemperatureCoercionError(value, period_name)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise TemperatureCoercionError(value, period_name)
    try:
        return int(value.strip())
    except (AttributeError, ValueError) as e:
        raise TemperatureCoercionError(value, period_name) from e


def normalize_period(raw: RawForecastPeriod) -> ScheduledPeriod:
    """Build a populated `ForecastPeriod`, keeping its timing alongside.

    Text fields are passed through untouched.

    Raises:
        TemperatureCoercionError: If the temperature is not an integer
    """
    period = ForecastPeriod(
        is_populated=True,
        name=raw.name,
        short_forecast=raw.short_forecast,
        detailed_forecast=raw.detailed_forecast,
        temperature=coerce_temperature(raw.temperature, raw.name),
        temperature_unit=raw.temperature_unit,
    )
    return ScheduledPeriod(
        start_time=raw.start_time,
        end_time=raw.end_time,
        is_daytime=raw.is_daytime,
        period=period,
    )


def normalize_periods(raws: list[RawForecastPeriod]) -> list[ScheduledPeriod]:
    """Normalize every period, preserving order."""
    return [normalize_period(raw) for raw in raws]
