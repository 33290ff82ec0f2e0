"""Astronomical calculations for sunrise and sunset times."""

from wxcal.astronomy.calculator import (
    SunTimeError,
    SunTimeProvider,
    SunTimes,
    get_sun_times,
)

__all__ = [
    "SunTimeError",
    "SunTimeProvider",
    "SunTimes",
    "get_sun_times",
]
