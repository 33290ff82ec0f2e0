"""Sunrise and sunset calculations using astropy.

Sunrise and sunset are the moments the sun's upper limb touches the
horizon, allowing for standard atmospheric refraction; that is when the
sun's center is at -0.833° altitude. They are found by sampling the sun's
altitude across the local calendar day and bisecting the sample interval
that brackets each crossing.

A failed calculation, including a missing or undownloadable Earth
orientation (IERS) table, raises `SunTimeError`, which callers treat as
"no sun times for this date".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol

from astropy import units as u
from astropy.coordinates import AltAz, EarthLocation, get_sun
from astropy.time import Time
from astropy.utils.iers import IERSRangeError

SUNRISE_ALTITUDE_DEG = -0.833

SAMPLE_INTERVAL = timedelta(minutes=15)


class SunTimeError(Exception):
    """Raised when sunrise/sunset cannot be computed for a date."""


@dataclass(frozen=True)
class SunTimes:
    """Sunrise and sunset for one date, in the location's UTC offset."""

    sunrise: datetime
    sunset: datetime


class SunTimeProvider(Protocol):
    """Anything that can compute sun times the way `get_sun_times` does."""

    def __call__(
        self,
        latitude: float,
        longitude: float,
        date: datetime,
        utc_offset_hours: float,
    ) -> SunTimes: ...


def _to_astropy_time(times: list[datetime]) -> Time:
    """Convert aware datetimes to an astropy Time array (UTC scale)."""
    utc = [t.astimezone(timezone.utc).replace(tzinfo=None) for t in times]
    return Time(utc, scale="utc")


def _sun_altitudes(location: EarthLocation, times: list[datetime]) -> list[float]:
    """Sun altitude in degrees at each of `times`."""
    obs_time = _to_astropy_time(times)
    altaz_frame = AltAz(obstime=obs_time, location=location)
    sun_altaz = get_sun(obs_time).transform_to(altaz_frame)
    return [float(alt) for alt in sun_altaz.alt.deg]


def _bisect_crossing(
    location: EarthLocation,
    low_time: datetime,
    high_time: datetime,
    target_altitude: float,
    rising: bool,
    tolerance: timedelta = timedelta(seconds=1),
) -> datetime:
    """Narrow a bracketing interval down to the crossing time."""
    while (high_time - low_time) > tolerance:
        mid_time = low_time + (high_time - low_time) / 2
        (mid_alt,) = _sun_altitudes(location, [mid_time])

        below = mid_alt < target_altitude
        if below == rising:
            low_time = mid_time
        else:
            high_time = mid_time

    return low_time + (high_time - low_time) / 2


def _find_crossings(
    location: EarthLocation,
    start_time: datetime,
    end_time: datetime,
    target_altitude: float,
) -> tuple[datetime | None, datetime | None]:
    """Find the first rising and first setting crossing in a window.

    Returns:
        (rising time, setting time); either is None if it does not occur
    """
    samples = [start_time]
    while samples[-1] < end_time:
        samples.append(min(samples[-1] + SAMPLE_INTERVAL, end_time))
    altitudes = _sun_altitudes(location, samples)

    rise: datetime | None = None
    set_: datetime | None = None
    for i in range(1, len(samples)):
        prev_alt, curr_alt = altitudes[i - 1], altitudes[i]
        if rise is None and prev_alt < target_altitude <= curr_alt:
            rise = _bisect_crossing(
                location, samples[i - 1], samples[i], target_altitude, rising=True
            )
        elif set_ is None and prev_alt > target_altitude >= curr_alt:
            set_ = _bisect_crossing(
                location, samples[i - 1], samples[i], target_altitude, rising=False
            )

    return rise, set_


def get_sun_times(
    latitude: float,
    longitude: float,
    date: datetime,
    utc_offset_hours: float,
) -> SunTimes:
    """Compute sunrise and sunset for a calendar date.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        date: The calendar date, as midnight UTC (any time of day is ignored)
        utc_offset_hours: Offset of the location's local time from UTC

    Returns:
        SunTimes with both instants expressed in the given UTC offset

    Raises:
        SunTimeError: If the sun does not rise or does not set that day
            (polar day or night), or the calculation itself fails
    """
    tz = timezone(timedelta(hours=utc_offset_hours))
    local_midnight = datetime(date.year, date.month, date.day, tzinfo=tz)
    end = local_midnight + timedelta(days=1)

    try:
        location = EarthLocation(lat=latitude * u.deg, lon=longitude * u.deg)
        sunrise, sunset = _find_crossings(
            location, local_midnight, end, SUNRISE_ALTITUDE_DEG
        )
    except (ValueError, u.UnitsError, IERSRangeError, OSError) as e:
        raise SunTimeError(f"sun position calculation failed: {e}") from e

    if sunrise is None or sunset is None:
        raise SunTimeError(
            f"no sunrise/sunset at {latitude:.2f},{longitude:.2f} on {date:%Y-%m-%d}"
        )

    return SunTimes(
        sunrise=sunrise.astimezone(tz).replace(microsecond=0),
        sunset=sunset.astimezone(tz).replace(microsecond=0),
    )
