"""Human-readable summary and description text for forecast days."""

from __future__ import annotations

from wxcal.models.forecast import DayAggregate, ForecastPeriod

# Applied in order to each short forecast.
SHORT_FORECAST_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("Slight ", ""),
    (" then ", "; "),
    ("Areas Of ", ""),
)


def normalize_short_forecast(text: str) -> str:
    """Tighten weather.gov's short forecast wording for a one-line title.

    >>> normalize_short_forecast("Slight Chance Showers then Areas Of Fog")
    'Chance Showers; Fog'
    """
    for old, new in SHORT_FORECAST_REPLACEMENTS:
        text = text.replace(old, new)
    return text


def period_summary_line(period: ForecastPeriod) -> str:
    """One-line summary like '72ºF Sunny'; empty for an unpopulated slot."""
    if not period.is_populated:
        return ""
    return (
        f"{period.temperature}º{period.temperature_unit} "
        f"{normalize_short_forecast(period.short_forecast)}"
    )


def day_summary_line(day: DayAggregate) -> str:
    """One-line summary of a whole day.

    Both periods give '<day> | <night>'; a lone nighttime period is labelled
    with its name (eg. 'Tonight: 58ºF Clear').
    """
    day_summary = period_summary_line(day.daytime_period)
    night_summary = period_summary_line(day.nighttime_period)

    if day_summary and night_summary:
        return f"{day_summary} | {night_summary}"
    if night_summary:
        return f"{day.nighttime_period.name}: {night_summary}"
    return day_summary


def day_detailed_forecast(day: DayAggregate) -> str:
    """Multi-line detailed forecast for a whole day."""
    daytime = day.daytime_period
    nighttime = day.nighttime_period

    if daytime.is_populated and nighttime.is_populated:
        return f"{daytime.detailed_forecast}\n\nOvernight: {nighttime.detailed_forecast}"
    if nighttime.is_populated:
        return f"{nighttime.name}: {nighttime.detailed_forecast}"
    return daytime.detailed_forecast
