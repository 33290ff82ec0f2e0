"""Calendar document models.

These are the output-facing records produced by `wxcal.calendar.builder`
and rendered to iCal by `wxcal.calendar.writer`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class CalendarEvent:
    """A one-day all-day calendar event."""

    uid: str
    dt_stamp: datetime  # when this run created the event
    last_modified: datetime
    all_day_start: date
    all_day_end: date  # same as all_day_start for a one-day event
    location: str
    summary: str
    description: str
    url: str | None = None


@dataclass
class CalendarDocument:
    """A published calendar and its events."""

    calendar_id: str
    name: str
    description: str
    product_id: str
    last_modified: datetime
    method: str = "PUBLISH"
    refresh_interval: str = "PT1H"  # iCal duration
    events: list[CalendarEvent] = field(default_factory=list)
