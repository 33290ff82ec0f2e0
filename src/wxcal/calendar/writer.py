"""Render calendar documents to iCalendar text and write them to disk.

Rendering uses the `ics` library. Properties it has no first-class support
for (calendar name/description for the common clients, refresh hints,
calendar-level LAST-MODIFIED) are added as extra content lines.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ics import Calendar, Event
from ics.grammar.parse import ContentLine
from ics.utils import escape_string

from wxcal.models.calendar import CalendarDocument, CalendarEvent

logger = logging.getLogger(__name__)

CRLF = "\r\n"
CALENDAR_END = "END:VCALENDAR"


class OutputWriteError(Exception):
    """Raised when a calendar file cannot be written."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"failed to write output file '{path}': {cause}")
        self.path = path
        self.cause = cause


def _ical_utc(t: datetime) -> str:
    return t.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _to_ics_event(event: CalendarEvent) -> Event:
    ics_event = Event(
        uid=event.uid,
        name=event.summary,
        description=event.description,
        location=event.location,
        url=event.url,
        created=event.dt_stamp,
        last_modified=event.last_modified,
    )
    ics_event.begin = event.all_day_start.isoformat()
    ics_event.make_all_day()
    # make_all_day() leaves a one-day event without DTEND; DTEND is exclusive.
    ics_event.end = (event.all_day_end + timedelta(days=1)).isoformat()
    return ics_event


def render_calendar(document: CalendarDocument) -> Calendar:
    """Build an `ics.Calendar` holding a document's calendar-level properties.

    Events are not added: `ics.Calendar` keeps them in a set, which loses
    the document's order. `serialize_calendar` writes them separately.
    """
    calendar = Calendar(creator=document.product_id)
    calendar.method = document.method

    name = escape_string(document.name)
    description = escape_string(document.description)

    calendar.extra.extend(
        [
            ContentLine(name="NAME", value=name),
            ContentLine(name="X-WR-CALNAME", value=name),
            ContentLine(name="DESCRIPTION", value=description),
            ContentLine(name="X-WR-CALDESC", value=description),
            ContentLine(name="LAST-MODIFIED", value=_ical_utc(document.last_modified)),
            ContentLine(
                name="REFRESH-INTERVAL",
                params={"VALUE": ["DURATION"]},
                value=document.refresh_interval,
            ),
            ContentLine(name="X-PUBLISHED-TTL", value=document.refresh_interval),
        ]
    )
    return calendar


def serialize_calendar(document: CalendarDocument) -> str:
    """Render a document to iCalendar text, events in document order."""
    calendar_text = render_calendar(document).serialize()
    events_text = "".join(
        f"{_to_ics_event(event).serialize()}{CRLF}" for event in document.events
    )
    head, end_line, tail = calendar_text.rpartition(CALENDAR_END)
    return f"{head}{events_text}{end_line}{tail}"


def write_calendar(document: CalendarDocument, path: Path) -> None:
    """Write a document to `path`, replacing any existing file.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    text = serialize_calendar(document)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise OutputWriteError(path, e) from e

    logger.info(f"Wrote {path} ({len(document.events)} events)")
