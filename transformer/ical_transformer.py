"""iCalendar transformer for projected lecture occurrences."""

import hashlib
import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from timetable.config import get_timezone
from timetable.models import Occurrence
from .base import BaseTransformer


logger = logging.getLogger(__name__)


class ICalTransformer(BaseTransformer):
    """Transformer that converts occurrences to iCalendar format."""

    UID_DOMAIN = "@courseforge"

    def __init__(self, timezone: Optional[ZoneInfo] = None) -> None:
        """Initialize the iCalendar transformer.

        Args:
            timezone: Zone applied to naive occurrence datetimes.
                Defaults to the configured application timezone.
        """
        self._calendar: Optional[Calendar] = None
        self._timezone = timezone or get_timezone()

    def _generate_uid(self, occurrence: Occurrence) -> str:
        """Generate a unique identifier for an occurrence.

        The occurrence uid only identifies schedule and date, so the start
        time is mixed in to keep two slots on the same day apart.
        """
        unique_string = f"{occurrence.uid}-{occurrence.start_at.time()}"
        return hashlib.md5(unique_string.encode()).hexdigest() + self.UID_DOMAIN

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self._timezone)
        return value

    def transform(self, occurrences: list[Occurrence]) -> Calendar:
        """Transform occurrences into iCalendar format.

        Args:
            occurrences: Occurrences to export, one VEVENT each.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//CourseForge//Lecture Schedule//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", "Lecture Schedule")
        self._calendar.add("x-wr-timezone", self._timezone.key)

        for occurrence in occurrences:
            ical_event = Event()
            ical_event.add("uid", self._generate_uid(occurrence))
            ical_event.add("dtstart", self._localize(occurrence.start_at))
            ical_event.add("dtend", self._localize(occurrence.end_at))
            ical_event.add("dtstamp", datetime.now(self._timezone))
            ical_event.add("summary", occurrence.label)

            if occurrence.location:
                ical_event.add("location", occurrence.location)

            self._calendar.add_component(ical_event)

        logger.debug("Built calendar with %d events", len(occurrences))
        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
