"""Data models for recurring lecture schedules and student identifiers."""

import re
from dataclasses import dataclass, field
from datetime import datetime, time
from enum import IntEnum
from typing import Any, Optional


TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")
YEAR_SUFFIX_PATTERN = re.compile(r"[0-9]{2}")


class InvalidScheduleError(ValueError):
    """Raised when stored schedule data cannot be turned into a valid model."""


class Weekday(IntEnum):
    """Teaching days. Values match ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4

    @classmethod
    def parse(cls, name: str) -> "Weekday":
        """Parse a full English weekday name such as ``"Monday"``.

        Raises:
            InvalidScheduleError: For weekend days or unknown names.
        """
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise InvalidScheduleError(
                f"Day must be one of Monday-Friday, got {name!r}"
            ) from None

    @property
    def label(self) -> str:
        return self.name.capitalize()


def parse_time(value: str) -> time:
    """Parse an ``HH:MM`` 24-hour string into a time object."""
    match = TIME_PATTERN.match(str(value).strip())
    if not match:
        raise InvalidScheduleError(f"Invalid time format (HH:MM): {value!r}")
    hour, minute = map(int, match.groups())
    return time(hour, minute)


@dataclass(frozen=True)
class WeeklySlot:
    """One weekly time slot, e.g. Monday 09:00-11:00."""

    day: Weekday
    start_time: time
    end_time: time

    def __post_init__(self) -> None:
        if not isinstance(self.day, Weekday):
            raise InvalidScheduleError(f"Day must be a Weekday, got {self.day!r}")
        if self.start_time >= self.end_time:
            raise InvalidScheduleError("Start time must be before end time")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeeklySlot":
        """Build a slot from a stored ``{"day", "startTime", "endTime"}`` entry."""
        if not isinstance(data, dict):
            raise InvalidScheduleError(f"Schedule entry must be a mapping, got {data!r}")
        return cls(
            day=Weekday.parse(data.get("day", "")),
            start_time=parse_time(data.get("startTime", "")),
            end_time=parse_time(data.get("endTime", "")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "day": self.day.label,
            "startTime": self.start_time.strftime("%H:%M"),
            "endTime": self.end_time.strftime("%H:%M"),
        }


@dataclass
class RecurringSchedule:
    """A recurring weekly activity such as the lectures of one course."""

    id: str
    label: str
    location: str = ""
    slots: list[WeeklySlot] = field(default_factory=list)
    course_id: str = ""
    lecturer_id: str = ""

    def __post_init__(self) -> None:
        # sorted() is stable, so slots sharing a day keep their stored order
        self.slots = sorted(self.slots, key=lambda slot: slot.day)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "RecurringSchedule":
        """Build a schedule from a ``lectures`` document.

        Args:
            doc_id: Firestore document id.
            data: Document fields (``courseName``, ``location``, ``schedule``).

        Raises:
            InvalidScheduleError: If any slot of the document is malformed.
        """
        entries = data.get("schedule") or []
        if not isinstance(entries, list):
            raise InvalidScheduleError(
                f"Lecture {doc_id}: schedule must be a list, got {type(entries).__name__}"
            )
        try:
            slots = [WeeklySlot.from_dict(entry) for entry in entries]
        except InvalidScheduleError as e:
            raise InvalidScheduleError(f"Lecture {doc_id}: {e}") from e

        return cls(
            id=doc_id,
            label=data.get("courseName", ""),
            location=data.get("location", ""),
            slots=slots,
            course_id=data.get("courseId", ""),
            lecturer_id=data.get("lecturerId", ""),
        )


@dataclass(frozen=True)
class Occurrence:
    """One concrete, dated instance of a recurring schedule slot.

    ``uid`` is ``"<schedule_id>-<YYYY-MM-DD>"``. A schedule with two slots on
    the same weekday yields occurrences that share a uid, so key on
    ``(uid, start_at)`` when every slot must be told apart.
    """

    uid: str
    schedule_id: str
    label: str
    location: str
    start_at: datetime
    end_at: datetime


@dataclass(frozen=True)
class StudentIdentifier:
    """Structured student index number, e.g. ``PS/ITC/21/0001``."""

    department: str
    program: str
    year_suffix: str
    serial: str = ""

    @property
    def enrollment_year(self) -> int:
        return 2000 + int(self.year_suffix)

    @classmethod
    def parse(cls, text: Any) -> Optional["StudentIdentifier"]:
        """Parse an index number, returning None when it is not well formed."""
        if not text or not isinstance(text, str):
            return None

        parts = text.split("/")
        if len(parts) < 3:
            return None

        year_suffix = parts[2]
        if not YEAR_SUFFIX_PATTERN.fullmatch(year_suffix):
            return None

        return cls(
            department=parts[0],
            program=parts[1],
            year_suffix=year_suffix,
            serial=parts[3] if len(parts) > 3 else "",
        )

    def __str__(self) -> str:
        parts = [self.department, self.program, self.year_suffix]
        if self.serial:
            parts.append(self.serial)
        return "/".join(parts)
