"""Timetable module: schedule models, occurrence projection and student levels."""

from .level import calculate_student_level
from .models import (
    InvalidScheduleError,
    Occurrence,
    RecurringSchedule,
    StudentIdentifier,
    Weekday,
    WeeklySlot,
)
from .projector import occurrences_on, project, upcoming

__all__ = [
    "InvalidScheduleError",
    "Occurrence",
    "RecurringSchedule",
    "StudentIdentifier",
    "Weekday",
    "WeeklySlot",
    "calculate_student_level",
    "occurrences_on",
    "project",
    "upcoming",
]
