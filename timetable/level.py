"""Academic level calculation from student index numbers."""

from datetime import date
from typing import Any, Mapping, Optional

from .models import StudentIdentifier


LEVELS = (100, 200, 300, 400)
MIN_LEVEL = LEVELS[0]
MAX_LEVEL = LEVELS[-1]
ACADEMIC_YEAR_START_MONTH = 8  # August


def academic_year_start(today: date) -> int:
    """Return the calendar year in which the current academic year began.

    May 2024 still belongs to the 2023/2024 academic year, so this returns
    2023; September 2024 returns 2024.
    """
    if today.month >= ACADEMIC_YEAR_START_MONTH:
        return today.year
    return today.year - 1


def calculate_student_level(index_number: Any, today: Optional[date] = None) -> int:
    """Calculate a student's current level from their index number.

    ``PS/ITC/21/0001`` enrolled in the 2021/2022 academic year, so during
    2024/2025 the student is in level 400. Malformed index numbers are not
    an error: they yield level 100.

    Args:
        index_number: Full index number, e.g. ``"PS/ITC/21/0001"``.
        today: Reference date. Defaults to the current date.

    Returns:
        One of 100, 200, 300 or 400.
    """
    identifier = StudentIdentifier.parse(index_number)
    if identifier is None:
        return MIN_LEVEL

    if today is None:
        today = date.today()

    years_completed = academic_year_start(today) - identifier.enrollment_year
    level = 100 + 100 * years_completed
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def program_for(student: Mapping[str, Any]) -> str:
    """Return the student's program, falling back to the index number segment."""
    if student.get("program"):
        return student["program"]
    index_number = student.get("indexNumber")
    if not isinstance(index_number, str):
        return ""
    parts = index_number.split("/")
    return parts[1] if len(parts) > 1 else ""
