"""Projection of weekly recurring schedules onto concrete calendar dates."""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from .models import Occurrence, RecurringSchedule, WeeklySlot


logger = logging.getLogger(__name__)


def _find_first_occurrence(slot: WeeklySlot, start_date: date) -> date:
    """Find the first date on or after start_date that falls on the slot's day."""
    days_ahead = int(slot.day) - start_date.weekday()
    if days_ahead < 0:
        days_ahead += 7
    return start_date + timedelta(days=days_ahead)


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def project(
    schedules: Iterable[RecurringSchedule],
    start: datetime,
    horizon_days: int,
    now: Optional[datetime] = None
) -> list[Occurrence]:
    """Expand recurring schedules into dated occurrences.

    Every date between ``start``'s calendar date and ``horizon_days`` days
    later (both inclusive) is considered. Occurrences that do not begin
    strictly after ``now`` are dropped.

    Args:
        schedules: Schedules to expand.
        start: Anchor of the projection window. Its tzinfo (or lack of
            one) is applied to every generated datetime.
        horizon_days: Number of days after start's date to include.
        now: Current instant. Read from the clock when omitted.

    Returns:
        Occurrences sorted by start time.

    Raises:
        ValueError: On a negative horizon or when start and now disagree
            on timezone awareness.
    """
    if horizon_days < 0:
        raise ValueError(f"Horizon must not be negative, got {horizon_days}")

    if now is None:
        now = datetime.now(start.tzinfo)
    if _is_aware(start) != _is_aware(now):
        raise ValueError("start and now must both be timezone-aware or both naive")

    tz = start.tzinfo
    first_date = start.date()
    last_date = first_date + timedelta(days=horizon_days)

    occurrences: list[Occurrence] = []
    for schedule in schedules:
        for slot in schedule.slots:
            current = _find_first_occurrence(slot, first_date)
            while current <= last_date:
                start_at = datetime.combine(current, slot.start_time, tzinfo=tz)
                if start_at > now:
                    occurrences.append(Occurrence(
                        uid=f"{schedule.id}-{current.isoformat()}",
                        schedule_id=schedule.id,
                        label=schedule.label,
                        location=schedule.location,
                        start_at=start_at,
                        end_at=datetime.combine(current, slot.end_time, tzinfo=tz),
                    ))
                current += timedelta(days=7)

    occurrences.sort(key=lambda occurrence: occurrence.start_at)
    logger.debug(
        "Projected %d occurrences between %s and %s", len(occurrences), first_date, last_date
    )
    return occurrences


def upcoming(
    schedules: Iterable[RecurringSchedule],
    now: datetime,
    horizon_days: int = 7
) -> list[Occurrence]:
    """Occurrences from now until horizon_days ahead, for dashboard views."""
    return project(schedules, now, horizon_days, now=now)


def occurrences_on(occurrences: Iterable[Occurrence], day: date) -> list[Occurrence]:
    """Return the occurrences starting on the given calendar date, sorted by time."""
    return sorted(
        (occurrence for occurrence in occurrences if occurrence.start_at.date() == day),
        key=lambda occurrence: occurrence.start_at
    )
