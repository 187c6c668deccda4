# src/campusmap/features/availability.py
"""
Availability feature (resource-level).

Answers "is this resource open at this instant?" from its weekly schedule.

Important scope note:
- The instant is supplied by the caller; nothing here reads the clock.
- Both window bounds are inclusive: a 08:00-22:00 schedule is open at 22:00 exactly.
- A resource without a schedule is always closed.
"""

from __future__ import annotations

from campusmap.domain.models import Instant, Resource, Schedule


def schedule_covers(schedule: Schedule, instant: Instant) -> bool:
    if instant.weekday not in schedule.days:
        return False
    return schedule.open <= instant.minutes_of_day <= schedule.close


def is_open(resource: Resource, instant: Instant) -> bool:
    """Return True if the resource's schedule covers `instant`."""
    if resource.schedule is None:
        return False
    return schedule_covers(resource.schedule, instant)
