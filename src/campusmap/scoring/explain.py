"""
Small formatting helpers.

Used by the CLI to print compact summaries of search results.
"""

from __future__ import annotations

from campusmap.core.time import format_time_of_day
from campusmap.domain.models import Resource, SearchResultItem


def hours_summary(resource: Resource) -> str:
    """Render a schedule like `Mon, Tue 09:00-21:00` (or `no posted hours`)."""
    schedule = resource.schedule
    if schedule is None:
        return "no posted hours"
    days = ", ".join(d.value for d in sorted(schedule.days, key=lambda d: d.position))
    return f"{days} {format_time_of_day(schedule.open)}-{format_time_of_day(schedule.close)}"


def one_line_summary(item: SearchResultItem) -> str:
    """Render a compact single-line summary for a search result item."""
    parts = [item.resource.category.value, "open" if item.is_open else "closed"]
    if item.distance_mi is not None:
        parts.append(f"{item.distance_mi} mi")
    parts.append(f"score={item.relevance_score}")
    return " | ".join(parts)
