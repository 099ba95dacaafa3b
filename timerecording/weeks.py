from __future__ import annotations
from datetime import date, timedelta
from typing import List, Tuple

from .errors import ValidationError

# Monday first, matching date.weekday().
WEEKDAY_ABBREVIATIONS = ("Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa.", "So.")

# Longest span a single request may expand into individual days.
MAX_RANGE_DAYS = 366


def week_bounds(anchor: date) -> Tuple[date, date]:
    start = anchor - timedelta(days=anchor.weekday())
    end = start + timedelta(days=6)
    return start, end


def iso_week_number(day: date) -> int:
    return day.isocalendar()[1]


def iso_week_key(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def iso_week_start(year: int, week: int) -> date:
    return date.fromisocalendar(year, week, 1)


def weekday_abbreviation(day: date) -> str:
    return WEEKDAY_ABBREVIATIONS[day.weekday()]


def recent_week_starts(anchor: date, count: int = 8) -> List[date]:
    """Mondays of the ``count`` weeks ending with the week containing ``anchor``, oldest first."""
    last_start, _ = week_bounds(anchor)
    return [last_start - timedelta(weeks=offset) for offset in range(count - 1, -1, -1)]


def day_range(start: date, end: date, limit: int = MAX_RANGE_DAYS) -> List[date]:
    """Every day from ``start`` to ``end`` inclusive; empty when ``end`` precedes ``start``."""
    span = (end - start).days + 1
    if span > limit:
        raise ValidationError(f"Date range cannot span more than {limit} days.")
    return [start + timedelta(days=offset) for offset in range(span)]
