from __future__ import annotations
from datetime import date
from typing import List, Optional, Tuple

from .calendars import HolidayCalendar, load_calendar, parse_day
from .models import DayClassification, DayKind
from .weeks import day_range

SATURDAY = 5
SUNDAY = 6


def classify_day(value: str | date, calendar: Optional[HolidayCalendar] = None) -> DayClassification:
    """Classify a day for booking purposes.

    A listed calendar entry wins over the weekday, so a table can mark a
    Monday as a holiday or keep a day explicitly a ``Werktag``. Unlisted days
    are derived from the weekday alone.
    """
    day = parse_day(value)
    calendar = calendar if calendar is not None else load_calendar()

    listed = calendar.lookup(day)
    if listed is not None:
        return DayClassification(kind=listed.kind, label=listed.name)

    weekday = day.weekday()
    if weekday == SUNDAY:
        return DayClassification(kind=DayKind.SONNTAG)
    if weekday == SATURDAY:
        return DayClassification(kind=DayKind.SAMSTAG)
    return DayClassification(kind=DayKind.WERKTAG)


def classify_range(start: date, end: date, calendar: Optional[HolidayCalendar] = None) -> List[Tuple[date, DayClassification]]:
    return [(day, classify_day(day, calendar)) for day in day_range(start, end)]
