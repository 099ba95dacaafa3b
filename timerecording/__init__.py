"""Day classification, entry validation and reporting helpers for PM time recording."""

from .calendars import HolidayCalendar, load_calendar
from .classifier import classify_day
from .entries import EntryStore, parse_booking, plan_entries, submit_entry
from .errors import PersistenceError, TimeRecordingError, ValidationError
from .models import ABSENT_ORDER_NR, DEFAULT_ORDER_NR, DayClassification, DayKind

__version__ = "1.2.0"

__all__ = [
    "ABSENT_ORDER_NR",
    "DEFAULT_ORDER_NR",
    "DayClassification",
    "DayKind",
    "EntryStore",
    "HolidayCalendar",
    "PersistenceError",
    "TimeRecordingError",
    "ValidationError",
    "classify_day",
    "load_calendar",
    "parse_booking",
    "plan_entries",
    "submit_entry",
]
