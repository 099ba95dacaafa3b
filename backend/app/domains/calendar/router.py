from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.config import settings
from timerecording.calendars import HolidayCalendar, load_calendar, parse_day
from timerecording.classifier import classify_day, classify_range
from timerecording.models import DayClassification
from timerecording.weeks import iso_week_key, week_bounds, weekday_abbreviation

router = APIRouter(prefix="/calendar", tags=["calendar"])


class DayOut(BaseModel):
    date: date
    day: str
    week: str
    kind: str
    label: str
    bookable: bool
    description: str


def get_calendar() -> HolidayCalendar:
    return load_calendar(settings.calendar_dir)


def _day_out(day: date, info: DayClassification) -> DayOut:
    return DayOut(
        date=day,
        day=weekday_abbreviation(day),
        week=iso_week_key(day),
        kind=info.kind.value,
        label=info.label,
        bookable=info.bookable,
        description=info.describe(),
    )


@router.get("/week/{day}", response_model=list[DayOut])
def classify_week(day: str, calendar: HolidayCalendar = Depends(get_calendar)) -> list[DayOut]:
    start, end = week_bounds(parse_day(day))
    return [_day_out(current, info) for current, info in classify_range(start, end, calendar)]


@router.get("/{day}", response_model=DayOut)
def classify(day: str, calendar: HolidayCalendar = Depends(get_calendar)) -> DayOut:
    parsed = parse_day(day)
    return _day_out(parsed, classify_day(parsed, calendar))
