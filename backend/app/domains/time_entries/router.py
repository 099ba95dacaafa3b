from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.core.observability import get_meter
from app.db.session import get_session
from app.domains.calendar.router import get_calendar
from app.domains.time_entries.service import SqlEntryStore
from timerecording.calendars import HolidayCalendar, parse_day
from timerecording.entries import parse_booking, submit_entry, to_hours
from timerecording.errors import ValidationError
from timerecording.models import DEFAULT_ORDER_NR, EntryDraft
from timerecording.weeks import day_range, week_bounds, weekday_abbreviation

router = APIRouter(prefix="/entries", tags=["entries"])
logger = get_logger(__name__)
entries_created = get_meter().create_counter("time_entries.created", unit="1", description="Stored time entries")


class EntryCreate(BaseModel):
    project_manager: str = Field(..., min_length=1)
    date: str
    end_date: Optional[str] = None
    order_nr: str = DEFAULT_ORDER_NR
    duration: float | str
    comment: Optional[str] = None
    recent_orders: list[str] = []


class EntryOut(BaseModel):
    id: int
    project_manager: str
    date: date
    order_nr: str
    duration: float
    day_type: str
    comment: Optional[str]
    created_at: datetime


class SubmissionOut(BaseModel):
    created: int
    dates: list[date]
    day_types: list[str]
    total_hours: float
    recent_orders: list[str]


class DailySumOut(BaseModel):
    project_manager: str
    date: date
    hours: float
    limit: float
    remaining: float


class DaySumOut(BaseModel):
    date: date
    day: str
    hours: float


def daily_limit() -> Decimal:
    return to_hours(settings.daily_limit_hours)


def _range(start: Optional[str], end: Optional[str]) -> tuple[date, date]:
    if start is None and end is None:
        return week_bounds(date.today())
    first = parse_day(start) if start else parse_day(end)
    last = parse_day(end) if end else first
    if last < first:
        raise ValidationError("End Date must be after or equal to Start Date.")
    return first, last


@router.get("", response_model=list[EntryOut])
def list_entries(
    manager: str = Query(..., min_length=1),
    start: Optional[str] = None,
    end: Optional[str] = None,
    db: Session = Depends(get_session),
) -> list[EntryOut]:
    first, last = _range(start, end)
    entries = SqlEntryStore(db).list_entries(manager, first, last)
    return [EntryOut(**entry.as_row()) for entry in entries]


@router.post("", response_model=SubmissionOut, status_code=201)
def create_entry(
    payload: EntryCreate,
    db: Session = Depends(get_session),
    calendar: HolidayCalendar = Depends(get_calendar),
) -> SubmissionOut:
    draft = EntryDraft(
        manager=payload.project_manager.strip(),
        start=parse_day(payload.date),
        end=parse_day(payload.end_date) if payload.end_date else None,
        booking=parse_booking(payload.order_nr),
        duration=to_hours(payload.duration),
        comment=payload.comment,
    )
    submission = submit_entry(
        SqlEntryStore(db),
        draft,
        calendar=calendar,
        recent_orders=payload.recent_orders,
        daily_limit=daily_limit(),
    )
    entries_created.add(len(submission.entries), {"absence": submission.entries[0].is_absence})
    logger.info(
        "entry_submitted",
        manager=draft.manager,
        order_nr=submission.entries[0].order_number,
        count=len(submission.entries),
        hours=float(submission.total_hours),
    )
    return SubmissionOut(
        created=len(submission.entries),
        dates=[entry.day for entry in submission.entries],
        day_types=[entry.day_type for entry in submission.entries],
        total_hours=float(submission.total_hours),
        recent_orders=list(submission.recent_orders),
    )


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(entry_id: int, db: Session = Depends(get_session)) -> Response:
    if not SqlEntryStore(db).delete_entry(entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
    logger.info("entry_deleted", entry_id=entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/daily-sum", response_model=DailySumOut)
def get_daily_sum(manager: str = Query(..., min_length=1), day: str = Query(...), db: Session = Depends(get_session)) -> DailySumOut:
    parsed = parse_day(day)
    hours = SqlEntryStore(db).daily_sum(manager, parsed)
    limit = daily_limit()
    return DailySumOut(
        project_manager=manager,
        date=parsed,
        hours=float(hours),
        limit=float(limit),
        remaining=float(max(limit - hours, Decimal("0"))),
    )


@router.get("/weekly-sums", response_model=list[DaySumOut])
def get_weekly_sums(
    manager: str = Query(..., min_length=1),
    start: Optional[str] = None,
    end: Optional[str] = None,
    db: Session = Depends(get_session),
) -> list[DaySumOut]:
    first, last = _range(start, end)
    days = day_range(first, last)
    sums = SqlEntryStore(db).daily_sums(manager, first, last)
    return [DaySumOut(date=day, day=weekday_abbreviation(day), hours=sums.get(day, 0.0)) for day in days]
