from __future__ import annotations
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Protocol, Sequence

from .calendars import HolidayCalendar, load_calendar
from .classifier import classify_day
from .errors import ValidationError
from .models import (
    ABSENCE_RANGE_KINDS,
    ABSENT_ORDER_NR,
    Absence,
    Booking,
    EntryDraft,
    NewEntry,
    Submission,
    Worked,
)
from .weeks import day_range

DAILY_LIMIT_HOURS = Decimal("10")
RECENT_ORDER_WINDOW = 50
ORDER_NUMBER_PATTERN = re.compile(r"^\d{6,8}$")
HUNDREDTH = Decimal("0.01")


class EntryStore(Protocol):
    def daily_sum(self, manager: str, day: date) -> Decimal:
        ...

    def add_entry(self, entry: NewEntry) -> None:
        ...

    def add_entries(self, entries: Sequence[NewEntry]) -> None:
        """Insert all entries in one transaction, or none of them."""
        ...


def to_hours(value: object) -> Decimal:
    if value is None:
        return Decimal("0.00")
    try:
        hours = Decimal(str(value).strip().replace(",", "."))
        if not hours.is_finite():
            raise InvalidOperation
        return hours.quantize(HUNDREDTH)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid duration '{value}'.") from None


def parse_booking(raw_order: str) -> Booking:
    order = (raw_order or "").strip()
    if order.lower() == ABSENT_ORDER_NR.lower():
        return Absence()
    return Worked(order_number=order)


def _entry(draft: EntryDraft, day: date, day_type: str) -> NewEntry:
    return NewEntry(
        manager=draft.manager,
        day=day,
        booking=draft.booking,
        duration=draft.duration,
        day_type=day_type,
        comment=draft.comment or None,
    )


def _expand_absence(draft: EntryDraft, end: date, calendar: HolidayCalendar) -> List[NewEntry]:
    if end < draft.start:
        raise ValidationError("End Date must be after or equal to Start Date.")

    entries = []
    for day in day_range(draft.start, end):
        info = classify_day(day, calendar)
        if info.kind in ABSENCE_RANGE_KINDS:
            entries.append(_entry(draft, day, info.kind.value))

    if not entries:
        raise ValidationError("No valid workdays found in the selected range.")
    return entries


def plan_entries(
    draft: EntryDraft,
    calendar: Optional[HolidayCalendar] = None,
    daily_limit: Decimal = DAILY_LIMIT_HOURS,
) -> List[NewEntry]:
    """Turn a draft into the entries it would create, without touching the store."""
    calendar = calendar if calendar is not None else load_calendar()

    if not draft.manager or not draft.manager.strip():
        raise ValidationError("Project manager is required.")
    if draft.duration <= 0:
        raise ValidationError("Duration must be greater than 0 hours.")
    if draft.duration > daily_limit:
        raise ValidationError(f"Duration cannot exceed {daily_limit}h per day.")

    if isinstance(draft.booking, Absence) and draft.end is not None and draft.end != draft.start:
        return _expand_absence(draft, draft.end, calendar)

    info = classify_day(draft.start, calendar)
    if not info.bookable:
        raise ValidationError(f"Cannot add entries on {info.kind.value} ({info.label or 'Sunday/Holiday'}).")

    if isinstance(draft.booking, Worked) and not ORDER_NUMBER_PATTERN.match(draft.booking.order_number):
        raise ValidationError("Order Number must be 6-8 digits.")

    return [_entry(draft, draft.start, info.kind.value)]


def check_daily_limit(store: EntryStore, entries: Iterable[NewEntry], daily_limit: Decimal = DAILY_LIMIT_HOURS) -> None:
    for entry in entries:
        current = to_hours(store.daily_sum(entry.manager, entry.day))
        total = current + entry.duration
        if total > daily_limit:
            raise ValidationError(
                f"Daily limit exceeded on {entry.day.isoformat()}! Current: {current}h. "
                f"Adding {entry.duration}h would make it {total}h (Max {daily_limit}h)."
            )


def remember_order(recent: Sequence[str], order_number: str, window: int = RECENT_ORDER_WINDOW) -> tuple[str, ...]:
    ordered = [order_number] + [o for o in recent if o != order_number]
    return tuple(ordered[:window])


def submit_entry(
    store: EntryStore,
    draft: EntryDraft,
    calendar: Optional[HolidayCalendar] = None,
    recent_orders: Sequence[str] = (),
    daily_limit: Decimal = DAILY_LIMIT_HOURS,
) -> Submission:
    entries = plan_entries(draft, calendar, daily_limit)
    check_daily_limit(store, entries, daily_limit)

    if len(entries) == 1:
        store.add_entry(entries[0])
    else:
        store.add_entries(entries)

    recent = tuple(recent_orders)
    if isinstance(draft.booking, Worked):
        recent = remember_order(recent, draft.booking.order_number)
    return Submission(entries=tuple(entries), recent_orders=recent)
