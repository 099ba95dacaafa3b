from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


ABSENT_ORDER_NR = "Absent"
DEFAULT_ORDER_NR = "99000501"


class DayKind(str, Enum):
    WERKTAG = "Werktag"
    SAMSTAG = "Samstag"
    SONNTAG = "Sonntag"
    FEIERTAG = "Feiertag"
    BRUECKENTAG = "Brückentag"


# Kinds a calendar table may list explicitly; weekends are always derived.
CALENDAR_KINDS = frozenset({DayKind.WERKTAG, DayKind.FEIERTAG, DayKind.BRUECKENTAG})

# Kinds on which a single entry may be booked.
BOOKABLE_KINDS = frozenset({DayKind.WERKTAG, DayKind.SAMSTAG, DayKind.BRUECKENTAG})

# Kinds an absence range expands onto; bridge days are left to the user.
ABSENCE_RANGE_KINDS = frozenset({DayKind.WERKTAG, DayKind.SAMSTAG})


@dataclass(frozen=True)
class CalendarEntry:
    day: date
    kind: DayKind
    name: str = ""


@dataclass(frozen=True)
class DayClassification:
    kind: DayKind
    label: str = ""

    @property
    def bookable(self) -> bool:
        return self.kind in BOOKABLE_KINDS

    def describe(self) -> str:
        if self.label:
            return f"{self.kind.value} - {self.label}"
        return self.kind.value


@dataclass(frozen=True)
class Worked:
    order_number: str


@dataclass(frozen=True)
class Absence:
    pass


Booking = Union[Worked, Absence]


@dataclass(frozen=True)
class EntryDraft:
    """A submission as typed into the entry form, before any validation."""

    manager: str
    start: date
    booking: Booking
    duration: Decimal
    end: Optional[date] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class NewEntry:
    manager: str
    day: date
    booking: Booking
    duration: Decimal
    day_type: str
    comment: Optional[str] = None

    @property
    def order_number(self) -> str:
        if isinstance(self.booking, Absence):
            return ABSENT_ORDER_NR
        return self.booking.order_number

    @property
    def is_absence(self) -> bool:
        return isinstance(self.booking, Absence)


@dataclass(frozen=True)
class Submission:
    entries: tuple[NewEntry, ...]
    recent_orders: tuple[str, ...] = ()

    @property
    def total_hours(self) -> Decimal:
        return sum((entry.duration for entry in self.entries), Decimal("0"))
