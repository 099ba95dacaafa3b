from __future__ import annotations

import json
from datetime import date
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .errors import ValidationError
from .models import CALENDAR_KINDS, CalendarEntry, DayKind

DEFAULT_CALENDAR_DIR = Path(__file__).resolve().parent / "data" / "calendars"


class CalendarTable:
    """Holidays, bridge days and explicit working days of one year."""

    def __init__(self, year: int, entries: Iterable[CalendarEntry]):
        self.year = year
        by_day: Dict[date, CalendarEntry] = {}
        for entry in entries:
            if entry.day.year != year:
                raise ValueError(f"{entry.day.isoformat()} does not belong to calendar {year}")
            by_day[entry.day] = entry
        self._entries: Mapping[date, CalendarEntry] = MappingProxyType(by_day)

    def get(self, day: date) -> Optional[CalendarEntry]:
        return self._entries.get(day)

    def __contains__(self, day: object) -> bool:
        return day in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> List[CalendarEntry]:
        return sorted(self._entries.values(), key=lambda e: e.day)


class HolidayCalendar:
    """Union of yearly tables; years without a table fall back to weekday rules."""

    def __init__(self, tables: Iterable[CalendarTable] = ()):
        self._tables: Mapping[int, CalendarTable] = MappingProxyType({t.year: t for t in tables})

    @property
    def years(self) -> List[int]:
        return sorted(self._tables)

    def lookup(self, day: date) -> Optional[CalendarEntry]:
        table = self._tables.get(day.year)
        if table is None:
            return None
        return table.get(day)

    def with_table(self, table: CalendarTable) -> "HolidayCalendar":
        tables = dict(self._tables)
        tables[table.year] = table
        return HolidayCalendar(tables.values())


class CalendarRepository:
    def __init__(self, base_path: Path):
        self.base_path = base_path

    def available_years(self) -> List[int]:
        return sorted(int(p.stem) for p in self.base_path.glob("*.json") if p.stem.isdigit())

    def load(self, year: int) -> CalendarTable:
        file_path = self.base_path / f"{year}.json"
        if not file_path.exists():
            raise FileNotFoundError(f"Calendar {year} not found at {file_path}")
        with file_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        return parse_table(data)

    def load_all(self) -> HolidayCalendar:
        return HolidayCalendar(self.load(year) for year in self.available_years())


def parse_table(data: dict) -> CalendarTable:
    year = int(data["year"])
    entries = []
    for raw_day, details in data.get("days", {}).items():
        kind = DayKind(details["type"])
        if kind not in CALENDAR_KINDS:
            raise ValueError(f"{raw_day}: {kind.value} cannot be listed in a calendar table")
        entries.append(CalendarEntry(day=date.fromisoformat(raw_day), kind=kind, name=details.get("name", "")))
    return CalendarTable(year, entries)


@lru_cache
def load_calendar(base_path: Optional[Path] = None) -> HolidayCalendar:
    return CalendarRepository(base_path or DEFAULT_CALENDAR_DIR).load_all()


def parse_day(value: str | date) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date '{value}', expected yyyy-MM-dd.") from None
