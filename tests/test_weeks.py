from datetime import date

import pytest

from timerecording.errors import ValidationError
from timerecording.weeks import (
    MAX_RANGE_DAYS,
    day_range,
    iso_week_key,
    iso_week_number,
    iso_week_start,
    recent_week_starts,
    week_bounds,
    weekday_abbreviation,
)


def test_week_bounds_monday_to_sunday():
    assert week_bounds(date(2026, 1, 7)) == (date(2026, 1, 5), date(2026, 1, 11))
    assert week_bounds(date(2026, 1, 11)) == (date(2026, 1, 5), date(2026, 1, 11))


def test_iso_week_crosses_year_boundary():
    # 2025-12-29 is the Monday of ISO week 1 of 2026
    assert iso_week_key(date(2025, 12, 29)) == "2026-W01"
    assert iso_week_number(date(2026, 1, 4)) == 1
    assert iso_week_start(2026, 1) == date(2025, 12, 29)


def test_weekday_abbreviations():
    assert weekday_abbreviation(date(2026, 1, 5)) == "Mo."
    assert weekday_abbreviation(date(2026, 1, 11)) == "So."


def test_recent_week_starts_oldest_first():
    starts = recent_week_starts(date(2026, 3, 4), count=3)

    assert starts == [date(2026, 2, 16), date(2026, 2, 23), date(2026, 3, 2)]


def test_day_range_reaches_last_representable_day():
    assert day_range(date(9999, 12, 30), date.max) == [date(9999, 12, 30), date(9999, 12, 31)]


def test_day_range_empty_when_end_precedes_start():
    assert day_range(date(2026, 1, 5), date(2026, 1, 4)) == []


def test_day_range_allows_a_leap_year():
    days = day_range(date(2028, 1, 1), date(2028, 12, 31))

    assert len(days) == MAX_RANGE_DAYS
    assert days[-1] == date(2028, 12, 31)


def test_day_range_rejects_longer_spans():
    with pytest.raises(ValidationError, match="366 days"):
        day_range(date(2026, 1, 1), date(2027, 1, 2))
