from collections import defaultdict
from datetime import date
from decimal import Decimal

import pytest

from timerecording.entries import (
    check_daily_limit,
    parse_booking,
    plan_entries,
    remember_order,
    submit_entry,
    to_hours,
)
from timerecording.errors import PersistenceError, ValidationError
from timerecording.models import Absence, EntryDraft, Worked


class MemoryStore:
    def __init__(self, existing=None, fail=False):
        self.sums = defaultdict(Decimal)
        for (manager, day), hours in (existing or {}).items():
            self.sums[(manager, day)] = Decimal(hours)
        self.batches = []
        self.fail = fail

    def daily_sum(self, manager, day):
        return self.sums[(manager, day)]

    def add_entry(self, entry):
        self.add_entries([entry])

    def add_entries(self, entries):
        if self.fail:
            raise PersistenceError("store offline")
        self.batches.append(list(entries))
        for entry in entries:
            self.sums[(entry.manager, entry.day)] += entry.duration


def draft(start, order="280003", hours="8", end=None, comment=None):
    return EntryDraft(
        manager="Akin Uslucan",
        start=date.fromisoformat(start),
        end=date.fromisoformat(end) if end else None,
        booking=parse_booking(order),
        duration=to_hours(hours),
        comment=comment,
    )


def test_parse_booking_recognises_absent_case_insensitive():
    assert parse_booking(" absent ") == Absence()
    assert parse_booking("ABSENT") == Absence()
    assert parse_booking("280003") == Worked("280003")


def test_to_hours_accepts_comma_and_rounds():
    assert to_hours("7,5") == Decimal("7.50")
    assert to_hours(2.345) == Decimal("2.34")
    assert to_hours(None) == Decimal("0.00")


def test_to_hours_rejects_garbage():
    with pytest.raises(ValidationError):
        to_hours("eight")
    with pytest.raises(ValidationError):
        to_hours("nan")


def test_worked_entry_on_werktag_gets_day_type():
    entries = plan_entries(draft("2026-01-05"))

    assert len(entries) == 1
    assert entries[0].day_type == "Werktag"
    assert entries[0].order_number == "280003"


def test_worked_entry_on_saturday_and_bridge_day_allowed():
    assert plan_entries(draft("2026-01-03"))[0].day_type == "Samstag"
    assert plan_entries(draft("2026-05-15"))[0].day_type == "Brückentag"


def test_short_order_number_rejected():
    with pytest.raises(ValidationError, match="6-8 digits"):
        plan_entries(draft("2026-01-05", order="12345"))


def test_non_digit_order_number_rejected():
    with pytest.raises(ValidationError):
        plan_entries(draft("2026-01-05", order="28000A"))


def test_holiday_rejected_regardless_of_order():
    with pytest.raises(ValidationError, match="Feiertag"):
        plan_entries(draft("2026-01-01", order="280003"))
    with pytest.raises(ValidationError, match="Feiertag"):
        plan_entries(draft("2026-01-01", order="12"))


def test_sunday_rejected():
    with pytest.raises(ValidationError, match="Sunday/Holiday"):
        plan_entries(draft("2026-01-04"))


def test_worked_entry_ignores_end_date():
    entries = plan_entries(draft("2026-01-05", end="2026-01-09"))

    assert [e.day for e in entries] == [date(2026, 1, 5)]


@pytest.mark.parametrize("hours", ["0", "-1", "10.5"])
def test_duration_out_of_bounds(hours):
    with pytest.raises(ValidationError):
        plan_entries(draft("2026-01-05", hours=hours))


def test_missing_manager_rejected():
    bad = EntryDraft(manager=" ", start=date(2026, 1, 5), booking=Worked("280003"), duration=Decimal("1"))
    with pytest.raises(ValidationError, match="Project manager"):
        plan_entries(bad)


def test_single_absence_skips_digit_check():
    entries = plan_entries(draft("2026-01-05", order="Absent"))

    assert entries[0].is_absence
    assert entries[0].order_number == "Absent"


def test_single_absence_on_holiday_rejected():
    with pytest.raises(ValidationError):
        plan_entries(draft("2026-12-25", order="Absent"))


def test_absence_range_over_christmas_emits_only_24th():
    entries = plan_entries(draft("2026-12-23", order="Absent", end="2026-12-30", comment="Urlaub"))

    assert [e.day for e in entries] == [date(2026, 12, 24)]
    assert entries[0].day_type == "Werktag"
    assert entries[0].comment == "Urlaub"


def test_absence_range_includes_saturdays():
    entries = plan_entries(draft("2026-01-09", order="Absent", end="2026-01-12"))

    assert [(e.day.isoformat(), e.day_type) for e in entries] == [
        ("2026-01-09", "Werktag"),
        ("2026-01-10", "Samstag"),
        ("2026-01-12", "Werktag"),
    ]


def test_absence_range_ending_on_last_representable_day():
    entries = plan_entries(draft("9999-12-30", order="Absent", end="9999-12-31"))

    assert [e.day for e in entries] == [date(9999, 12, 30), date(9999, 12, 31)]


def test_absence_range_longer_than_a_year_rejected():
    with pytest.raises(ValidationError, match="366 days"):
        plan_entries(draft("2026-01-05", order="Absent", end="9026-01-01"))

def test_absence_range_end_before_start():
    with pytest.raises(ValidationError, match="End Date"):
        plan_entries(draft("2026-01-09", order="Absent", end="2026-01-05"))


def test_absence_range_without_workdays():
    with pytest.raises(ValidationError, match="No valid workdays"):
        plan_entries(draft("2026-12-25", order="Absent", end="2026-12-27"))


def test_daily_limit_rejects_seven_plus_four():
    store = MemoryStore({("Akin Uslucan", date(2026, 1, 5)): "7"})

    with pytest.raises(ValidationError, match="Daily limit exceeded"):
        submit_entry(store, draft("2026-01-05", hours="4"))
    assert store.batches == []


def test_daily_limit_accepts_seven_plus_three():
    store = MemoryStore({("Akin Uslucan", date(2026, 1, 5)): "7"})

    submission = submit_entry(store, draft("2026-01-05", hours="3"))

    assert submission.total_hours == Decimal("3.00")
    assert store.daily_sum("Akin Uslucan", date(2026, 1, 5)) == Decimal("10.00")


def test_daily_limit_exact_with_fractions():
    store = MemoryStore({("Akin Uslucan", date(2026, 1, 5)): "7.3"})

    submit_entry(store, draft("2026-01-05", hours="2.7"))


def test_daily_limit_checked_for_every_day_of_absence_range():
    store = MemoryStore({("Akin Uslucan", date(2026, 1, 7)): "6"})

    with pytest.raises(ValidationError, match="2026-01-07"):
        submit_entry(store, draft("2026-01-05", order="Absent", hours="8", end="2026-01-09"))
    assert store.batches == []


def test_absence_range_is_inserted_as_one_batch():
    store = MemoryStore()

    submission = submit_entry(store, draft("2026-01-05", order="Absent", hours="8", end="2026-01-09"))

    assert len(store.batches) == 1
    assert len(store.batches[0]) == 5
    assert submission.total_hours == Decimal("40.00")
    assert submission.recent_orders == ()


def test_store_failure_propagates():
    with pytest.raises(PersistenceError):
        submit_entry(MemoryStore(fail=True), draft("2026-01-05"))


def test_worked_submission_updates_recent_orders():
    submission = submit_entry(MemoryStore(), draft("2026-01-05"), recent_orders=["290001", "280003"])

    assert submission.recent_orders == ("280003", "290001")


def test_remember_order_caps_window():
    recent = tuple(str(100000 + i) for i in range(50))

    updated = remember_order(recent, "999999")

    assert len(updated) == 50
    assert updated[0] == "999999"
    assert "100049" not in updated


def test_check_daily_limit_without_entries_is_noop():
    check_daily_limit(MemoryStore(), [])
