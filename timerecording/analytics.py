from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from . import roster
from .weeks import iso_week_key, recent_week_starts, week_bounds, weekday_abbreviation

ReportRow = Dict[str, Any]
# (manager, day, hours) as grouped by the store.
DailyTotal = Tuple[str, date, float]

TREND_WEEKS = 8
TOP_LIMIT = 10


def _round(value: float) -> float:
    return round(float(value), 2)


def _percent(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


def parse_order_filter(raw: Optional[Iterable[str] | str]) -> List[str]:
    """Normalise an exclusion filter typed as ``"990005, 290002"`` or given as a list."""
    if not raw:
        return []
    values = [raw] if isinstance(raw, str) else list(raw)
    orders: List[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if part and part not in orders:
                orders.append(part)
    return orders


def compliance(totals: Iterable[Tuple[str, float]], targets: Optional[Dict[str, float]] = None) -> List[ReportRow]:
    rows = []
    for name, hours in totals:
        target = roster.weekly_target(name, targets)
        difference = _round(float(hours) - target)
        rows.append(
            {
                "name": name,
                "short_name": roster.ProjectManager(name).short_name,
                "total_hours": _round(hours),
                "target": target,
                "difference": difference,
                "met": difference >= 0,
            }
        )
    return sorted(rows, key=lambda r: (-r["total_hours"], r["name"]))


def weekly_breakdown(daily: Iterable[DailyTotal]) -> List[ReportRow]:
    hours: Dict[Tuple[str, str], float] = defaultdict(float)
    first_day: Dict[Tuple[str, str], date] = {}
    for name, day, value in daily:
        key = (name, iso_week_key(day))
        hours[key] += float(value)
        if key not in first_day or day < first_day[key]:
            first_day[key] = day
    return [
        {"name": name, "week_key": week, "week_start": first_day[(name, week)], "week_hours": _round(total)}
        for (name, week), total in sorted(hours.items())
    ]


def weekend_hours(daily: Iterable[DailyTotal]) -> List[ReportRow]:
    weekend: Dict[str, float] = defaultdict(float)
    total: Dict[str, float] = defaultdict(float)
    for name, day, value in daily:
        total[name] += float(value)
        if day.weekday() >= 5:
            weekend[name] += float(value)
    rows = [
        {
            "name": name,
            "weekend_hours": _round(weekend[name]),
            "total_hours": _round(total[name]),
            "weekend_share": _percent(weekend[name], total[name]),
        }
        for name in total
    ]
    return sorted(rows, key=lambda r: (-r["weekend_hours"], r["name"]))


def billable_ratio(rows: Iterable[Tuple[str, float, float]]) -> List[ReportRow]:
    result = []
    for name, billable, absent in rows:
        billable, absent = float(billable or 0), float(absent or 0)
        total = billable + absent
        result.append(
            {
                "name": name,
                "billable_hours": _round(billable),
                "absent_hours": _round(absent),
                "total_hours": _round(total),
                "billable_share": _percent(billable, total),
            }
        )
    return sorted(result, key=lambda r: r["name"])


def week_over_week(daily: Iterable[DailyTotal], anchor: date, weeks: int = TREND_WEEKS) -> List[ReportRow]:
    starts = recent_week_starts(anchor, weeks)
    totals: Dict[date, float] = {start: 0.0 for start in starts}
    for _, day, value in daily:
        start, _ = week_bounds(day)
        if start in totals:
            totals[start] += float(value)

    rows: List[ReportRow] = []
    previous: Optional[float] = None
    for start in starts:
        hours = _round(totals[start])
        delta = None if previous is None else _round(hours - previous)
        change = None if not previous else round((hours - previous) / previous * 100, 1)
        rows.append(
            {
                "week_key": iso_week_key(start),
                "week_start": start,
                "hours": hours,
                "delta": delta,
                "change_pct": change,
            }
        )
        previous = hours
    return rows


def pareto(order_totals: Iterable[Tuple[str, float]]) -> List[ReportRow]:
    ordered = sorted(((order, float(hours)) for order, hours in order_totals), key=lambda r: (-r[1], r[0]))
    grand_total = sum(hours for _, hours in ordered)
    running = 0.0
    rows = []
    for order, hours in ordered:
        running += hours
        rows.append({"name": order, "hours": _round(hours), "cumulative_pct": _percent(running, grand_total)})
    return rows


def labour_cost(
    order_manager_hours: Iterable[Tuple[str, str, float]],
    rates: Optional[Dict[str, float]] = None,
    limit: int = TOP_LIMIT,
) -> List[ReportRow]:
    cost: Dict[str, float] = defaultdict(float)
    hours: Dict[str, float] = defaultdict(float)
    for order, name, value in order_manager_hours:
        cost[order] += float(value) * roster.hourly_rate(name, rates)
        hours[order] += float(value)
    rows = [{"name": order, "hours": _round(hours[order]), "cost": _round(cost[order])} for order in cost]
    rows.sort(key=lambda r: (-r["cost"], r["name"]))
    return rows[:limit]


def personal_summary(
    name: str,
    daily: Sequence[Tuple[date, float]],
    today: date,
    weekly_target: Optional[float] = None,
    history_weeks: int = TREND_WEEKS,
) -> ReportRow:
    """Current week per day, recent weekly history and year-to-date adherence for one manager."""
    target = weekly_target if weekly_target is not None else roster.weekly_target(name)
    by_day: Dict[date, float] = defaultdict(float)
    for day, value in daily:
        by_day[day] += float(value)

    week_start, _ = week_bounds(today)
    current_week = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        current_week.append(
            {"date": day, "day": weekday_abbreviation(day), "hours": _round(by_day.get(day, 0.0)), "is_today": day == today}
        )

    by_week: Dict[date, float] = defaultdict(float)
    for day, value in by_day.items():
        by_week[week_bounds(day)[0]] += value

    history_starts = [week_start - timedelta(weeks=n) for n in range(history_weeks, 0, -1)]
    history = [
        {"week_key": iso_week_key(start), "hours": _round(by_week[start]), "target": target}
        for start in history_starts
        if start in by_week
    ]

    ytd_weeks: Dict[date, float] = defaultdict(float)
    for day, value in by_day.items():
        if day.year == today.year and day <= today:
            ytd_weeks[week_bounds(day)[0]] += value
    adherence = _percent(sum(ytd_weeks.values()), len(ytd_weeks) * target) if ytd_weeks else 0.0

    return {
        "name": name,
        "weekly_target": target,
        "daily_target": round(target / 5, 1),
        "current_week": current_week,
        "current_week_hours": _round(sum(d["hours"] for d in current_week)),
        "history": history,
        "ytd_adherence": adherence,
    }
