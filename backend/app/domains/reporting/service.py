from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.logging import get_logger
from app.models import TimeEntry
from timerecording import analytics
from timerecording.errors import PersistenceError, ValidationError
from timerecording.models import ABSENT_ORDER_NR
from timerecording.weeks import recent_week_starts, week_bounds

ALL_MANAGERS = "ALL"

logger = get_logger(__name__)


@dataclass
class ReportParams:
    start: date
    end: date
    exclude: List[str] = field(default_factory=list)
    manager: Optional[str] = None
    order: Optional[str] = None
    top: int = analytics.TOP_LIMIT

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValidationError("End Date must be after or equal to Start Date.")


def _filtered(query: Query, start: date, end: date, exclude: Sequence[str]) -> Query:
    query = query.filter(TimeEntry.date.between(start, end))
    if exclude:
        query = query.filter(TimeEntry.order_nr.not_in(list(exclude)))
    return query


def _hours():
    return func.sum(TimeEntry.duration)


def manager_totals(db: Session, params: ReportParams) -> List[Tuple[str, float]]:
    query = _filtered(db.query(TimeEntry.project_manager, _hours()), params.start, params.end, params.exclude)
    return [(name, float(total)) for name, total in query.group_by(TimeEntry.project_manager).all()]


def daily_totals(db: Session, start: date, end: date, exclude: Sequence[str] = ()) -> List[analytics.DailyTotal]:
    query = _filtered(db.query(TimeEntry.project_manager, TimeEntry.date, _hours()), start, end, exclude)
    rows = query.group_by(TimeEntry.project_manager, TimeEntry.date).order_by(TimeEntry.date).all()
    return [(name, day, float(total)) for name, day, total in rows]


def order_totals(db: Session, params: ReportParams, manager: Optional[str] = None) -> List[Tuple[str, float]]:
    query = _filtered(db.query(TimeEntry.order_nr, _hours()), params.start, params.end, params.exclude)
    query = query.filter(TimeEntry.order_nr != ABSENT_ORDER_NR)
    if manager and manager != ALL_MANAGERS:
        query = query.filter(TimeEntry.project_manager == manager)
    rows = query.group_by(TimeEntry.order_nr).order_by(_hours().desc(), TimeEntry.order_nr).all()
    return [(order, float(total)) for order, total in rows]


def _rows(pairs: Sequence[Tuple[str, float]], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    rows = [{"name": name, "hours": round(hours, 2)} for name, hours in pairs]
    return rows[:limit] if limit else rows


def compliance_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    return analytics.compliance(manager_totals(db, params))


def weekly_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    return analytics.weekly_breakdown(daily_totals(db, params.start, params.end, params.exclude))


def top_orders_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    return _rows(order_totals(db, params), params.top)


def distribution_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    return _rows(order_totals(db, params, manager=params.manager or ALL_MANAGERS))


def billable_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    is_absent = TimeEntry.order_nr == ABSENT_ORDER_NR
    query = _filtered(
        db.query(
            TimeEntry.project_manager,
            func.sum(case((is_absent, 0), else_=TimeEntry.duration)),
            func.sum(case((is_absent, TimeEntry.duration), else_=0)),
        ),
        params.start,
        params.end,
        params.exclude,
    )
    return analytics.billable_ratio(query.group_by(TimeEntry.project_manager).all())


def weekend_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    return analytics.weekend_hours(daily_totals(db, params.start, params.end, params.exclude))


def order_breakdown_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    if not params.order:
        raise ValidationError("An order number is required for the order breakdown.")
    query = _filtered(db.query(TimeEntry.project_manager, _hours()), params.start, params.end, params.exclude)
    rows = (
        query.filter(TimeEntry.order_nr == params.order)
        .group_by(TimeEntry.project_manager)
        .order_by(_hours().desc(), TimeEntry.project_manager)
        .all()
    )
    return _rows([(name, float(total)) for name, total in rows])


def trend_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    # Window is anchored on the range end, not the range start.
    first_week = recent_week_starts(params.end, analytics.TREND_WEEKS)[0]
    return analytics.week_over_week(daily_totals(db, first_week, params.end, params.exclude), params.end)


def labour_cost_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    query = _filtered(
        db.query(TimeEntry.order_nr, TimeEntry.project_manager, _hours()), params.start, params.end, params.exclude
    )
    rows = (
        query.filter(TimeEntry.order_nr != ABSENT_ORDER_NR)
        .group_by(TimeEntry.order_nr, TimeEntry.project_manager)
        .all()
    )
    return analytics.labour_cost([(order, name, float(total)) for order, name, total in rows], limit=params.top)


def pareto_report(db: Session, params: ReportParams) -> List[Dict[str, Any]]:
    return analytics.pareto(order_totals(db, params))


def personal_report(db: Session, params: ReportParams) -> Dict[str, Any]:
    if not params.manager or params.manager == ALL_MANAGERS:
        raise ValidationError("A project manager is required for the personal summary.")
    today = params.end
    week_start, week_end = week_bounds(today)
    first = min(date(today.year, 1, 1), week_start - timedelta(weeks=analytics.TREND_WEEKS))
    rows = (
        db.query(TimeEntry.date, _hours())
        .filter(TimeEntry.project_manager == params.manager, TimeEntry.date.between(first, week_end))
        .group_by(TimeEntry.date)
        .all()
    )
    return analytics.personal_summary(params.manager, [(day, float(total)) for day, total in rows], today)


REPORTS: Dict[str, Callable[[Session, ReportParams], Any]] = {
    "compliance": compliance_report,
    "weekly": weekly_report,
    "top-orders": top_orders_report,
    "distribution": distribution_report,
    "billable": billable_report,
    "weekend": weekend_report,
    "order-breakdown": order_breakdown_report,
    "trend": trend_report,
    "labour-cost": labour_cost_report,
    "pareto": pareto_report,
    "personal": personal_report,
}


def run_report(db: Session, name: str, params: ReportParams) -> Any:
    try:
        builder = REPORTS[name]
    except KeyError:
        raise LookupError(f"Unknown report '{name}'") from None
    try:
        return builder(db, params)
    except SQLAlchemyError as exc:
        logger.exception("report_query_failed", report=name)
        raise PersistenceError(f"Could not build the {name} report") from exc
