from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.db.session import get_session
from app.domains.reporting.service import REPORTS, ReportParams, run_report
from timerecording.analytics import TOP_LIMIT, parse_order_filter
from timerecording.calendars import parse_day
from timerecording.weeks import week_bounds

router = APIRouter(prefix="/reports", tags=["reporting"])
logger = get_logger(__name__)


def report_params(
    start: Optional[str] = None,
    end: Optional[str] = None,
    exclude: list[str] = Query(default=[]),
    manager: Optional[str] = None,
    order: Optional[str] = None,
    top: int = Query(default=TOP_LIMIT, ge=1, le=100),
) -> ReportParams:
    week_start, week_end = week_bounds(date.today())
    return ReportParams(
        start=parse_day(start) if start else week_start,
        end=parse_day(end) if end else week_end,
        exclude=parse_order_filter(exclude),
        manager=manager,
        order=order,
        top=top,
    )


@router.get("")
def list_reports() -> list[str]:
    return list(REPORTS)


@router.get("/{name}")
def get_report(name: str, params: ReportParams = Depends(report_params), db: Session = Depends(get_session)) -> Any:
    if name not in REPORTS:
        raise HTTPException(status_code=404, detail=f"Unknown report '{name}'")
    logger.info(
        "report_requested",
        report=name,
        start=params.start.isoformat(),
        end=params.end.isoformat(),
        excluded=len(params.exclude),
    )
    return run_report(db, name, params)
