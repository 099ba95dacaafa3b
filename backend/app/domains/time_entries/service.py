from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models import TimeEntry
from timerecording.entries import to_hours
from timerecording.errors import PersistenceError
from timerecording.models import NewEntry

logger = get_logger(__name__)


def _to_model(entry: NewEntry) -> TimeEntry:
    return TimeEntry(
        project_manager=entry.manager,
        date=entry.day,
        order_nr=entry.order_number,
        duration=float(entry.duration),
        day_type=entry.day_type,
        comment=entry.comment,
    )


class SqlEntryStore:
    """Entry store backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def daily_sum(self, manager: str, day: date) -> Decimal:
        try:
            total = self.db.scalar(
                select(func.coalesce(func.sum(TimeEntry.duration), 0)).where(
                    TimeEntry.project_manager == manager, TimeEntry.date == day
                )
            )
        except SQLAlchemyError as exc:
            logger.exception("daily_sum_failed", manager=manager, day=day.isoformat())
            raise PersistenceError("Could not read the daily sum") from exc
        return to_hours(total)

    def add_entry(self, entry: NewEntry) -> None:
        self.add_entries([entry])

    def add_entries(self, entries: Sequence[NewEntry]) -> None:
        try:
            self.db.add_all([_to_model(entry) for entry in entries])
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("entries_insert_failed", count=len(entries))
            raise PersistenceError("Could not save the entries") from exc

    def list_entries(self, manager: str, start: date, end: date) -> List[TimeEntry]:
        try:
            return (
                self.db.query(TimeEntry)
                .filter(TimeEntry.project_manager == manager, TimeEntry.date.between(start, end))
                .order_by(TimeEntry.date.desc(), TimeEntry.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("entries_list_failed", manager=manager)
            raise PersistenceError("Could not read the entries") from exc

    def daily_sums(self, manager: str, start: date, end: date) -> dict[date, float]:
        try:
            rows = (
                self.db.query(TimeEntry.date, func.sum(TimeEntry.duration))
                .filter(TimeEntry.project_manager == manager, TimeEntry.date.between(start, end))
                .group_by(TimeEntry.date)
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("daily_sums_failed", manager=manager)
            raise PersistenceError("Could not read the daily sums") from exc
        return {day: round(float(total), 2) for day, total in rows}

    def delete_entry(self, entry_id: int) -> bool:
        try:
            entry = self.db.get(TimeEntry, entry_id)
            if entry is None:
                return False
            self.db.delete(entry)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("entry_delete_failed", entry_id=entry_id)
            raise PersistenceError("Could not delete the entry") from exc
        return True


def export_rows(db: Session, manager: str | None = None) -> List[dict]:
    query = db.query(TimeEntry)
    if manager is not None:
        query = query.filter(TimeEntry.project_manager == manager).order_by(TimeEntry.date.desc(), TimeEntry.id.desc())
    else:
        query = query.order_by(TimeEntry.date.desc(), TimeEntry.project_manager.asc(), TimeEntry.id.desc())
    try:
        return [entry.as_row() for entry in query.all()]
    except SQLAlchemyError as exc:
        logger.exception("export_query_failed", manager=manager or "GLOBAL")
        raise PersistenceError("Could not read the entries for export") from exc
