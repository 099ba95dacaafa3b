from __future__ import annotations

from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models import HiddenOrder, TimeEntry
from timerecording.errors import PersistenceError
from timerecording.models import ABSENT_ORDER_NR

SUGGESTION_LIMIT = 5
INTERNAL_ORDER_PREFIX = "99"

logger = get_logger(__name__)


def recent_orders(db: Session, manager: str, limit: int = SUGGESTION_LIMIT) -> List[str]:
    """Most recently booked order numbers of a manager, newest first.

    Absences, internal ``99…`` orders and orders the manager hid are left out.
    """
    hidden = select(HiddenOrder.order_nr).where(HiddenOrder.project_manager == manager)
    query = (
        select(TimeEntry.order_nr)
        .where(
            TimeEntry.project_manager == manager,
            TimeEntry.order_nr != ABSENT_ORDER_NR,
            TimeEntry.order_nr.not_like(f"{INTERNAL_ORDER_PREFIX}%"),
            TimeEntry.order_nr.not_in(hidden),
        )
        .group_by(TimeEntry.order_nr)
        .order_by(func.max(TimeEntry.created_at).desc(), func.max(TimeEntry.id).desc())
        .limit(limit)
    )
    try:
        return list(db.scalars(query))
    except SQLAlchemyError as exc:
        logger.exception("suggestions_query_failed", manager=manager)
        raise PersistenceError("Could not read the order suggestions") from exc


def hide_order(db: Session, manager: str, order_nr: str) -> bool:
    """Hide an order from the suggestions; returns False when it already was hidden."""
    try:
        if db.get(HiddenOrder, (manager, order_nr)) is not None:
            return False
        db.add(HiddenOrder(project_manager=manager, order_nr=order_nr))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("hide_order_failed", manager=manager, order_nr=order_nr)
        raise PersistenceError("Could not hide the order") from exc
    return True
