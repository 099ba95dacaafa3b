from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.core.security import hash_password
from app.models import TimeEntry, User
from timerecording import roster
from timerecording.calendars import HolidayCalendar
from timerecording.classifier import classify_day
from timerecording.models import ABSENT_ORDER_NR

logger = get_logger(__name__)

MOCK_COMMENT = "Auto-seeded mock data"
MOCK_ABSENT_COMMENT = "Auto-seeded absent"
MOCK_ORDERS = ["280003", "290001", "290002", "990005"]
MOCK_START = date(2025, 12, 29)
MOCK_END = date(2026, 3, 1)
MOCK_MAX_HOURS = 8.0
DAILY_LIMIT = 10.0


def seed_users(session: Session) -> int:
    """Create the roster accounts, but only into an empty users table."""
    if session.query(User).count():
        return 0
    accounts = roster.seed_accounts()
    session.add_all(
        User(
            username=account["username"],
            hashed_password=hash_password(account["password"]),
            full_name=account["full_name"],
            role=account["role"],
        )
        for account in accounts
    )
    session.flush()
    logger.info("users_seeded", count=len(accounts))
    return len(accounts)


def delete_mock_data(session: Session) -> int:
    deleted = (
        session.query(TimeEntry)
        .filter(TimeEntry.comment.in_([MOCK_COMMENT, MOCK_ABSENT_COMMENT]))
        .delete(synchronize_session=False)
    )
    session.flush()
    return deleted


def seed_mock_data(
    session: Session,
    calendar: Optional[HolidayCalendar] = None,
    rng: Optional[random.Random] = None,
    start: date = MOCK_START,
    end: date = MOCK_END,
) -> int:
    """Fill weekdays with random bookings for every manager except the admin.

    Previous mock rows are removed first so repeated runs never stack past
    the daily limit.
    """
    rng = rng or random.Random()
    delete_mock_data(session)
    managers = [pm.name for pm in roster.PROJECT_MANAGERS if pm.name != roster.ADMIN_NAME]

    entries = []
    current = start
    while current <= end:
        info = classify_day(current, calendar)
        if current.weekday() < 5 and info.bookable:
            for manager in managers:
                booked = session.query(TimeEntry.duration).filter(
                    TimeEntry.project_manager == manager, TimeEntry.date == current
                )
                remaining = DAILY_LIMIT - sum(float(row.duration) for row in booked)
                if remaining <= 0:
                    continue
                hours = min(MOCK_MAX_HOURS, remaining)
                if rng.random() > 0.2:
                    splits = rng.randint(1, 3)
                    share = int(hours / splits * 10) / 10
                    if share <= 0:
                        continue
                    for _ in range(splits):
                        entries.append(
                            TimeEntry(
                                project_manager=manager,
                                date=current,
                                order_nr=rng.choice(MOCK_ORDERS),
                                duration=share,
                                day_type=info.kind.value,
                                comment=MOCK_COMMENT,
                            )
                        )
                elif rng.random() > 0.8:
                    entries.append(
                        TimeEntry(
                            project_manager=manager,
                            date=current,
                            order_nr=ABSENT_ORDER_NR,
                            duration=hours,
                            day_type=info.kind.value,
                            comment=MOCK_ABSENT_COMMENT,
                        )
                    )
        current += timedelta(days=1)

    session.add_all(entries)
    session.flush()
    logger.info("mock_data_seeded", entries=len(entries), start=start.isoformat(), end=end.isoformat())
    return len(entries)
