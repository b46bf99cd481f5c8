"""Per-account daily send counters."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import DailySendCounter


def get_counter(session: Session, account_id: str, send_date: date, *, lock: bool = False) -> DailySendCounter | None:
    stmt = select(DailySendCounter).where(
        DailySendCounter.account_id == account_id,
        DailySendCounter.send_date == send_date,
    )
    if lock:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    return session.execute(stmt).scalar_one_or_none()


def sent_count(session: Session, account_id: str, send_date: date) -> int:
    """Return how many organic transfers the account made on ``send_date``."""

    counter = get_counter(session, account_id, send_date)
    return counter.send_count if counter else 0


def can_send(session: Session, account_id: str, send_date: date, *, daily_limit: int) -> bool:
    """True while the day's counter is below ``daily_limit``."""

    return sent_count(session, account_id, send_date) < daily_limit


def record_send(session: Session, account_id: str, send_date: date) -> DailySendCounter:
    """Create the day's counter at 1 or bump the existing one by exactly 1."""

    counter = get_counter(session, account_id, send_date, lock=True)
    if counter is None:
        counter = DailySendCounter(account_id=account_id, send_date=send_date, send_count=1)
        session.add(counter)
    else:
        counter.send_count += 1
    session.flush()
    return counter
