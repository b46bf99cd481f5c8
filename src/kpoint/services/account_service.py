"""Account directory operations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.policy import DEFAULT_BALANCE, UNASSIGNED_DEPARTMENT
from ..models import Account, AccountRole, DailySendCounter, Transfer
from ..utils.datetime import local_now, local_today, start_of_month
from .department_service import get_or_create_department
from .errors import Conflict, InvalidRequest, NotFound

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"email", "first_name", "last_name", "department", "role", "is_active"})
REQUIRED_FIELDS = frozenset({"department", "role", "is_active"})
VALID_ROLES = frozenset(role.value for role in AccountRole)


def get_account(session: Session, account_id: str, *, lock: bool = False) -> Account | None:
    stmt = select(Account).where(Account.id == account_id)
    if lock:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    return session.execute(stmt).scalar_one_or_none()


def require_account(session: Session, account_id: str, *, lock: bool = False) -> Account:
    account = get_account(session, account_id, lock=lock)
    if account is None:
        raise NotFound(f"Account {account_id} not found")
    return account


def list_active(session: Session) -> Sequence[Account]:
    stmt = select(Account).where(Account.is_active.is_(True)).order_by(Account.id.asc())
    return session.execute(stmt).scalars().all()


def list_active_with_stats(session: Session, *, now: datetime | None = None) -> list[tuple[Account, int, int]]:
    """Return ``(account, daily_sent_count, monthly_received)`` for active accounts.

    Both figures are snapshots computed at call time: today's send counter and
    the points received since 00:00 on the 1st of the current month.
    """

    now = now or local_now()
    today = local_today(now)

    daily_stmt = select(DailySendCounter.account_id, DailySendCounter.send_count).where(
        DailySendCounter.send_date == today
    )
    daily = {account_id: count for account_id, count in session.execute(daily_stmt).all()}

    monthly_stmt = (
        select(Transfer.receiver_id, func.coalesce(func.sum(Transfer.points), 0))
        .where(Transfer.created_at >= start_of_month(now))
        .group_by(Transfer.receiver_id)
    )
    monthly = {receiver_id: int(total) for receiver_id, total in session.execute(monthly_stmt).all()}

    return [(account, daily.get(account.id, 0), monthly.get(account.id, 0)) for account in list_active(session)]


def _validate_role(role: str) -> str:
    if role not in VALID_ROLES:
        raise InvalidRequest(f"Invalid role: {role}")
    return role


def _ensure_email_available(session: Session, email: Optional[str], account_id: str) -> None:
    if email is None:
        return
    stmt = select(Account.id).where(Account.email == email, Account.id != account_id)
    if session.execute(stmt).first() is not None:
        raise Conflict(f"Email {email} is already in use")


def create_account(
    session: Session,
    *,
    account_id: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    department: Optional[str] = None,
    role: str = AccountRole.USER.value,
    point_balance: int = DEFAULT_BALANCE,
    is_active: bool = True,
) -> Account:
    """Insert a new account; the id must not already exist."""

    if get_account(session, account_id) is not None:
        raise Conflict(f"Account {account_id} already exists")
    if point_balance < 0:
        raise InvalidRequest("Initial balance cannot be negative.")
    _ensure_email_available(session, email, account_id)

    department = department or UNASSIGNED_DEPARTMENT
    get_or_create_department(session, department)

    account = Account(
        id=account_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        department=department,
        role=_validate_role(role),
        point_balance=point_balance,
        is_active=is_active,
    )
    session.add(account)
    session.flush()
    logger.info("account %s created in department %s", account_id, department)
    return account


def update_account(session: Session, account_id: str, updates: Mapping[str, Any]) -> Account:
    """Apply a partial update of directory attributes."""

    unknown = set(updates) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidRequest(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
    cleared = sorted(field for field in REQUIRED_FIELDS & set(updates) if updates[field] is None)
    if cleared:
        raise InvalidRequest(f"Fields cannot be cleared: {', '.join(cleared)}")

    account = require_account(session, account_id, lock=True)
    if "role" in updates:
        _validate_role(updates["role"])
    if "email" in updates:
        _ensure_email_available(session, updates["email"], account_id)
    if updates.get("department"):
        get_or_create_department(session, updates["department"])

    for field, value in updates.items():
        setattr(account, field, value)
    account.updated_at = local_now()
    session.flush()
    return account


def change_role(session: Session, account_id: str, role: str, *, admin_id: str) -> Account:
    account = update_account(session, account_id, {"role": role})
    logger.info("role of %s set to %s by %s", account_id, role, admin_id)
    return account


def set_balance(session: Session, account_id: str, new_balance: int) -> Account:
    """Overwrite the stored balance without producing a ledger entry."""

    account = require_account(session, account_id, lock=True)
    account.point_balance = new_balance
    account.updated_at = local_now()
    session.flush()
    return account
