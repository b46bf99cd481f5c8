"""Superadmin override operations that bypass normal transfer rules."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.policy import PRIVILEGED_DEPARTMENT
from ..models import Account, DepartmentAdjustment
from ..utils.datetime import local_now
from . import account_service
from .errors import InvalidRequest

logger = logging.getLogger(__name__)


def set_balance_direct(session: Session, account_id: str, balance: int, *, admin_id: str) -> Account:
    """Set a balance to any integer, negative included. No ledger entry is written."""

    if isinstance(balance, bool) or not isinstance(balance, int):
        raise InvalidRequest("Balance must be a whole number.")

    account = account_service.require_account(session, account_id, lock=True)
    previous = account.point_balance
    account.point_balance = balance
    account.updated_at = local_now()
    session.flush()

    logger.info("balance of %s overridden %s -> %s by superadmin %s", account_id, previous, balance, admin_id)
    return account


def rename_account(session: Session, account_id: str, first_name: str, last_name: str, *, admin_id: str) -> Account:
    if not first_name or not last_name:
        raise InvalidRequest("First name and last name are required.")

    account = account_service.update_account(
        session,
        account_id,
        {"first_name": first_name, "last_name": last_name},
    )
    logger.info("account %s renamed to %s %s by superadmin %s", account_id, first_name, last_name, admin_id)
    return account


def adjust_department_record(
    session: Session,
    *,
    department: str,
    amount: int,
    reason: Optional[str] = None,
    admin_id: str,
) -> DepartmentAdjustment:
    """Record an adjustment against a department's notional total.

    This is an audit note only; no account balance changes.
    """

    if not department or department == PRIVILEGED_DEPARTMENT:
        raise InvalidRequest("Invalid department.")
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidRequest("Adjustment amount must be a whole number.")

    adjustment = DepartmentAdjustment(
        department=department,
        adjustment_amount=amount,
        reason=reason or "",
        adjusted_by=admin_id,
        created_at=local_now(),
    )
    session.add(adjustment)
    session.flush()

    logger.info("department %s adjustment of %s recorded by superadmin %s", department, amount, admin_id)
    return adjustment


def list_department_adjustments(session: Session, department: Optional[str] = None) -> Sequence[DepartmentAdjustment]:
    stmt = select(DepartmentAdjustment).order_by(
        DepartmentAdjustment.created_at.desc(),
        DepartmentAdjustment.id.desc(),
    )
    if department:
        stmt = stmt.where(DepartmentAdjustment.department == department)
    return session.execute(stmt).scalars().all()
