"""System-wide circulation accounting and dashboard statistics."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.policy import CIRCULATION_TARGET_KEY, PRIVILEGED_DEPARTMENT, UNASSIGNED_DEPARTMENT
from ..models import Account, AccountRole, SystemConfig, Transfer
from ..utils.datetime import local_now, start_of_day
from .errors import InvalidRequest

logger = logging.getLogger(__name__)


def _circulation_setting(session: Session, *, lock: bool = False) -> SystemConfig | None:
    stmt = select(SystemConfig).where(SystemConfig.key == CIRCULATION_TARGET_KEY)
    if lock:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    return session.execute(stmt).scalar_one_or_none()


def actual_circulation(session: Session) -> int:
    """Sum of balances over active accounts, superadmins excluded."""

    stmt = select(func.coalesce(func.sum(Account.point_balance), 0)).where(
        Account.is_active.is_(True),
        Account.role != AccountRole.SUPERADMIN.value,
    )
    return int(session.execute(stmt).scalar_one())


def get_total_circulation(session: Session) -> int:
    """Return the pinned circulation target if one is set, else the live sum."""

    setting = _circulation_setting(session)
    if setting is not None:
        return int(setting.value)
    return actual_circulation(session)


def set_circulation(session: Session, amount: int, *, admin_id: str) -> SystemConfig:
    """Pin total circulation to ``amount``. Balances are left untouched."""

    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidRequest("Circulation amount must be a non-negative integer.")

    now = local_now()
    setting = _circulation_setting(session, lock=True)
    if setting is None:
        setting = SystemConfig(key=CIRCULATION_TARGET_KEY, value=str(amount), updated_by=admin_id, updated_at=now)
        session.add(setting)
    else:
        setting.value = str(amount)
        setting.updated_by = admin_id
        setting.updated_at = now
    session.flush()

    logger.info("total circulation pinned to %s by %s", amount, admin_id)
    return setting


def system_stats(session: Session, *, now: datetime | None = None) -> dict[str, int]:
    """Aggregate the admin dashboard figures."""

    now = now or local_now()

    total_accounts = session.execute(
        select(func.count(Account.id)).where(Account.is_active.is_(True))
    ).scalar_one()

    today_transfers = session.execute(
        select(func.count(Transfer.id)).where(Transfer.created_at >= start_of_day(now))
    ).scalar_one()

    active_departments = session.execute(
        select(func.count(func.distinct(Account.department))).where(
            Account.is_active.is_(True),
            Account.department != "",
            Account.department.not_in([PRIVILEGED_DEPARTMENT, UNASSIGNED_DEPARTMENT]),
        )
    ).scalar_one()

    return {
        "total_users": int(total_accounts),
        "today_transactions": int(today_transfers),
        "active_departments": int(active_departments),
        "total_circulation": get_total_circulation(session),
    }
