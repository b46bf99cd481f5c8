"""Even department-wide point distribution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Account, AccountRole, Transfer
from ..utils.datetime import local_now
from .errors import InvalidRequest, NotFound

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Team distribution"


@dataclass
class DistributionResult:
    department: str
    total_points: int
    shares: list[tuple[str, int]] = field(default_factory=list)

    @property
    def recipient_count(self) -> int:
        return len(self.shares)


def split_evenly(total_points: int, recipients: int) -> list[int]:
    """Split ``total_points`` into ``recipients`` shares that sum exactly.

    Division truncates toward zero; the first ``abs(total) % recipients``
    shares carry one extra point in the direction of the total's sign.
    """

    if recipients <= 0:
        raise ValueError("recipients must be positive")
    sign = -1 if total_points < 0 else 1
    base, remainder = divmod(abs(total_points), recipients)
    return [sign * (base + 1 if index < remainder else base) for index in range(recipients)]


def eligible_accounts(session: Session, department: str, *, lock: bool = False) -> list[Account]:
    """Active, non-superadmin members of ``department`` ordered by id."""

    stmt = (
        select(Account)
        .where(
            Account.department == department,
            Account.is_active.is_(True),
            Account.role != AccountRole.SUPERADMIN.value,
        )
        .order_by(Account.id.asc())
    )
    if lock:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    return list(session.execute(stmt).scalars().all())


def distribute(
    session: Session,
    *,
    department: str,
    total_points: int,
    reason: Optional[str] = None,
    acting_admin_id: str,
    now: datetime | None = None,
) -> DistributionResult:
    """Credit a department's members with an even split of ``total_points``.

    Negative totals are applied as a bulk deduction using the same split.
    Each recipient gets one ledger entry sent by ``acting_admin_id``; rate
    limits and per-transfer bounds do not apply.
    """

    if isinstance(total_points, bool) or not isinstance(total_points, int):
        raise InvalidRequest("Total points must be a whole number.")

    members = eligible_accounts(session, department, lock=True)
    if not members:
        raise NotFound(f"No active accounts found in department: {department}")

    now = now or local_now()
    reason = reason or DEFAULT_REASON
    result = DistributionResult(department=department, total_points=total_points)

    for account, share in zip(members, split_evenly(total_points, len(members))):
        account.point_balance += share
        account.updated_at = now
        session.add(
            Transfer(
                sender_id=acting_admin_id,
                receiver_id=account.id,
                points=share,
                message=reason,
                created_at=now,
            )
        )
        result.shares.append((account.id, share))

    session.flush()
    logger.info(
        "distributed %s points across %s accounts in %s by %s",
        total_points,
        result.recipient_count,
        department,
        acting_admin_id,
    )
    return result
