"""Quarterly balance reset logic."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from ..core.policy import DEFAULT_POLICY, LedgerPolicy
from ..models import Account
from ..utils.datetime import local_now

logger = logging.getLogger(__name__)


def reset_all(
    session: Session,
    *,
    policy: LedgerPolicy = DEFAULT_POLICY,
    current_time: datetime | None = None,
) -> dict[str, int]:
    """Set every active account to the baseline balance in one statement.

    Inactive accounts, daily counters and ledger history are left as they
    are. Returns summary statistics useful for logging/testing.
    """

    now = current_time or local_now()
    stmt = (
        update(Account)
        .where(Account.is_active.is_(True))
        .values(point_balance=policy.baseline_balance, updated_at=now)
    )
    result = session.execute(stmt)

    summary = {
        "accounts_reset": result.rowcount,
        "baseline_balance": policy.baseline_balance,
    }
    logger.info("quarterly reset applied: %s", summary)
    return summary
