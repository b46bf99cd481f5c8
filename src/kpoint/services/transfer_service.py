"""Organic point transfers and ledger history."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, joinedload

from ..core.policy import DEFAULT_POLICY, LedgerPolicy
from ..models import Account, Transfer
from ..utils.datetime import local_now, local_today
from . import daily_limit_service
from .errors import Forbidden, InsufficientBalance, InvalidRequest, NotFound, RateLimited


def _lock_accounts(session: Session, *account_ids: str) -> dict[str, Account]:
    # Rows are locked in id order so two opposing transfers cannot deadlock.
    stmt = (
        select(Account)
        .where(Account.id.in_(sorted(set(account_ids))))
        .order_by(Account.id.asc())
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return {account.id: account for account in session.execute(stmt).scalars().all()}


def _validate_points(points, policy: LedgerPolicy) -> int:
    if isinstance(points, bool) or not isinstance(points, int):
        raise InvalidRequest("Points must be a whole number.")
    if not policy.min_transfer_points <= points <= policy.max_transfer_points:
        raise InvalidRequest(
            f"Points must be between {policy.min_transfer_points} and {policy.max_transfer_points}."
        )
    return points


def send_points(
    session: Session,
    *,
    acting_account_id: str,
    sender_id: str,
    receiver_id: str,
    points: int,
    message: Optional[str] = None,
    now: datetime | None = None,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> Transfer:
    """Move ``points`` from sender to receiver enforcing all transfer rules.

    Checks run in a fixed order and each failure raises before anything is
    written: caller identity, self-transfer, amount range, balance, daily cap,
    then receiver existence. On success the transfer row, both balance
    updates and the sender's daily counter are flushed in the caller's
    transaction; the caller commits or rolls back all four together.
    """

    if acting_account_id != sender_id:
        raise Forbidden("Cannot send points on behalf of another account.")
    if sender_id == receiver_id:
        raise InvalidRequest("Cannot send points to yourself.")
    points = _validate_points(points, policy)

    now = now or local_now()
    today = local_today(now)

    accounts = _lock_accounts(session, sender_id, receiver_id)
    sender = accounts.get(sender_id)
    if sender is None:
        raise NotFound(f"Account {sender_id} not found")
    if sender.point_balance < points:
        raise InsufficientBalance("Insufficient points.")

    if not daily_limit_service.can_send(session, sender_id, today, daily_limit=policy.daily_send_limit):
        raise RateLimited(f"Daily sending limit of {policy.daily_send_limit} reached.")

    receiver = accounts.get(receiver_id)
    if receiver is None:
        raise NotFound(f"Receiver {receiver_id} not found")

    transfer = Transfer(
        sender_id=sender.id,
        receiver_id=receiver.id,
        points=points,
        message=message,
        created_at=now,
    )
    session.add(transfer)

    sender.point_balance -= points
    sender.updated_at = now
    receiver.point_balance += points
    receiver.updated_at = now

    daily_limit_service.record_send(session, sender.id, today)
    session.flush()
    return transfer


def _history_query():
    return (
        select(Transfer)
        .options(
            joinedload(Transfer.sender),
            joinedload(Transfer.receiver),
        )
        .order_by(Transfer.created_at.desc(), Transfer.id.desc())
    )


def list_transfers(session: Session, *, limit: int = 50, offset: int = 0) -> Sequence[Transfer]:
    """Page through the whole ledger, newest first."""

    stmt = _history_query().offset(offset).limit(limit)
    return session.execute(stmt).scalars().all()


def recent_transfers(session: Session, *, limit: int = 10) -> Sequence[Transfer]:
    return list_transfers(session, limit=limit, offset=0)


def account_transfers(session: Session, account_id: str) -> Sequence[Transfer]:
    """Entries where the account is sender or receiver, newest first."""

    stmt = _history_query().where(
        or_(Transfer.sender_id == account_id, Transfer.receiver_id == account_id)
    )
    return session.execute(stmt).scalars().all()
