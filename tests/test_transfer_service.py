"""
tests/test_transfer_service.py — Organic Transfer Rules
========================================================
Service-level tests for transfer_service.send_points() and the history
queries, using an in-memory SQLite database via the shared fixtures.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from kpoint.core.policy import LedgerPolicy
from kpoint.models import DailySendCounter, Transfer
from kpoint.services import daily_limit_service, transfer_service
from kpoint.services.errors import Forbidden, InsufficientBalance, InvalidRequest, NotFound, RateLimited
from tests.conftest import NOW, make_account


def _send(session, sender="alice", receiver="bob", points=3, *, acting=None, now=NOW, **kwargs):
    return transfer_service.send_points(
        session,
        acting_account_id=acting or sender,
        sender_id=sender,
        receiver_id=receiver,
        points=points,
        now=now,
        **kwargs,
    )


def _transfer_count(session) -> int:
    return session.execute(select(func.count(Transfer.id))).scalar_one()


@pytest.fixture
def pair(db_session):
    alice = make_account(db_session, "alice")
    bob = make_account(db_session, "bob", department="Support")
    return alice, bob


class TestConservation:
    def test_balances_move_by_exact_amount(self, db_session, pair):
        """Sender loses and receiver gains exactly the transferred points."""
        alice, bob = pair
        before = alice.point_balance + bob.point_balance

        transfer = _send(db_session, points=2)

        assert alice.point_balance == 18
        assert bob.point_balance == 22
        assert alice.point_balance + bob.point_balance == before
        assert transfer.points == 2
        assert transfer.sender_id == "alice"
        assert transfer.receiver_id == "bob"

    def test_daily_counter_created_then_incremented(self, db_session, pair):
        _send(db_session)
        assert daily_limit_service.sent_count(db_session, "alice", NOW.date()) == 1
        _send(db_session, points=1)
        assert daily_limit_service.sent_count(db_session, "alice", NOW.date()) == 2

        rows = db_session.execute(select(DailySendCounter)).scalars().all()
        assert len(rows) == 1

    def test_message_is_stored(self, db_session, pair):
        transfer = _send(db_session, message="Thanks for the review")
        assert transfer.message == "Thanks for the review"


class TestEndToEndScenario:
    def test_three_sends_then_rate_limited(self, db_session, pair):
        """A=20, B=20: three 3-point sends succeed, the fourth is rate limited."""
        alice, bob = pair

        _send(db_session)
        assert (alice.point_balance, bob.point_balance) == (17, 23)
        assert daily_limit_service.sent_count(db_session, "alice", NOW.date()) == 1
        assert _transfer_count(db_session) == 1

        _send(db_session)
        _send(db_session)
        assert daily_limit_service.sent_count(db_session, "alice", NOW.date()) == 3

        with pytest.raises(RateLimited):
            _send(db_session)

        assert (alice.point_balance, bob.point_balance) == (11, 29)
        assert _transfer_count(db_session) == 3

    def test_cap_resets_on_next_day(self, db_session, pair):
        for _ in range(3):
            _send(db_session, points=1)

        _send(db_session, points=1, now=NOW + timedelta(days=1))
        assert daily_limit_service.sent_count(db_session, "alice", (NOW + timedelta(days=1)).date()) == 1


class TestRuleOrder:
    def test_sending_for_another_account_is_forbidden(self, db_session, pair):
        with pytest.raises(Forbidden):
            _send(db_session, acting="bob")

    def test_forbidden_checked_before_self_transfer(self, db_session, pair):
        with pytest.raises(Forbidden):
            _send(db_session, sender="alice", receiver="alice", acting="bob")

    def test_self_transfer_rejected(self, db_session, pair):
        with pytest.raises(InvalidRequest):
            _send(db_session, sender="alice", receiver="alice")

    def test_self_transfer_rejected_even_when_capped_and_broke(self, db_session, pair):
        alice, _ = pair
        for _ in range(3):
            _send(db_session, points=1)
        alice.point_balance = 0

        with pytest.raises(InvalidRequest):
            _send(db_session, sender="alice", receiver="alice")

    @pytest.mark.parametrize("points", [0, 4, -1, 1.5, "2", True])
    def test_out_of_range_or_non_integer_points(self, db_session, pair, points):
        with pytest.raises(InvalidRequest):
            _send(db_session, points=points)
        assert _transfer_count(db_session) == 0

    @pytest.mark.parametrize("points", [1, 3])
    def test_range_bounds_accepted(self, db_session, pair, points):
        transfer = _send(db_session, points=points)
        assert transfer.points == points

    def test_insufficient_balance(self, db_session):
        make_account(db_session, "alice", balance=2)
        make_account(db_session, "bob")

        with pytest.raises(InsufficientBalance):
            _send(db_session, points=3)

    def test_insufficient_balance_checked_before_rate_limit(self, db_session, pair):
        alice, _ = pair
        for _ in range(3):
            _send(db_session, points=1)
        alice.point_balance = 0

        with pytest.raises(InsufficientBalance):
            _send(db_session, points=1)

    def test_rate_limit_checked_before_receiver_lookup(self, db_session, pair):
        for _ in range(3):
            _send(db_session, points=1)

        with pytest.raises(RateLimited):
            _send(db_session, receiver="nobody", points=1)

    def test_missing_receiver(self, db_session, pair):
        alice, _ = pair
        with pytest.raises(NotFound):
            _send(db_session, receiver="nobody")
        assert alice.point_balance == 20
        assert daily_limit_service.sent_count(db_session, "alice", NOW.date()) == 0

    def test_custom_policy_limits(self, db_session, pair):
        policy = LedgerPolicy(daily_send_limit=1, min_transfer_points=1, max_transfer_points=5)
        _send(db_session, points=5, policy=policy)
        with pytest.raises(RateLimited):
            _send(db_session, points=1, policy=policy)


class TestHistory:
    def test_ledger_is_newest_first_and_paginated(self, db_session, pair):
        make_account(db_session, "carol")
        _send(db_session, points=1, now=NOW)
        _send(db_session, receiver="carol", points=2, now=NOW + timedelta(minutes=1))
        _send(db_session, points=3, now=NOW + timedelta(minutes=2))

        page = transfer_service.list_transfers(db_session, limit=2, offset=0)
        assert [t.points for t in page] == [3, 2]
        assert [t.points for t in transfer_service.list_transfers(db_session, limit=2, offset=2)] == [1]
        assert [t.points for t in transfer_service.recent_transfers(db_session, limit=1)] == [3]

    def test_account_history_includes_sent_and_received(self, db_session, pair):
        make_account(db_session, "carol")
        _send(db_session, sender="alice", receiver="bob", points=1, now=NOW)
        _send(db_session, sender="carol", receiver="alice", points=2, now=NOW + timedelta(minutes=1))
        _send(db_session, sender="carol", receiver="bob", points=3, now=NOW + timedelta(minutes=2))

        history = transfer_service.account_transfers(db_session, "alice")
        assert [t.points for t in history] == [2, 1]

    def test_history_reflects_current_account_names(self, db_session, pair):
        _, bob = pair
        _send(db_session)
        bob.first_name = "Robert"
        db_session.flush()

        transfer = transfer_service.list_transfers(db_session)[0]
        assert transfer.receiver.first_name == "Robert"
        assert transfer.sender.id == "alice"
