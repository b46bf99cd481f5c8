"""
tests/test_circulation_service.py — Circulation, Stats & Rankings
==================================================================
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from kpoint.core.policy import PRIVILEGED_DEPARTMENT, UNASSIGNED_DEPARTMENT
from kpoint.services import circulation_service, department_service, transfer_service
from kpoint.services.errors import InvalidRequest
from tests.conftest import NOW, make_account


@pytest.fixture
def root(db_session):
    return make_account(db_session, "root", role="superadmin", department=PRIVILEGED_DEPARTMENT, balance=999)


class TestTotalCirculation:
    def test_live_sum_excludes_superadmin_and_inactive(self, db_session, root):
        make_account(db_session, "a", balance=20)
        make_account(db_session, "b", balance=13)
        make_account(db_session, "c", balance=50, is_active=False)

        assert circulation_service.get_total_circulation(db_session) == 33

    def test_pinned_value_takes_precedence(self, db_session, root):
        make_account(db_session, "a", balance=20)
        assert circulation_service.get_total_circulation(db_session) == 20

        circulation_service.set_circulation(db_session, 500, admin_id="root")

        assert circulation_service.get_total_circulation(db_session) == 500
        assert circulation_service.actual_circulation(db_session) == 20

    def test_pin_is_upserted(self, db_session, root):
        circulation_service.set_circulation(db_session, 500, admin_id="root")
        setting = circulation_service.set_circulation(db_session, 0, admin_id="root")
        assert setting.value == "0"
        assert circulation_service.get_total_circulation(db_session) == 0

    @pytest.mark.parametrize("amount", [-1, 2.5, True])
    def test_invalid_amount_rejected(self, db_session, root, amount):
        with pytest.raises(InvalidRequest):
            circulation_service.set_circulation(db_session, amount, admin_id="root")


class TestSystemStats:
    def test_stats(self, db_session, root):
        make_account(db_session, "a", department="Sales")
        make_account(db_session, "b", department="Support")
        make_account(db_session, "c", department=UNASSIGNED_DEPARTMENT)
        make_account(db_session, "d", department="Legal", is_active=False)
        transfer_service.send_points(
            db_session, acting_account_id="a", sender_id="a", receiver_id="b", points=1, now=NOW - timedelta(days=1)
        )
        transfer_service.send_points(
            db_session, acting_account_id="a", sender_id="a", receiver_id="c", points=1, now=NOW
        )

        stats = circulation_service.system_stats(db_session, now=NOW)

        assert stats == {
            "total_users": 4,
            "today_transactions": 1,
            "active_departments": 2,
            "total_circulation": 60,
        }


class TestDepartmentRankings:
    def test_ordered_by_total_with_exclusions(self, db_session, root):
        make_account(db_session, "a", department="Sales", balance=10)
        make_account(db_session, "b", department="Sales", balance=15)
        make_account(db_session, "c", department="Support", balance=40)
        make_account(db_session, "d", department="Support", balance=40, is_active=False)
        make_account(db_session, "e", department="Sales", role="superadmin", balance=100)
        make_account(db_session, "f", department="", balance=70)

        rankings = [tuple(row) for row in department_service.department_rankings(db_session)]

        assert rankings == [("Support", 40, 1), ("Sales", 25, 2)]
