"""Department directory and ranking aggregation."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.policy import PRIVILEGED_DEPARTMENT
from ..models import Account, AccountRole, Department


def list_departments(session: Session) -> Sequence[Department]:
    stmt = select(Department).order_by(Department.name.asc())
    return session.execute(stmt).scalars().all()


def get_department(session: Session, name: str) -> Department | None:
    stmt = select(Department).where(Department.name == name)
    return session.execute(stmt).scalar_one_or_none()


def get_or_create_department(session: Session, name: str) -> Department:
    """Return the named department, inserting it on first reference."""

    department = get_department(session, name)
    if department is not None:
        return department

    department = Department(name=name)
    session.add(department)
    session.flush()
    return department


def department_rankings(session: Session) -> Sequence[tuple]:
    """Return ``(name, total_points, member_count)`` rows, largest total first.

    Only active, non-superadmin members of a named, non-privileged department
    are counted.
    """

    total_points = func.coalesce(func.sum(Account.point_balance), 0).label("total_points")
    member_count = func.count(Account.id).label("member_count")

    stmt = (
        select(Account.department, total_points, member_count)
        .where(
            Account.is_active.is_(True),
            Account.role != AccountRole.SUPERADMIN.value,
            Account.department.is_not(None),
            Account.department != "",
            Account.department != PRIVILEGED_DEPARTMENT,
        )
        .group_by(Account.department)
        .order_by(total_points.desc(), Account.department.asc())
    )
    return session.execute(stmt).all()
