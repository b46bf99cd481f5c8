"""Department and department adjustment models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from ..core.database import Base
from ..utils.datetime import local_now


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, default=local_now, nullable=False)


class DepartmentAdjustment(Base):
    """Audit-only note of a superadmin's adjustment to a department total.

    Recording an adjustment never changes any account balance.
    """

    __tablename__ = "department_adjustments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    department = Column(String, nullable=False)
    adjustment_amount = Column(Integer, nullable=False)
    reason = Column(Text, nullable=False, default="")
    adjusted_by = Column(String, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime, default=local_now, nullable=False)
