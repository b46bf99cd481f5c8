"""SQLAlchemy models for K-Point."""

from .account import ADMIN_ROLES, Account, AccountRole
from .daily_send_counter import DailySendCounter
from .department import Department, DepartmentAdjustment
from .system_config import SystemConfig
from .transfer import Transfer

__all__ = [
    "ADMIN_ROLES",
    "Account",
    "AccountRole",
    "DailySendCounter",
    "Department",
    "DepartmentAdjustment",
    "SystemConfig",
    "Transfer",
]
