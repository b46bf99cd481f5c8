"""Account domain model."""

import enum

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..core.policy import DEFAULT_BALANCE, UNASSIGNED_DEPARTMENT
from ..utils.datetime import local_now


class AccountRole(str, enum.Enum):
    """Authorization tiers."""

    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


ADMIN_ROLES = frozenset({AccountRole.ADMIN.value, AccountRole.SUPERADMIN.value})


class Account(Base):
    """Represents an employee participating in K-Point."""

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin', 'superadmin')", name="accounts_role_check"),
    )

    id = Column(String, primary_key=True)
    email = Column(String, unique=True)
    first_name = Column(String)
    last_name = Column(String)
    department = Column(String, nullable=False, default=UNASSIGNED_DEPARTMENT)
    role = Column(String, nullable=False, default=AccountRole.USER.value)
    point_balance = Column(Integer, nullable=False, default=DEFAULT_BALANCE)
    is_active = Column(Boolean, nullable=False, default=True)
    password_hash = Column(String)
    created_at = Column(DateTime, default=local_now, nullable=False)
    updated_at = Column(DateTime, default=local_now, nullable=False)

    transfers_sent = relationship(
        "Transfer",
        foreign_keys="Transfer.sender_id",
        back_populates="sender",
    )
    transfers_received = relationship(
        "Transfer",
        foreign_keys="Transfer.receiver_id",
        back_populates="receiver",
    )
    send_counters = relationship("DailySendCounter", back_populates="account")

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or self.id

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
