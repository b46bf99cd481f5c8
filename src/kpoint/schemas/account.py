"""Pydantic schemas for account directory endpoints."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictInt

from ..core.policy import DEFAULT_BALANCE

RoleName = Literal["user", "admin", "superadmin"]


class AccountSummary(BaseModel):
    """Lightweight projection of account details."""

    id: str
    first_name: Optional[str]
    last_name: Optional[str]
    department: str
    role: str

    class Config:
        from_attributes = True


class AccountRead(AccountSummary):
    email: Optional[str]
    point_balance: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AccountWithStats(AccountRead):
    daily_sent_count: int = Field(..., ge=0)
    monthly_received: int


class AccountCreate(BaseModel):
    """Request body for creating an account."""

    id: str = Field(..., min_length=1, description="Organizational username.")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    role: RoleName = "user"
    point_balance: StrictInt = Field(DEFAULT_BALANCE, ge=0)
    is_active: bool = True


class AccountUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class RoleUpdate(BaseModel):
    role: RoleName


class NameUpdate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class BalanceUpdate(BaseModel):
    balance: StrictInt = Field(..., ge=0)


class BalanceOverride(BaseModel):
    """Superadmin override; negative balances are allowed."""

    balance: StrictInt
