"""Admin dashboard and maintenance schemas."""

from pydantic import BaseModel, Field, StrictInt


class SystemStats(BaseModel):
    total_users: int
    today_transactions: int
    active_departments: int
    total_circulation: int


class CirculationUpdate(BaseModel):
    amount: StrictInt = Field(..., ge=0)


class CirculationReceipt(BaseModel):
    message: str
    amount: int
    updated_by: str


class ResetSummary(BaseModel):
    message: str
    accounts_reset: int
    baseline_balance: int
