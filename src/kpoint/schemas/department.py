"""Department, distribution and adjustment schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator


class DepartmentRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class DepartmentRanking(BaseModel):
    """Aggregated department standing."""

    name: str
    total_points: int
    member_count: int = Field(..., ge=0)


class DistributionCreate(BaseModel):
    """Positive-only department distribution."""

    total_points: StrictInt = Field(..., gt=0)
    reason: Optional[str] = Field(None, max_length=280)


class TeamDistributionCreate(BaseModel):
    """Team distribution; a negative total deducts from every member."""

    total_points: StrictInt
    reason: Optional[str] = Field(None, max_length=280)

    @field_validator("total_points")
    @classmethod
    def _non_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("total_points must not be zero")
        return value


class DistributionShare(BaseModel):
    account_id: str
    points: int


class DistributionReceipt(BaseModel):
    message: str
    department: str
    total_points: int
    recipient_count: int
    shares: List[DistributionShare]


class AdjustmentCreate(BaseModel):
    adjustment_amount: StrictInt
    reason: Optional[str] = Field(None, max_length=280)


class AdjustmentRead(BaseModel):
    id: int
    department: str
    adjustment_amount: int
    reason: str
    adjusted_by: str
    created_at: datetime

    class Config:
        from_attributes = True
