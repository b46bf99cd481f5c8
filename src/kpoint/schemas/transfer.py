"""Pydantic schemas for transfer endpoints."""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

from .account import AccountSummary


class TransferCreate(BaseModel):
    """Request body for sending points.

    Non-integer amounts are accepted here and rejected by the transfer
    service, which owns both the whole-number and the range check so that
    a foreign ``sender_id`` is reported before a bad amount.
    """

    sender_id: str
    receiver_id: str
    points: Union[StrictInt, StrictFloat, StrictStr] = Field(..., description="Points to transfer to the receiver.")
    message: Optional[str] = Field(None, max_length=280)


class TransferRead(BaseModel):
    """Transfer response payload with both parties resolved."""

    id: int
    sender_id: str
    receiver_id: str
    sender: AccountSummary
    receiver: AccountSummary
    points: int
    message: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
