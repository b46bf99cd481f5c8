"""Transfer endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.policy import LedgerPolicy
from ...models import Account
from ...schemas import TransferCreate, TransferRead
from ...services import transfer_service
from ...services.errors import Forbidden, LedgerRuleViolation
from .deps import get_current_account, get_policy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transfers", tags=["transfers"])


@router.post(
    "",
    response_model=TransferRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send points",
    responses={
        201: {
            "description": "Transfer recorded",
            "content": {
                "application/json": {
                    "example": {
                        "id": 42,
                        "sender_id": "tanaka",
                        "receiver_id": "suzuki",
                        "sender": {
                            "id": "tanaka",
                            "first_name": "Yui",
                            "last_name": "Tanaka",
                            "department": "Sales",
                            "role": "user",
                        },
                        "receiver": {
                            "id": "suzuki",
                            "first_name": "Ken",
                            "last_name": "Suzuki",
                            "department": "Support",
                            "role": "user",
                        },
                        "points": 3,
                        "message": "Thanks for covering the Friday shift!",
                        "created_at": "2025-04-10T14:20:00",
                    }
                }
            },
        },
        400: {"description": "Invalid request or insufficient balance"},
        403: {"description": "Sending on behalf of another account"},
        404: {"description": "Receiver not found"},
        429: {"description": "Daily sending limit reached"},
    },
)
def create_transfer(
    payload: TransferCreate,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account),
    policy: LedgerPolicy = Depends(get_policy),
) -> TransferRead:
    """Transfer points from the caller to a colleague.

    Example request body::

        {
            "sender_id": "tanaka",
            "receiver_id": "suzuki",
            "points": 3,
            "message": "Thanks for covering the Friday shift!"
        }
    """

    try:
        transfer = transfer_service.send_points(
            db,
            acting_account_id=account.id,
            sender_id=payload.sender_id,
            receiver_id=payload.receiver_id,
            points=payload.points,
            message=payload.message,
            policy=policy,
        )
        db.commit()
        db.refresh(transfer)
        return transfer
    except LedgerRuleViolation as exc:
        db.rollback()
        logger.info("transfer from %s rejected (%s): %s", payload.sender_id, exc.kind, exc.detail)
        raise HTTPException(status_code=exc.status_code, detail=exc.as_detail()) from exc


@router.get("", response_model=List[TransferRead], summary="Ledger page")
def list_transfers(
    *,
    limit: int = Query(50, ge=1, le=500, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_account),
) -> List[TransferRead]:
    """Fetch the ledger newest first."""

    return list(transfer_service.list_transfers(db, limit=limit, offset=offset))


@router.get("/recent", response_model=List[TransferRead], summary="Most recent transfers")
def recent_transfers(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_account),
) -> List[TransferRead]:
    return list(transfer_service.recent_transfers(db, limit=limit))


@router.get("/account/{account_id}", response_model=List[TransferRead], summary="Transfers involving an account")
def account_transfers(
    account_id: str,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account),
) -> List[TransferRead]:
    """Accounts may read their own history; admins may read anyone's."""

    if account_id != account.id and not account.is_admin:
        exc = Forbidden("Access denied")
        raise HTTPException(status_code=exc.status_code, detail=exc.as_detail())
    return list(transfer_service.account_transfers(db, account_id))
