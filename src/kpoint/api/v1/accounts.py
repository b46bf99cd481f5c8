"""Account directory endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...models import Account
from ...schemas import AccountRead, AccountWithStats
from ...services import account_service
from .deps import get_current_account

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=List[AccountRead], summary="List active accounts")
def list_accounts(
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_account),
) -> List[AccountRead]:
    """Return every active account ordered by id."""

    return list(account_service.list_active(db))


@router.get(
    "/with-stats",
    response_model=List[AccountWithStats],
    summary="List active accounts with send/receive stats",
    responses={
        200: {
            "description": "Accounts with today's send count and this month's received points",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "tanaka",
                            "first_name": "Yui",
                            "last_name": "Tanaka",
                            "department": "Sales",
                            "role": "user",
                            "email": "tanaka@example.com",
                            "point_balance": 17,
                            "is_active": True,
                            "created_at": "2025-04-01T09:00:00",
                            "updated_at": "2025-04-10T14:20:00",
                            "daily_sent_count": 1,
                            "monthly_received": 6,
                        }
                    ]
                }
            },
        }
    },
)
def list_accounts_with_stats(
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_account),
) -> List[AccountWithStats]:
    response: List[AccountWithStats] = []
    for account, daily_sent, monthly_received in account_service.list_active_with_stats(db):
        response.append(
            AccountWithStats(
                **AccountRead.model_validate(account).model_dump(),
                daily_sent_count=daily_sent,
                monthly_received=monthly_received,
            )
        )
    return response


@router.get("/me", response_model=AccountRead, summary="Current account")
def read_current_account(account: Account = Depends(get_current_account)) -> AccountRead:
    return account
