"""Request dependencies: authenticated principal and role guards."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ...core.config import get_settings
from ...core.database import get_db
from ...core.policy import LedgerPolicy
from ...models import Account, AccountRole
from ...services import account_service
from ...services.errors import Forbidden


def get_current_account(
    x_account_id: str | None = Header(None, description="Authenticated account id set by the auth proxy"),
    db: Session = Depends(get_db),
) -> Account:
    """Resolve the caller forwarded by the upstream authentication layer."""

    if not x_account_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    account = account_service.get_account(db, x_account_id)
    if account is None or not account.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return account


def _forbidden(message: str) -> HTTPException:
    exc = Forbidden(message)
    return HTTPException(status_code=exc.status_code, detail=exc.as_detail())


def require_admin(account: Account = Depends(get_current_account)) -> Account:
    if not account.is_admin:
        raise _forbidden("Admin access required")
    return account


def require_superadmin(account: Account = Depends(get_current_account)) -> Account:
    if account.role != AccountRole.SUPERADMIN.value:
        raise _forbidden("Superadmin access required")
    return account


def get_policy() -> LedgerPolicy:
    return LedgerPolicy.from_settings(get_settings())
