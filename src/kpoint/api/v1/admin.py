"""Administrative and superadmin endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.policy import LedgerPolicy
from ...models import Account
from ...schemas import (
    AccountCreate,
    AccountRead,
    AccountUpdate,
    AdjustmentCreate,
    AdjustmentRead,
    BalanceOverride,
    BalanceUpdate,
    CirculationReceipt,
    CirculationUpdate,
    DistributionCreate,
    DistributionReceipt,
    DistributionShare,
    NameUpdate,
    ResetSummary,
    RoleUpdate,
    SystemStats,
    TeamDistributionCreate,
)
from ...services import (
    account_service,
    circulation_service,
    distribution_service,
    override_service,
    reset_service,
)
from ...services.errors import LedgerRuleViolation
from .deps import get_policy, require_admin, require_superadmin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _http_error(db: Session, exc: LedgerRuleViolation) -> HTTPException:
    db.rollback()
    return HTTPException(status_code=exc.status_code, detail=exc.as_detail())


@router.get("/stats", response_model=SystemStats, summary="Dashboard statistics")
def system_stats(
    db: Session = Depends(get_db),
    _: Account = Depends(require_admin),
) -> SystemStats:
    return SystemStats(**circulation_service.system_stats(db))


@router.post("/circulation", response_model=CirculationReceipt, summary="Pin total circulation")
def set_circulation(
    payload: CirculationUpdate,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_superadmin),
) -> CirculationReceipt:
    """Pin the displayed total circulation. Individual balances are unchanged."""

    try:
        circulation_service.set_circulation(db, payload.amount, admin_id=admin.id)
        db.commit()
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc
    return CirculationReceipt(
        message="System circulation updated successfully",
        amount=payload.amount,
        updated_by=admin.id,
    )


@router.post(
    "/accounts",
    response_model=AccountRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={409: {"description": "Account id already exists"}},
)
def create_account(
    payload: AccountCreate,
    db: Session = Depends(get_db),
    _: Account = Depends(require_admin),
) -> AccountRead:
    try:
        account = account_service.create_account(
            db,
            account_id=payload.id,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            department=payload.department,
            role=payload.role,
            point_balance=payload.point_balance,
            is_active=payload.is_active,
        )
        db.commit()
        db.refresh(account)
        return account
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


@router.put("/accounts/{account_id}", response_model=AccountRead, summary="Update account attributes")
def update_account(
    account_id: str,
    payload: AccountUpdate,
    db: Session = Depends(get_db),
    _: Account = Depends(require_admin),
) -> AccountRead:
    try:
        account = account_service.update_account(db, account_id, payload.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(account)
        return account
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


@router.put("/accounts/{account_id}/role", response_model=AccountRead, summary="Change an account's role")
def change_role(
    account_id: str,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_superadmin),
) -> AccountRead:
    try:
        account = account_service.change_role(db, account_id, payload.role, admin_id=admin.id)
        db.commit()
        db.refresh(account)
        return account
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


@router.put("/accounts/{account_id}/name", response_model=AccountRead, summary="Rename an account")
def rename_account(
    account_id: str,
    payload: NameUpdate,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_superadmin),
) -> AccountRead:
    try:
        account = override_service.rename_account(
            db,
            account_id,
            payload.first_name,
            payload.last_name,
            admin_id=admin.id,
        )
        db.commit()
        db.refresh(account)
        return account
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


@router.put("/accounts/{account_id}/balance", response_model=AccountRead, summary="Set a non-negative balance")
def set_balance(
    account_id: str,
    payload: BalanceUpdate,
    db: Session = Depends(get_db),
    _: Account = Depends(require_admin),
) -> AccountRead:
    try:
        account = account_service.set_balance(db, account_id, payload.balance)
        db.commit()
        db.refresh(account)
        return account
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


@router.put(
    "/accounts/{account_id}/override-balance",
    response_model=AccountRead,
    summary="Override a balance (any integer)",
)
def override_balance(
    account_id: str,
    payload: BalanceOverride,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_superadmin),
) -> AccountRead:
    """Set a balance directly, negative values included. No transfer is recorded."""

    try:
        account = override_service.set_balance_direct(db, account_id, payload.balance, admin_id=admin.id)
        db.commit()
        db.refresh(account)
        return account
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


def _run_distribution(db: Session, department: str, total_points: int, reason: Optional[str], admin: Account):
    try:
        result = distribution_service.distribute(
            db,
            department=department,
            total_points=total_points,
            reason=reason,
            acting_admin_id=admin.id,
        )
        db.commit()
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc
    return DistributionReceipt(
        message="Points distributed to team successfully",
        department=result.department,
        total_points=result.total_points,
        recipient_count=result.recipient_count,
        shares=[DistributionShare(account_id=account_id, points=points) for account_id, points in result.shares],
    )


@router.post(
    "/departments/{department}/distribute",
    response_model=DistributionReceipt,
    summary="Distribute points evenly across a department",
    responses={
        200: {
            "description": "Distribution applied",
            "content": {
                "application/json": {
                    "example": {
                        "message": "Points distributed to team successfully",
                        "department": "Sales",
                        "total_points": 10,
                        "recipient_count": 3,
                        "shares": [
                            {"account_id": "abe", "points": 4},
                            {"account_id": "ito", "points": 3},
                            {"account_id": "ueda", "points": 3},
                        ],
                    }
                }
            },
        },
        404: {"description": "No eligible accounts in department"},
    },
)
def distribute(
    department: str,
    payload: DistributionCreate,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_admin),
) -> DistributionReceipt:
    return _run_distribution(db, department, payload.total_points, payload.reason, admin)


@router.post(
    "/departments/{department}/team-distribution",
    response_model=DistributionReceipt,
    summary="Distribute or deduct points across a department",
)
def team_distribution(
    department: str,
    payload: TeamDistributionCreate,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_admin),
) -> DistributionReceipt:
    """Same even split as ``distribute``; a negative total deducts points."""

    return _run_distribution(db, department, payload.total_points, payload.reason, admin)


@router.post("/departments/{department}/adjust", response_model=AdjustmentRead, summary="Record a department adjustment")
def adjust_department(
    department: str,
    payload: AdjustmentCreate,
    db: Session = Depends(get_db),
    admin: Account = Depends(require_superadmin),
) -> AdjustmentRead:
    """Record an audit-only adjustment. No balances change."""

    try:
        adjustment = override_service.adjust_department_record(
            db,
            department=department,
            amount=payload.adjustment_amount,
            reason=payload.reason,
            admin_id=admin.id,
        )
        db.commit()
        db.refresh(adjustment)
        return adjustment
    except LedgerRuleViolation as exc:
        raise _http_error(db, exc) from exc


@router.get("/departments/adjustments", response_model=List[AdjustmentRead], summary="Department adjustment history")
def list_adjustments(
    department: Optional[str] = Query(None, description="Only adjustments for this department"),
    db: Session = Depends(get_db),
    _: Account = Depends(require_superadmin),
) -> List[AdjustmentRead]:
    return list(override_service.list_department_adjustments(db, department))


@router.post("/reset-quarterly", response_model=ResetSummary, summary="Reset all active balances")
def reset_quarterly(
    db: Session = Depends(get_db),
    admin: Account = Depends(require_admin),
    policy: LedgerPolicy = Depends(get_policy),
) -> ResetSummary:
    logger.info("quarterly reset requested by %s", admin.id)
    summary = reset_service.reset_all(db, policy=policy)
    db.commit()
    return ResetSummary(message="Quarterly points reset successfully", **summary)
