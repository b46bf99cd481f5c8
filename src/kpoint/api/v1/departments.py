"""Department listing and ranking endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...models import Account
from ...schemas import DepartmentRanking, DepartmentRead
from ...services import department_service
from .deps import get_current_account

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=List[DepartmentRead], summary="List departments")
def list_departments(
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_account),
) -> List[DepartmentRead]:
    return list(department_service.list_departments(db))


@router.get(
    "/rankings",
    response_model=List[DepartmentRanking],
    summary="Departments ranked by summed balance",
    responses={
        200: {
            "description": "Department totals, largest first",
            "content": {
                "application/json": {
                    "example": [
                        {"name": "Sales", "total_points": 142, "member_count": 7},
                        {"name": "Support", "total_points": 96, "member_count": 5},
                    ]
                }
            },
        }
    },
)
def department_rankings(
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_account),
) -> List[DepartmentRanking]:
    return [
        DepartmentRanking(name=name, total_points=int(total or 0), member_count=int(members or 0))
        for name, total, members in department_service.department_rankings(db)
    ]
