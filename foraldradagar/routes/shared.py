# foraldradagar/routes/shared.py
"""
Shared helpers and schemas for route modules.
"""

import datetime
from decimal import Decimal

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from foraldradagar.core.models import Family, LeaveBlock, LeaveType, ParentRole, PayLevel, RuleConstants
from foraldradagar.core.rules import get_rules
from foraldradagar.core.validators import get_family_or_404, validation_error
from foraldradagar.database.database import FamilyRow, family_to_snapshot


def current_rules() -> RuleConstants:
    """Dependency: regeltabellen för innevarande år."""
    return get_rules()


def load_family(db: Session, family_id: int) -> tuple[FamilyRow, Family]:
    """Hämtar raden (404 om den saknas) och dess frysta ögonblicksbild."""
    row = get_family_or_404(db, family_id)
    try:
        return row, family_to_snapshot(row)
    except ValidationError as e:
        raise validation_error(e, f"family {family_id}") from e


def parent_row_or_404(row: FamilyRow, role: ParentRole):
    parent = next((p for p in row.parents if ParentRole(p.role) == role), None)
    if parent is None:
        raise HTTPException(status_code=404, detail=f"Parent {role.value} not found")
    return parent


# ============ Pydantic schemas ============


class LeaveDayCreate(BaseModel):
    role: ParentRole = ParentRole.FIRST
    date: datetime.date
    leave_type: LeaveType = LeaveType.PARENTAL_LEAVE
    pay_level: PayLevel = PayLevel.SGI_LEVEL
    is_planned: bool = False


class LeaveBlockCreate(BaseModel):
    role: ParentRole = ParentRole.FIRST
    start_date: datetime.date
    end_date: datetime.date
    pay_level: PayLevel = PayLevel.SGI_LEVEL
    fraction: Decimal = Decimal("1")

    def to_snapshot(self) -> LeaveBlock:
        return LeaveBlock(**self.model_dump())


class ScenarioCreate(BaseModel):
    name: str = "Plan 1"
    blocks: list[LeaveBlockCreate] = []
