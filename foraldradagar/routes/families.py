# foraldradagar/routes/families.py
"""
Familjer: skapa från onboarding-svar, hämta saldon, inkomster och deadlines,
logga ledighetsdagar.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from foraldradagar.core.calculator import all_deadlines, calculate_days, calculate_income, next_deadline
from foraldradagar.core.logging_config import get_logger
from foraldradagar.core.models import Family, LeaveDayRecord, RuleConstants
from foraldradagar.core.onboarding import OnboardingData, convert
from foraldradagar.core.types import DaySummary, DeadlineInfo, IncomeSummary
from foraldradagar.core.utils import get_today
from foraldradagar.core.validators import validation_error
from foraldradagar.database.database import LeaveDayRow, family_from_snapshot, family_to_snapshot, get_db
from foraldradagar.routes.shared import LeaveDayCreate, current_rules, load_family, parent_row_or_404

logger = get_logger(__name__)

router = APIRouter(prefix="/api/families", tags=["families"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Family)
async def create_family(data: OnboardingData, db: Session = Depends(get_db)):
    """Skapar en familj av onboarding-svaren."""
    try:
        family = convert(data, today=get_today())
    except ValidationError as e:
        raise validation_error(e, "onboarding") from e

    row = family_from_snapshot(family)
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info(f"Family created: id={row.id}", extra={"extra_fields": {"family_id": row.id}})
    return family_to_snapshot(row)


@router.get("/{family_id}", response_model=Family)
async def get_family(family_id: int, db: Session = Depends(get_db)):
    _, family = load_family(db, family_id)
    return family


@router.delete("/{family_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_family(family_id: int, db: Session = Depends(get_db)):
    row, _ = load_family(db, family_id)
    db.delete(row)
    db.commit()
    logger.info(f"Family deleted: id={family_id}", extra={"extra_fields": {"family_id": family_id}})


@router.get("/{family_id}/days", response_model=DaySummary)
async def get_days(
    family_id: int,
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
):
    """Dagsaldo: kvar totalt, per nivå, reserverade och delade dagar."""
    _, family = load_family(db, family_id)
    return calculate_days(family, rules, today=get_today())


@router.get("/{family_id}/income", response_model=IncomeSummary)
async def get_income(
    family_id: int,
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
):
    _, family = load_family(db, family_id)
    return calculate_income(family, rules)


@router.get("/{family_id}/deadlines")
async def get_deadlines(
    family_id: int,
    include_passed: bool = False,
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
):
    """Nästa deadline samt alla deadlines för det äldsta barnet."""
    _, family = load_family(db, family_id)
    today = get_today()
    child = family.first_child
    deadlines: list[DeadlineInfo] = (
        all_deadlines(child, rules, today=today, include_passed=include_passed) if child else []
    )
    return {
        "next": next_deadline(family, rules, today=today),
        "deadlines": deadlines,
    }


@router.post("/{family_id}/leave-days", status_code=status.HTTP_201_CREATED, response_model=LeaveDayRecord)
async def add_leave_day(family_id: int, payload: LeaveDayCreate, db: Session = Depends(get_db)):
    """Loggar en tagen (eller planerad) ledighetsdag för en förälder."""
    row, _ = load_family(db, family_id)
    parent = parent_row_or_404(row, payload.role)

    if any(d.date == payload.date and d.leave_type == payload.leave_type for d in parent.leave_days):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{payload.leave_type.value} already logged for {payload.date}",
        )

    day = LeaveDayRow(
        parent_id=parent.id,
        date=payload.date,
        leave_type=payload.leave_type,
        pay_level=payload.pay_level,
        is_planned=payload.is_planned,
    )
    db.add(day)
    db.commit()
    db.refresh(day)

    return LeaveDayRecord(
        id=day.id,
        date=day.date,
        leave_type=payload.leave_type,
        pay_level=payload.pay_level,
        is_planned=day.is_planned,
    )


@router.delete("/{family_id}/leave-days/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave_day(family_id: int, day_id: int, db: Session = Depends(get_db)):
    row, _ = load_family(db, family_id)
    day = db.get(LeaveDayRow, day_id)
    if day is None or day.parent.family_id != row.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Leave day not found")

    db.delete(day)
    db.commit()
