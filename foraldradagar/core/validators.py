# foraldradagar/core/validators.py
"""
Validering vid HTTP-gränsen.

Beräkningsmotorn fångar aldrig fel; här översätts uppslag och felaktig
indata till HTTPException.
"""

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from foraldradagar.core.constants import MAX_PROJECTION_MONTHS, MAX_SCENARIOS_PER_FAMILY
from foraldradagar.core.logging_config import get_logger
from foraldradagar.database.database import FamilyRow, ScenarioRow

logger = get_logger(__name__)


def validate_months(months: int) -> int:
    """
    Säkerställ att projektionshorisonten är mellan 1 och 48 månader.

    Returnerar months om det är giltigt, annars kastas 400.
    """
    if not 1 <= months <= MAX_PROJECTION_MONTHS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"months must be between 1 and {MAX_PROJECTION_MONTHS}",
        )
    return months


def get_family_or_404(db: Session, family_id: int) -> FamilyRow:
    family = db.get(FamilyRow, family_id)
    if family is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Family not found")
    return family


def get_scenario_or_404(db: Session, family_id: int, scenario_id: int) -> ScenarioRow:
    scenario = db.get(ScenarioRow, scenario_id)
    if scenario is None or scenario.family_id != family_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scenario not found")
    return scenario


def ensure_scenario_capacity(family: FamilyRow) -> None:
    """Max tre planer per familj."""
    if len(family.scenarios) >= MAX_SCENARIOS_PER_FAMILY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"A family can have at most {MAX_SCENARIOS_PER_FAMILY} scenarios",
        )


def validation_error(error: ValidationError, context: str) -> HTTPException:
    """
    Gör om ett pydantic-fel från en ögonblicksbild till 422.

    Loggas som WARNING, fel i indata är inte serverfel.
    """
    logger.warning(f"Invalid input for {context}: {error.error_count()} error(s)")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=[{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in error.errors()],
    )
