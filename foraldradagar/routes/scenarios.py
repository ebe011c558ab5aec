# foraldradagar/routes/scenarios.py
"""
Planer (scenarier): skapa, hämta, ta bort, projektion och sammanfattning.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from foraldradagar.core.calculator import project_months, summarize
from foraldradagar.core.constants import DEFAULT_PROJECTION_MONTHS
from foraldradagar.core.logging_config import LogContext, get_logger
from foraldradagar.core.models import RuleConstants, Scenario
from foraldradagar.core.utils import get_today
from foraldradagar.core.validators import (
    ensure_scenario_capacity,
    get_scenario_or_404,
    validate_months,
    validation_error,
)
from foraldradagar.database.database import get_db, scenario_row_from_snapshot
from foraldradagar.routes.shared import ScenarioCreate, current_rules, load_family

logger = get_logger(__name__)

router = APIRouter(prefix="/api/families/{family_id}/scenarios", tags=["scenarios"])


def _scenario_or_404(db: Session, family_id: int, scenario_id: int):
    _, family = load_family(db, family_id)
    get_scenario_or_404(db, family_id, scenario_id)
    return family, family.scenario(scenario_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Scenario)
async def create_scenario(family_id: int, payload: ScenarioCreate, db: Session = Depends(get_db)):
    """
    Skapar en plan. Max tre per familj.

    Överlappande block för samma förälder ger 422.
    """
    row, _ = load_family(db, family_id)
    ensure_scenario_capacity(row)

    try:
        scenario = Scenario(name=payload.name, blocks=tuple(b.to_snapshot() for b in payload.blocks))
    except ValidationError as e:
        raise validation_error(e, f"scenario for family {family_id}") from e

    scenario_row = scenario_row_from_snapshot(scenario)
    row.scenarios.append(scenario_row)
    db.commit()
    db.refresh(scenario_row)

    with LogContext(family_id=family_id, scenario_id=scenario_row.id):
        logger.info(f"Scenario created with {len(scenario.blocks)} block(s)")

    return scenario.model_copy(update={"id": scenario_row.id})


@router.get("/{scenario_id}", response_model=Scenario)
async def get_scenario(family_id: int, scenario_id: int, db: Session = Depends(get_db)):
    _, scenario = _scenario_or_404(db, family_id, scenario_id)
    return scenario


@router.delete("/{scenario_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scenario(family_id: int, scenario_id: int, db: Session = Depends(get_db)):
    load_family(db, family_id)
    scenario_row = get_scenario_or_404(db, family_id, scenario_id)
    db.delete(scenario_row)
    db.commit()


@router.get("/{scenario_id}/projection")
async def get_projection(
    family_id: int,
    scenario_id: int,
    months: int = Query(DEFAULT_PROJECTION_MONTHS),
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
):
    """Hushållets inkomst månad för månad, från innevarande månad."""
    months = validate_months(months)
    family, scenario = _scenario_or_404(db, family_id, scenario_id)
    projections = project_months(scenario, family, rules, months=months, today=get_today())
    return [
        {**p.model_dump(mode="json"), "anyone_on_leave": p.anyone_on_leave}
        for p in projections
    ]


@router.get("/{scenario_id}/summary")
async def get_summary(
    family_id: int,
    scenario_id: int,
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
):
    family, scenario = _scenario_or_404(db, family_id, scenario_id)
    summary = summarize(scenario, family, rules, today=get_today())
    return {
        **summary.model_dump(mode="json"),
        "parent1_days_used": str(summary.parent1_days_used),
        "parent2_days_used": str(summary.parent2_days_used),
        "cost_of_leave": str(summary.cost_of_leave),
        "has_urgent_warnings": summary.has_urgent_warnings,
    }
