# foraldradagar/routes/ical.py
"""
iCal-export av deadlines och ledighetsblock.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from foraldradagar.core.calendar_export import generate_ical
from foraldradagar.core.models import RuleConstants
from foraldradagar.core.utils import get_today
from foraldradagar.core.validators import get_scenario_or_404
from foraldradagar.database.database import get_db
from foraldradagar.routes.shared import current_rules, load_family

router = APIRouter(prefix="/api/families", tags=["calendar"])


@router.get("/{family_id}/calendar.ics")
async def export_calendar(
    family_id: int,
    scenario_id: int | None = None,
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
) -> Response:
    """Exporterar familjens deadlines, och valfritt en plans block, som iCal-fil."""
    _, family = load_family(db, family_id)

    scenario = None
    if scenario_id is not None:
        get_scenario_or_404(db, family_id, scenario_id)
        scenario = family.scenario(scenario_id)

    ical_content = generate_ical(family, rules, scenario=scenario, today=get_today())

    return Response(
        content=ical_content,
        media_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": 'attachment; filename="foraldradagar.ics"',
        },
    )
