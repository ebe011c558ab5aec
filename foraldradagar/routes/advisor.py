# foraldradagar/routes/advisor.py
"""
Underlag för rådgivningschatten.

Själva anropet till språkmodellen görs utanför tjänsten; här byggs bara
fakta, systemprompt och förslag på frågor, plus de modellinställningar
klienten ska använda (aldrig API-nyckeln).
"""

import os

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from foraldradagar.core.advisory import (
    AdvisorConfig,
    build_family_facts,
    build_system_prompt,
    greeting,
    starter_questions,
)
from foraldradagar.core.constants import ADVISOR_DISCLAIMER
from foraldradagar.core.models import RuleConstants
from foraldradagar.core.utils import get_today
from foraldradagar.database.database import get_db
from foraldradagar.routes.shared import current_rules, load_family

router = APIRouter(prefix="/api/families", tags=["advisor"])


def advisor_config() -> AdvisorConfig:
    """Dependency: rådgivarens inställningar från miljön."""
    return AdvisorConfig(
        model=os.getenv("ADVISOR_MODEL") or None,
        max_tokens=int(os.getenv("ADVISOR_MAX_TOKENS", "1024")),
        api_key=os.getenv("ADVISOR_API_KEY", ""),
    )


@router.get("/{family_id}/advisor/context")
async def get_advisor_context(
    family_id: int,
    db: Session = Depends(get_db),
    rules: RuleConstants = Depends(current_rules),
    config: AdvisorConfig = Depends(advisor_config),
):
    _, family = load_family(db, family_id)
    today = get_today()
    return {
        "facts": jsonable_encoder(build_family_facts(family, rules, today=today)),
        "system_prompt": build_system_prompt(family, rules, today=today),
        "greeting": greeting(family, rules, today=today),
        "starter_questions": starter_questions(family, rules, today=today),
        "disclaimer": ADVISOR_DISCLAIMER,
        "model": config.model,
        "max_tokens": config.max_tokens,
        "advisor_enabled": config.has_api_key,
    }
