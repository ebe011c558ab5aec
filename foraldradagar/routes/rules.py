# foraldradagar/routes/rules.py
"""
Regeltabeller per år.
"""

from fastapi import APIRouter, HTTPException, status

from foraldradagar.core.calculator import max_daily_sgi, max_daily_vab
from foraldradagar.core.rules import get_rules
from foraldradagar.core.storage import available_rule_years

router = APIRouter(prefix="/api/rules", tags=["rules"])


@router.get("")
async def list_rule_years():
    return {"years": available_rule_years()}


@router.get("/{year}")
async def get_rule_table(year: int):
    """Regeltabellen för ett år, med härledda tak. 404 om året saknas."""
    if year not in available_rule_years():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No rule table for {year}")

    rules = get_rules(year)
    return {
        **rules.model_dump(mode="json"),
        "sgi_cap": str(rules.sgi_cap),
        "vab_sgi_cap": str(rules.vab_sgi_cap),
        "max_daily_sgi": str(max_daily_sgi(rules)),
        "max_daily_vab": str(max_daily_vab(rules)),
    }
