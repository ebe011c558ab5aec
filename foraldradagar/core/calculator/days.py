"""Dagsaldon: totalt, per ersättningsnivå och per förälder."""

import datetime

from foraldradagar.core.logging_config import get_logger
from foraldradagar.core.models import Family, Multiplicity, Parent, RuleConstants
from foraldradagar.core.types import DaySummary
from foraldradagar.core.utils import get_today

logger = get_logger(__name__)


def _taken(parent: Parent | None) -> int:
    return parent.foraldra_days_taken if parent else 0


def reserved_used(days_taken: int, rules: RuleConstants) -> int:
    """Reserverade dagar förbrukas först, upp till taket per förälder."""
    return min(days_taken, rules.reserved_days_per_parent)


def reserved_remaining(days_taken: int, rules: RuleConstants) -> int:
    return max(0, rules.reserved_days_per_parent - reserved_used(days_taken, rules))


def excess_over_reserved(days_taken: int, rules: RuleConstants) -> int:
    """Dagar utöver de reserverade tas från de delade dagarna."""
    return max(0, days_taken - rules.reserved_days_per_parent)


def _vab_this_year(parent: Parent | None, year: int, rules: RuleConstants) -> tuple[int, int]:
    taken = parent.vab_days_in_year(year) if parent else 0
    return taken, max(0, rules.vab_days_per_child_per_year - taken)


def calculate_days(
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
) -> DaySummary:
    """
    Beräknar dagsaldon för familjen.

    Historiska dagar antas ha tagits på sjukpenningnivå först och därefter
    på lägstanivå, för hushållet som helhet. Nivån per loggad dag används
    inte här.

    Args:
        family: Familjens ögonblicksbild
        rules: Regeltabell
        today: Används bara för VAB-dagar innevarande år (default: idag)

    Returns:
        DaySummary där alla "kvar"-värden är golvade vid noll
    """
    child = family.first_child
    multiplicity = child.multiplicity if child else Multiplicity.SINGLE

    total = rules.total_days(multiplicity)
    sgi_total = rules.sgi_level_total(multiplicity)
    basic_total = rules.lagstaniva_days

    p1, p2 = family.parent1, family.parent2
    p1_taken = _taken(p1)
    p2_taken = _taken(p2)
    total_taken = p1_taken + p2_taken

    sgi_taken = min(total_taken, sgi_total)
    basic_taken = max(0, total_taken - sgi_total)

    shared_remaining = max(
        0,
        rules.shared_days - excess_over_reserved(p1_taken, rules) - excess_over_reserved(p2_taken, rules),
    )

    year = (today or get_today()).year
    p1_vab, p1_vab_left = _vab_this_year(p1, year, rules)
    p2_vab, p2_vab_left = _vab_this_year(p2, year, rules)

    logger.debug(
        "Day balance: total=%s taken=%s (p1=%s, p2=%s) multiplicity=%s",
        total,
        total_taken,
        p1_taken,
        p2_taken,
        multiplicity.value,
    )

    return DaySummary(
        total_days=total,
        sgi_level_total=sgi_total,
        basic_level_total=basic_total,
        days_taken_total=total_taken,
        days_taken_parent1=p1_taken,
        days_taken_parent2=p2_taken,
        days_remaining_total=max(0, total - total_taken),
        days_remaining_sgi=max(0, sgi_total - sgi_taken),
        days_remaining_basic=max(0, basic_total - basic_taken),
        reserved_used_parent1=reserved_used(p1_taken, rules),
        reserved_used_parent2=reserved_used(p2_taken, rules),
        reserved_remaining_parent1=reserved_remaining(p1_taken, rules),
        reserved_remaining_parent2=reserved_remaining(p2_taken, rules),
        shared_days_remaining=shared_remaining,
        vab_days_this_year_parent1=p1_vab,
        vab_days_this_year_parent2=p2_vab,
        vab_days_remaining_parent1=p1_vab_left,
        vab_days_remaining_parent2=p2_vab_left,
    )
