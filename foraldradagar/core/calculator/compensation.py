"""Ersättningsberäkningar (föräldrapenning och VAB)."""

from decimal import Decimal

from foraldradagar.core.constants import DAYS_PER_MONTH_ON_LEAVE, DAYS_PER_YEAR, MONTHS_PER_YEAR
from foraldradagar.core.logging_config import get_logger
from foraldradagar.core.models import Family, Parent, PayLevel, RuleConstants
from foraldradagar.core.types import IncomeSummary, ParentIncome

logger = get_logger(__name__)

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)


def _daily_payment(monthly_income: Decimal, cap: Decimal, rules: RuleConstants) -> Decimal:
    # min(årsinkomst, tak) × 0,97 × 0,80 / 365, faktorerna i den ordningen
    yearly = max(_ZERO, Decimal(monthly_income)) * MONTHS_PER_YEAR
    capped = min(yearly, cap)
    return capped * rules.sgi_factor_karens * rules.sgi_factor_rate / DAYS_PER_YEAR


def daily_sgi_payment(monthly_income: Decimal, rules: RuleConstants) -> Decimal:
    """
    Dagbelopp på sjukpenningnivå.

    Formel: min(månadslön × 12, SGI-tak) × 0,97 × 0,80 / 365.
    Negativ inkomst behandlas som noll.
    """
    return _daily_payment(monthly_income, rules.sgi_cap, rules)


def daily_vab_payment(monthly_income: Decimal, rules: RuleConstants) -> Decimal:
    """
    Dagbelopp för VAB.

    Samma formel som daily_sgi_payment men med det LÄGRE VAB-taket
    (7,5 × prisbasbelopp i stället för 10 ×).
    """
    return _daily_payment(monthly_income, rules.vab_sgi_cap, rules)


def monthly_on_leave(monthly_income: Decimal, rules: RuleConstants) -> Decimal:
    """Månadsbelopp på sjukpenningnivå: dagbelopp × 30 (fast, inte dagar i månaden)."""
    return daily_sgi_payment(monthly_income, rules) * DAYS_PER_MONTH_ON_LEAVE


def monthly_with_top_up(monthly_income: Decimal, top_up_percentage: int) -> Decimal:
    """
    Illustrativ månadsinkomst om arbetsgivaren betalar X % av lönen.

    Blandas inte med föräldrapenningen, det är en fristående "tänk om"-siffra.
    """
    return Decimal(monthly_income) * Decimal(top_up_percentage) / _HUNDRED


def leave_income_percentage(monthly_income: Decimal, rules: RuleConstants) -> Decimal:
    """Andel av lönen som behålls på ledighet, i procent. 0 när inkomsten är 0."""
    if monthly_income <= 0:
        return _ZERO
    return monthly_on_leave(monthly_income, rules) / Decimal(monthly_income) * _HUNDRED


def max_daily_sgi(rules: RuleConstants) -> Decimal:
    """Högsta dagbelopp på sjukpenningnivå (inkomst vid taket)."""
    return daily_sgi_payment(rules.sgi_cap_monthly, rules)


def max_daily_vab(rules: RuleConstants) -> Decimal:
    return daily_vab_payment(rules.vab_sgi_cap_monthly, rules)


def daily_rate_for(pay_level: PayLevel, monthly_income: Decimal, rules: RuleConstants) -> Decimal:
    """Dagbelopp för en ersättningsnivå."""
    if pay_level == PayLevel.SGI_LEVEL:
        return daily_sgi_payment(monthly_income, rules)
    if pay_level == PayLevel.BASIC_LEVEL:
        return rules.lagstaniva_daily
    return _ZERO


def _parent_income(parent: Parent, rules: RuleConstants) -> ParentIncome:
    income = parent.monthly_gross_income
    top_up = None
    if parent.has_employer_top_up:
        top_up = monthly_with_top_up(income, parent.employer_top_up_percentage)

    return ParentIncome(
        role=parent.role,
        name=parent.name,
        monthly_gross_income=income,
        daily_rate=daily_sgi_payment(income, rules),
        daily_vab_rate=daily_vab_payment(income, rules),
        monthly_on_leave=monthly_on_leave(income, rules),
        leave_income_percentage=leave_income_percentage(income, rules),
        monthly_with_top_up=top_up,
        top_up_months=parent.employer_top_up_months if top_up is not None else None,
    )


def calculate_income(family: Family, rules: RuleConstants) -> IncomeSummary:
    """
    Inkomstöversikt för familjen.

    Returns:
        IncomeSummary med dag- och månadsbelopp per förälder samt hushållets
        månadsinkomst när båda arbetar respektive när båda är lediga.
    """
    parents = tuple(_parent_income(p, rules) for p in sorted(family.parents, key=lambda p: p.role.value))

    working = sum((p.monthly_gross_income for p in parents), _ZERO)
    both_on_leave = sum((p.monthly_on_leave for p in parents), _ZERO)

    logger.debug(
        "Income summary: working=%s both_on_leave=%s (rules %s)", working, both_on_leave, rules.year
    )

    return IncomeSummary(
        parents=parents,
        household_monthly_working=working,
        household_monthly_both_on_leave=both_on_leave,
        monthly_difference=working - both_on_leave,
    )
