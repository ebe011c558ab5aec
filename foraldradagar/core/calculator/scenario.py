"""Projektion månad för månad och sammanfattning av en plan (scenario)."""

import datetime
from decimal import Decimal
from functools import lru_cache

from foraldradagar.core.constants import (
    DAYS_PER_MONTH_ON_LEAVE,
    DEFAULT_PROJECTION_MONTHS,
    SAVE_LIMIT_WARNING_WINDOW_DAYS,
    URGENT_DAYS_SAVE_LIMIT,
)
from foraldradagar.core.formatting import format_date, format_days, parent_name
from foraldradagar.core.logging_config import get_logger
from foraldradagar.core.models import (
    Family,
    LeaveBlock,
    Multiplicity,
    ParentRole,
    PayLevel,
    RuleConstants,
    Scenario,
)
from foraldradagar.core.types import MonthProjection, PlanSummary, PlanWarning, WarningKind
from foraldradagar.core.utils import add_months, get_today, iter_month_starts

from .compensation import daily_rate_for
from .deadlines import days_until, save_limit_date

logger = get_logger(__name__)

_ZERO = Decimal(0)


def _active_block(blocks: list[LeaveBlock], month: datetime.date, month_end: datetime.date) -> LeaveBlock | None:
    """Första blocket vars [start, slut) skär månaden."""
    return next(
        (b for b in blocks if b.calendar_days > 0 and b.start_date < month_end and b.end_date > month),
        None,
    )


def _month_income(
    family: Family,
    scenario: Scenario,
    role: ParentRole,
    month: datetime.date,
    month_end: datetime.date,
    rules: RuleConstants,
) -> tuple[bool, Decimal]:
    parent = family.parent(role)
    if parent is None:
        return False, _ZERO

    block = _active_block(scenario.blocks_for(role), month, month_end)
    if block is None:
        return False, parent.monthly_gross_income

    daily = daily_rate_for(block.pay_level, parent.monthly_gross_income, rules)
    return True, daily * DAYS_PER_MONTH_ON_LEAVE * block.fraction


@lru_cache(maxsize=128)
def _project(
    scenario: Scenario,
    family: Family,
    rules: RuleConstants,
    months: int,
    today: datetime.date,
) -> tuple[MonthProjection, ...]:
    projections = []
    for month in iter_month_starts(today, months):
        month_end = add_months(month, 1)
        p1_on_leave, p1_income = _month_income(family, scenario, ParentRole.FIRST, month, month_end, rules)
        p2_on_leave, p2_income = _month_income(family, scenario, ParentRole.SECOND, month, month_end, rules)
        projections.append(
            MonthProjection(
                month=month,
                parent1_on_leave=p1_on_leave,
                parent2_on_leave=p2_on_leave,
                parent1_income=p1_income,
                parent2_income=p2_income,
                household_income=p1_income + p2_income,
            )
        )
    return tuple(projections)


def project_months(
    scenario: Scenario,
    family: Family,
    rules: RuleConstants,
    months: int = DEFAULT_PROJECTION_MONTHS,
    today: datetime.date | None = None,
) -> list[MonthProjection]:
    """
    Projicerar hushållets inkomst månad för månad.

    Horisonten börjar den första i innevarande månad. En förälder med ett
    aktivt block i månaden får dagbelopp × 30 × uttagsnivå (sjukpenningnivå
    eller lägstanivå beroende på blocket), annars full bruttolön.

    Args:
        scenario: Planen
        family: Familjens ögonblicksbild
        rules: Regeltabell
        months: Antal månader (0 eller mindre ger tom lista)
        today: Referensdatum (default: idag)

    Returns:
        Lista med MonthProjection, en per månad
    """
    if months <= 0:
        return []
    return list(_project(scenario, family, rules, months, today or get_today()))


def _consumption(blocks: list[LeaveBlock], pay_level: PayLevel) -> Decimal:
    return sum((b.days_consumed for b in blocks if b.pay_level == pay_level), _ZERO)


def _build_warnings(
    family: Family,
    rules: RuleConstants,
    today: datetime.date,
    total_days: int,
    sgi_total: int,
    days_remaining: Decimal,
    sgi_days_used: Decimal,
    consumption_by_role: dict[ParentRole, Decimal],
) -> list[PlanWarning]:
    warnings: list[PlanWarning] = []

    if days_remaining < 0:
        warnings.append(
            PlanWarning(
                kind=WarningKind.OVER_ALLOCATED,
                message=f"Planen använder {format_days(-days_remaining)} fler dagar än tillgängligt!",
                is_urgent=True,
            )
        )

    if sgi_days_used > sgi_total:
        warnings.append(
            PlanWarning(
                kind=WarningKind.SGI_OVER_ALLOCATED,
                message="Fler SGI-dagar planerade än tillgängliga",
                is_urgent=True,
            )
        )

    if not family.is_single_parent:
        reserved = rules.reserved_days_per_parent
        transferable_limit = total_days - 2 * reserved
        for role, other in ((ParentRole.FIRST, ParentRole.SECOND), (ParentRole.SECOND, ParentRole.FIRST)):
            if consumption_by_role[role] < reserved and consumption_by_role[other] > transferable_limit:
                warnings.append(
                    PlanWarning(
                        kind=WarningKind.RESERVED_DAYS_UNUSED,
                        message=f"{parent_name(family, role)} har reserverade dagar kvar att använda",
                        is_urgent=False,
                    )
                )

    child = family.first_child
    if child is not None:
        save_limit = save_limit_date(child.birth_date, rules)
        days_left = days_until(save_limit, today)
        if (
            save_limit >= today
            and days_left < SAVE_LIMIT_WARNING_WINDOW_DAYS
            and days_remaining > rules.max_days_saveable(child.multiplicity)
        ):
            warnings.append(
                PlanWarning(
                    kind=WarningKind.SAVE_LIMIT,
                    message=f"SGI-dagar bör användas före {format_date(save_limit)}",
                    is_urgent=days_left < URGENT_DAYS_SAVE_LIMIT,
                )
            )

    return warnings


def summarize(
    scenario: Scenario,
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
    months: int = DEFAULT_PROJECTION_MONTHS,
) -> PlanSummary:
    """
    Sammanfattar en plan: dagförbrukning, inkomst och varningar.

    Planerade dagar läggs ihop med redan loggade dagar. days_remaining
    golvas inte vid noll; ett negativt värde är signalen för överplanering.
    Historiska dagar fördelas på sjukpenningnivå först, samma antagande som
    i calculate_days.
    """
    today = today or get_today()
    child = family.first_child
    multiplicity = child.multiplicity if child else Multiplicity.SINGLE
    total_days = rules.total_days(multiplicity)
    sgi_total = rules.sgi_level_total(multiplicity)

    historical_by_role = {
        role: (family.parent(role).foraldra_days_taken if family.parent(role) else 0) for role in ParentRole
    }
    historical = sum(historical_by_role.values())
    historical_sgi = min(historical, sgi_total)
    historical_basic = historical - historical_sgi

    planned: dict[ParentRole, dict[PayLevel, Decimal]] = {}
    for role in ParentRole:
        blocks = scenario.blocks_for(role) if family.parent(role) else []
        planned[role] = {
            PayLevel.SGI_LEVEL: _consumption(blocks, PayLevel.SGI_LEVEL),
            PayLevel.BASIC_LEVEL: _consumption(blocks, PayLevel.BASIC_LEVEL),
        }

    planned_sgi = sum((p[PayLevel.SGI_LEVEL] for p in planned.values()), _ZERO)
    planned_basic = sum((p[PayLevel.BASIC_LEVEL] for p in planned.values()), _ZERO)
    sgi_days_used = planned_sgi + historical_sgi
    basic_days_used = planned_basic + historical_basic
    total_used = sgi_days_used + basic_days_used
    days_remaining = total_days - total_used

    consumption_by_role = {
        role: planned[role][PayLevel.SGI_LEVEL] + planned[role][PayLevel.BASIC_LEVEL] for role in ParentRole
    }

    projections = project_months(scenario, family, rules, months=months, today=today)
    leave_months = [m for m in projections if m.anyone_on_leave]
    total_on_leave = sum((m.household_income for m in leave_months), _ZERO)
    avg_income = total_on_leave / len(leave_months) if leave_months else _ZERO
    working_monthly = sum((p.monthly_gross_income for p in family.parents), _ZERO)
    total_working = working_monthly * len(leave_months)

    warnings = _build_warnings(
        family,
        rules,
        today,
        total_days,
        sgi_total,
        days_remaining,
        sgi_days_used,
        consumption_by_role,
    )

    logger.debug(
        "Scenario %r: used=%s remaining=%s leave_months=%s warnings=%s",
        scenario.name,
        total_used,
        days_remaining,
        len(leave_months),
        [w.kind.value for w in warnings],
    )

    return PlanSummary(
        total_days_available=total_days,
        total_days_used=total_used,
        days_remaining=days_remaining,
        historical_days=historical,
        sgi_days_used=sgi_days_used,
        basic_days_used=basic_days_used,
        parent1_sgi_days=planned[ParentRole.FIRST][PayLevel.SGI_LEVEL],
        parent1_basic_days=planned[ParentRole.FIRST][PayLevel.BASIC_LEVEL],
        parent2_sgi_days=planned[ParentRole.SECOND][PayLevel.SGI_LEVEL],
        parent2_basic_days=planned[ParentRole.SECOND][PayLevel.BASIC_LEVEL],
        leave_months=len(leave_months),
        avg_monthly_household_income=avg_income,
        total_income_on_leave=total_on_leave,
        total_income_working=total_working,
        warnings=tuple(warnings),
    )


def clear_projection_cache() -> None:
    _project.cache_clear()
