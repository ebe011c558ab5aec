# foraldradagar/core/types.py

"""
Result types returned by the calculators.

All results are frozen pydantic models so they can be returned directly from
the API and compared in tests. Money is Decimal and never rounded here;
rounding happens only in formatting.
"""

import datetime
import enum
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from foraldradagar.core.models import ParentRole

# Type aliases for common structures
MonetaryAmount = Decimal
LeaveDays = Decimal


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class DaySummary(_Result):
    """Day balances for a family (all remaining counts floored at zero)."""

    total_days: int
    sgi_level_total: int
    basic_level_total: int

    days_taken_total: int
    days_taken_parent1: int
    days_taken_parent2: int

    days_remaining_total: int
    days_remaining_sgi: int
    days_remaining_basic: int

    reserved_used_parent1: int
    reserved_used_parent2: int
    reserved_remaining_parent1: int
    reserved_remaining_parent2: int

    shared_days_remaining: int

    vab_days_this_year_parent1: int = 0
    vab_days_this_year_parent2: int = 0
    vab_days_remaining_parent1: int = 0
    vab_days_remaining_parent2: int = 0


class ParentIncome(_Result):
    role: ParentRole
    name: str
    monthly_gross_income: MonetaryAmount
    daily_rate: MonetaryAmount
    daily_vab_rate: MonetaryAmount
    monthly_on_leave: MonetaryAmount
    leave_income_percentage: Decimal
    monthly_with_top_up: MonetaryAmount | None = None
    top_up_months: int | None = None


class IncomeSummary(_Result):
    parents: tuple[ParentIncome, ...]
    household_monthly_working: MonetaryAmount
    household_monthly_both_on_leave: MonetaryAmount
    monthly_difference: MonetaryAmount

    def for_role(self, role: ParentRole) -> ParentIncome | None:
        return next((p for p in self.parents if p.role == role), None)

    @property
    def parent1(self) -> ParentIncome | None:
        return self.for_role(ParentRole.FIRST)

    @property
    def parent2(self) -> ParentIncome | None:
        return self.for_role(ParentRole.SECOND)


class DeadlineKind(str, enum.Enum):
    BIRTH = "birth"
    DOUBLE_DAYS = "double_days"
    SAVE_LIMIT = "save_limit"
    ALL_DAYS_EXPIRY = "all_days_expiry"


class DeadlineInfo(_Result):
    kind: DeadlineKind
    description: str
    date: datetime.date
    days_until: int
    is_urgent: bool


class MonthProjection(_Result):
    month: datetime.date
    parent1_on_leave: bool
    parent2_on_leave: bool
    parent1_income: MonetaryAmount
    parent2_income: MonetaryAmount
    household_income: MonetaryAmount

    @property
    def anyone_on_leave(self) -> bool:
        return self.parent1_on_leave or self.parent2_on_leave


class WarningKind(str, enum.Enum):
    OVER_ALLOCATED = "over_allocated"
    SGI_OVER_ALLOCATED = "sgi_over_allocated"
    RESERVED_DAYS_UNUSED = "reserved_days_unused"
    SAVE_LIMIT = "save_limit"


class PlanWarning(_Result):
    kind: WarningKind
    message: str
    is_urgent: bool


class PlanSummary(_Result):
    """
    Aggregated consumption for a scenario.

    days_remaining is not floored: a negative value means the plan uses more
    days than the family has.
    """

    total_days_available: int
    total_days_used: LeaveDays
    days_remaining: LeaveDays
    historical_days: int
    sgi_days_used: LeaveDays
    basic_days_used: LeaveDays
    parent1_sgi_days: LeaveDays
    parent1_basic_days: LeaveDays
    parent2_sgi_days: LeaveDays
    parent2_basic_days: LeaveDays
    leave_months: int
    avg_monthly_household_income: MonetaryAmount
    total_income_on_leave: MonetaryAmount
    total_income_working: MonetaryAmount
    warnings: tuple[PlanWarning, ...] = ()

    @property
    def parent1_days_used(self) -> LeaveDays:
        return self.parent1_sgi_days + self.parent1_basic_days

    @property
    def parent2_days_used(self) -> LeaveDays:
        return self.parent2_sgi_days + self.parent2_basic_days

    @property
    def cost_of_leave(self) -> MonetaryAmount:
        """Income lost over the leave months compared with both working."""
        return self.total_income_working - self.total_income_on_leave

    @property
    def has_urgent_warnings(self) -> bool:
        return any(w.is_urgent for w in self.warnings)
