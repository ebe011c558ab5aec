# foraldradagar/core/models.py
"""
Pydantic models for rule tables and family snapshots.

All snapshots are frozen: the calculators treat them as immutable input and
never mutate them. Enum string values only matter at the JSON/database
boundary.
"""

import datetime
import enum
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from foraldradagar.core.constants import MAX_PARENTS_PER_FAMILY, MAX_SCENARIOS_PER_FAMILY
from foraldradagar.core.utils import count_weekdays, months_between

#: Tillåtna uttagsnivåer för en ledighetsperiod (andel av en hel dag).
PART_TIME_LEVELS: tuple[Decimal, ...] = (
    Decimal("1"),
    Decimal("0.75"),
    Decimal("0.5"),
    Decimal("0.25"),
    Decimal("0.125"),
)


class LeaveType(str, enum.Enum):
    """Type of a logged leave day."""

    PARENTAL_LEAVE = "foraldrapenning"  # Föräldrapenning
    VAB = "vab"  # Vård av barn - separat system, egna dagar
    UNPAID = "unpaid"  # Obetald ledighet


class PayLevel(str, enum.Enum):
    """Compensation tier."""

    SGI_LEVEL = "sgi_level"  # Sjukpenningnivå, ~80 % av SGI med tak
    BASIC_LEVEL = "basic_level"  # Lägstanivå, fast belopp per dag
    NONE = "none"  # Ingen ersättning


class Multiplicity(str, enum.Enum):
    SINGLE = "single"
    TWINS = "twins"
    TRIPLETS = "triplets_or_more"


class ParentRole(str, enum.Enum):
    """Ordinal role of a parent. Only affects display, never entitlement math."""

    FIRST = "parent1"
    SECOND = "parent2"


class PlanningPriority(str, enum.Enum):
    MAXIMIZE_INCOME = "maximize_income"
    EQUAL_SPLIT = "equal_split"
    MAX_TIME = "max_time"
    UNSURE = "unsure"


class ChildcarePlan(str, enum.Enum):
    EARLY = "early"  # Förskola runt 1 år
    EXTENDED = "extended"  # Hemma 2-3 år
    UNDECIDED = "undecided"


class KnowledgeLevel(str, enum.Enum):
    BEGINNER = "beginner"
    SOME = "some"
    GOOD = "good"


# ==========================
# Regeltabell
# ==========================


class RuleConstants(BaseModel):
    """All numeric policy parameters for one rule-year."""

    model_config = ConfigDict(frozen=True)

    year: int
    prisbasbelopp: Decimal = Field(gt=0)
    sgi_cap_multiplier: Decimal = Field(gt=0)
    vab_cap_multiplier: Decimal = Field(gt=0)
    sgi_factor_karens: Decimal = Field(gt=0, le=1)
    sgi_factor_rate: Decimal = Field(gt=0, le=1)
    grundniva_daily: Decimal = Field(ge=0)
    lagstaniva_daily: Decimal = Field(ge=0)
    work_days_required_for_sgi: int

    total_days_per_child: int = Field(gt=0)
    sgi_level_days: int = Field(ge=0)
    lagstaniva_days: int = Field(ge=0)
    reserved_days_per_parent: int = Field(ge=0)
    shared_days: int = Field(ge=0)
    twin_extra_days: int = Field(ge=0)
    triplet_extra_days: int = Field(ge=0)
    min_sgi_days_before_lagsta: int = Field(ge=0)

    double_days_count: int = Field(ge=0)
    double_days_max_child_age_months: int = Field(gt=0)
    max_days_to_non_parent: int = Field(ge=0)
    max_days_to_non_parent_sole_custodian: int = Field(ge=0)

    save_limit_age: int = Field(gt=0)
    max_days_saveable_after_age_4: int = Field(ge=0)
    max_days_saveable_after_age_4_twins: int = Field(ge=0)
    all_days_expiry_age: int = Field(gt=0)
    retroactive_application_max_days: int = Field(ge=0)

    vab_days_per_child_per_year: int = Field(ge=0)
    vab_retroactive_application_max_days: int = Field(ge=0)
    vab_min_age_months: int = Field(ge=0)
    vab_max_age_years: int = Field(gt=0)
    vab_serious_illness_max_age: int = Field(gt=0)

    part_time_levels: tuple[Decimal, ...] = PART_TIME_LEVELS
    weekend_rule_effective: datetime.date

    @model_validator(mode="after")
    def _check_invariants(self) -> "RuleConstants":
        if self.total_days_per_child != self.sgi_level_days + self.lagstaniva_days:
            raise ValueError(
                f"total_days_per_child ({self.total_days_per_child}) must equal "
                f"sgi_level_days + lagstaniva_days ({self.sgi_level_days} + {self.lagstaniva_days})"
            )
        if self.shared_days != self.total_days_per_child - 2 * self.reserved_days_per_parent:
            raise ValueError(
                f"shared_days ({self.shared_days}) must equal total_days_per_child - "
                f"2 * reserved_days_per_parent"
            )
        if self.vab_cap_multiplier >= self.sgi_cap_multiplier:
            raise ValueError("VAB cap must be strictly lower than the föräldrapenning cap")
        if self.save_limit_age >= self.all_days_expiry_age:
            raise ValueError("save_limit_age must be lower than all_days_expiry_age")
        # LeaveBlock validates fractions without a rule table, so the levels are fixed
        if set(self.part_time_levels) != set(PART_TIME_LEVELS):
            allowed = ", ".join(str(level) for level in PART_TIME_LEVELS)
            raise ValueError(f"part_time_levels must be exactly {allowed}")
        return self

    @property
    def sgi_cap(self) -> Decimal:
        """SGI-tak för föräldrapenning per år (10 × prisbasbelopp)."""
        return self.sgi_cap_multiplier * self.prisbasbelopp

    @property
    def vab_sgi_cap(self) -> Decimal:
        """SGI-tak för VAB per år (7,5 × prisbasbelopp). Lägre än sgi_cap."""
        return self.vab_cap_multiplier * self.prisbasbelopp

    @property
    def sgi_cap_monthly(self) -> Decimal:
        return self.sgi_cap / 12

    @property
    def vab_sgi_cap_monthly(self) -> Decimal:
        return self.vab_sgi_cap / 12

    def extra_days_for(self, multiplicity: Multiplicity) -> int:
        """Flat bonus days for multiple births (additive, not multiplicative)."""
        if multiplicity == Multiplicity.TWINS:
            return self.twin_extra_days
        if multiplicity == Multiplicity.TRIPLETS:
            return self.triplet_extra_days
        return 0

    def total_days(self, multiplicity: Multiplicity) -> int:
        return self.total_days_per_child + self.extra_days_for(multiplicity)

    def sgi_level_total(self, multiplicity: Multiplicity) -> int:
        """SGI-level days; the multiple-birth bonus extends this tier."""
        return self.sgi_level_days + self.extra_days_for(multiplicity)

    def max_days_saveable(self, multiplicity: Multiplicity) -> int:
        if multiplicity == Multiplicity.SINGLE:
            return self.max_days_saveable_after_age_4
        return self.max_days_saveable_after_age_4_twins


# ==========================
# Familj
# ==========================


class LeaveDayRecord(BaseModel):
    """A single logged or planned day."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    date: datetime.date
    leave_type: LeaveType = LeaveType.PARENTAL_LEAVE
    pay_level: PayLevel = PayLevel.SGI_LEVEL
    is_planned: bool = False


class Parent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str = ""
    monthly_gross_income: Decimal = Field(default=Decimal(0), ge=0)
    employer_top_up_percentage: int | None = Field(default=None, ge=0, le=100)
    employer_top_up_months: int | None = Field(default=None, ge=0)
    role: ParentRole = ParentRole.FIRST
    leave_days: tuple[LeaveDayRecord, ...] = ()

    @property
    def has_employer_top_up(self) -> bool:
        return self.employer_top_up_percentage is not None and self.employer_top_up_months is not None

    @property
    def days_taken(self) -> int:
        return sum(1 for d in self.leave_days if not d.is_planned)

    @property
    def days_planned(self) -> int:
        return sum(1 for d in self.leave_days if d.is_planned)

    @property
    def foraldra_days_taken(self) -> int:
        """Actual (not planned) föräldrapenning days."""
        return sum(
            1 for d in self.leave_days if not d.is_planned and d.leave_type == LeaveType.PARENTAL_LEAVE
        )

    @property
    def vab_days_taken(self) -> int:
        return sum(1 for d in self.leave_days if not d.is_planned and d.leave_type == LeaveType.VAB)

    def vab_days_in_year(self, year: int) -> int:
        return sum(
            1
            for d in self.leave_days
            if not d.is_planned and d.leave_type == LeaveType.VAB and d.date.year == year
        )


class Child(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str | None = None
    birth_date: datetime.date
    is_born: bool = False
    multiplicity: Multiplicity = Multiplicity.SINGLE
    is_first_child: bool = True


class LeaveBlock(BaseModel):
    """A continuous period of leave for one parent within a scenario.

    ``end_date`` is exclusive. Only Monday to Friday consume days; weekends
    never do, regardless of the adjacent-workday rule.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    start_date: datetime.date
    end_date: datetime.date
    role: ParentRole = ParentRole.FIRST
    pay_level: PayLevel = PayLevel.SGI_LEVEL
    fraction: Decimal = Decimal("1")

    @field_validator("fraction")
    @classmethod
    def _fraction_is_part_time_level(cls, value: Decimal) -> Decimal:
        if value not in PART_TIME_LEVELS:
            allowed = ", ".join(str(level) for level in PART_TIME_LEVELS)
            raise ValueError(f"fraction must be one of {allowed}, got {value}")
        return value

    @field_validator("pay_level")
    @classmethod
    def _pay_level_is_paid(cls, value: PayLevel) -> PayLevel:
        if value == PayLevel.NONE:
            raise ValueError("leave blocks must be planned at sgi_level or basic_level")
        return value

    @model_validator(mode="after")
    def _check_interval(self) -> "LeaveBlock":
        if self.end_date < self.start_date:
            raise ValueError(f"end_date {self.end_date} is before start_date {self.start_date}")
        return self

    @property
    def calendar_days(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def weekdays(self) -> int:
        """Monday to Friday in [start_date, end_date)."""
        return count_weekdays(self.start_date, self.end_date)

    @property
    def days_consumed(self) -> Decimal:
        """Föräldrapenningdagar consumed (weekdays × fraction)."""
        return self.weekdays * self.fraction

    @property
    def months_span(self) -> int:
        return max(1, months_between(self.start_date, self.end_date))

    def overlaps(self, other: "LeaveBlock") -> bool:
        return self.start_date < other.end_date and other.start_date < self.end_date


class Scenario(BaseModel):
    """A named leave plan.

    Blocks of the same parent may not overlap. Blocks of different parents
    may (that is how double days are planned) and their consumption adds up.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str = "Plan 1"
    blocks: tuple[LeaveBlock, ...] = ()

    @model_validator(mode="after")
    def _reject_same_parent_overlaps(self) -> "Scenario":
        for role in ParentRole:
            own = self.blocks_for(role)
            for previous, current in zip(own, own[1:]):
                if previous.overlaps(current):
                    raise ValueError(
                        f"overlapping leave blocks for {role.value}: "
                        f"{previous.start_date}–{previous.end_date} and "
                        f"{current.start_date}–{current.end_date}"
                    )
        return self

    @property
    def sorted_blocks(self) -> list[LeaveBlock]:
        return sorted(self.blocks, key=lambda b: b.start_date)

    def blocks_for(self, role: ParentRole) -> list[LeaveBlock]:
        return [b for b in self.sorted_blocks if b.role == role]

    @property
    def parent1_blocks(self) -> list[LeaveBlock]:
        return self.blocks_for(ParentRole.FIRST)

    @property
    def parent2_blocks(self) -> list[LeaveBlock]:
        return self.blocks_for(ParentRole.SECOND)


class Family(BaseModel):
    """Root snapshot. Owns parents, children and scenarios."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    parents: tuple[Parent, ...] = ()
    children: tuple[Child, ...] = ()
    scenarios: tuple[Scenario, ...] = ()

    # Preferenser från onboarding (används av rådgivningstexten)
    planning_priority: PlanningPriority | None = None
    childcare_plan: ChildcarePlan | None = None
    knowledge_level: KnowledgeLevel | None = None

    @model_validator(mode="after")
    def _check_family(self) -> "Family":
        if len(self.parents) > MAX_PARENTS_PER_FAMILY:
            raise ValueError(f"a family has at most {MAX_PARENTS_PER_FAMILY} parents")
        roles = [p.role for p in self.parents]
        if len(roles) != len(set(roles)):
            raise ValueError("each parent role may only occur once")
        if len(self.scenarios) > MAX_SCENARIOS_PER_FAMILY:
            raise ValueError(f"a family has at most {MAX_SCENARIOS_PER_FAMILY} scenarios")
        return self

    def parent(self, role: ParentRole) -> Parent | None:
        return next((p for p in self.parents if p.role == role), None)

    @property
    def parent1(self) -> Parent | None:
        return self.parent(ParentRole.FIRST)

    @property
    def parent2(self) -> Parent | None:
        return self.parent(ParentRole.SECOND)

    @property
    def is_single_parent(self) -> bool:
        return len(self.parents) <= 1

    @property
    def first_child(self) -> Child | None:
        """The child that drives all deadline and day-total math."""
        if not self.children:
            return None
        return min(self.children, key=lambda c: c.birth_date)

    def scenario(self, scenario_id: int) -> Scenario | None:
        return next((s for s in self.scenarios if s.id == scenario_id), None)
