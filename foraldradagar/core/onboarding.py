# foraldradagar/core/onboarding.py
"""
Conversion of onboarding answers into a Family snapshot.
"""

import datetime
import enum
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from foraldradagar.core.constants import WEEKEND_WEEKDAYS
from foraldradagar.core.logging_config import get_logger
from foraldradagar.core.models import (
    Child,
    ChildcarePlan,
    Family,
    KnowledgeLevel,
    LeaveDayRecord,
    LeaveType,
    Multiplicity,
    Parent,
    ParentRole,
    PayLevel,
    PlanningPriority,
)
from foraldradagar.core.utils import get_today

logger = get_logger(__name__)


class FamilyType(str, enum.Enum):
    TWO_PARENTS = "two_parents"
    SINGLE_PARENT = "single_parent"


class FamilyStage(str, enum.Enum):
    EXPECTING = "expecting"  # Väntar barn
    BORN = "born"  # Barnet är fött
    PLANNING = "planning"  # Planerar i förväg


class OnboardingParent(BaseModel):
    name: str = ""
    monthly_income: Decimal = Field(default=Decimal(0), ge=0)
    has_employer_top_up: bool = False
    top_up_percentage: int | None = Field(default=None, ge=0, le=100)
    top_up_months: int | None = Field(default=None, ge=0)


class OnboardingData(BaseModel):
    """Answers collected by the onboarding flow."""

    family_type: FamilyType = FamilyType.TWO_PARENTS
    stage: FamilyStage = FamilyStage.EXPECTING
    child_date: datetime.date | None = None
    multiplicity: Multiplicity = Multiplicity.SINGLE
    is_first_child: bool = True
    parent1: OnboardingParent = Field(default_factory=OnboardingParent)
    parent2: OnboardingParent | None = None
    days_taken_parent1: int = Field(default=0, ge=0)
    days_taken_parent2: int = Field(default=0, ge=0)
    priority: PlanningPriority | None = None
    childcare_plan: ChildcarePlan | None = None
    knowledge_level: KnowledgeLevel | None = None

    @model_validator(mode="after")
    def _check_parent2(self) -> "OnboardingData":
        if self.family_type == FamilyType.TWO_PARENTS and self.parent2 is None:
            raise ValueError("parent2 is required for a two-parent family")
        return self


def seed_days(count: int, child_birth_date: datetime.date, today: datetime.date) -> tuple[LeaveDayRecord, ...]:
    """
    Skapar platshållardagar för redan uttagna dagar.

    Dagarna läggs bakåt från idag, bara vardagar och aldrig före barnets
    födelsedatum. Finns inte tillräckligt många vardagar mellan födseln och
    idag skapas så många som får plats.
    """
    days: list[LeaveDayRecord] = []
    current = today
    while len(days) < count and current >= child_birth_date:
        if current.weekday() not in WEEKEND_WEEKDAYS:
            days.append(
                LeaveDayRecord(
                    date=current,
                    leave_type=LeaveType.PARENTAL_LEAVE,
                    pay_level=PayLevel.SGI_LEVEL,
                    is_planned=False,
                )
            )
        current -= datetime.timedelta(days=1)

    if len(days) < count:
        logger.warning(
            f"Only {len(days)} of {count} taken days fit between birth {child_birth_date} and {today}"
        )
    return tuple(days)


def _build_parent(
    data: OnboardingParent,
    role: ParentRole,
    days_taken: int,
    child_date: datetime.date,
    today: datetime.date,
) -> Parent:
    top_up_percentage = data.top_up_percentage if data.has_employer_top_up else None
    top_up_months = data.top_up_months if data.has_employer_top_up else None
    return Parent(
        name=data.name,
        monthly_gross_income=data.monthly_income,
        employer_top_up_percentage=top_up_percentage,
        employer_top_up_months=top_up_months,
        role=role,
        leave_days=seed_days(days_taken, child_date, today) if days_taken > 0 else (),
    )


def convert(data: OnboardingData, today: datetime.date | None = None) -> Family:
    """
    Bygger en Family av onboarding-svaren.

    Saknas barnets datum används dagens datum.
    """
    today = today or get_today()
    child_date = data.child_date or today

    parents = [_build_parent(data.parent1, ParentRole.FIRST, data.days_taken_parent1, child_date, today)]
    if data.family_type == FamilyType.TWO_PARENTS and data.parent2 is not None:
        parents.append(_build_parent(data.parent2, ParentRole.SECOND, data.days_taken_parent2, child_date, today))

    child = Child(
        birth_date=child_date,
        is_born=data.stage == FamilyStage.BORN,
        multiplicity=data.multiplicity,
        is_first_child=data.is_first_child,
    )

    logger.info(
        "Converted onboarding answers",
        extra={
            "extra_fields": {
                "family_type": data.family_type.value,
                "stage": data.stage.value,
                "multiplicity": data.multiplicity.value,
            }
        },
    )

    return Family(
        parents=tuple(parents),
        children=(child,),
        planning_priority=data.priority,
        childcare_plan=data.childcare_plan,
        knowledge_level=data.knowledge_level,
    )
