"""
Tests for family snapshots and leave blocks.
"""

import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from foraldradagar.core.models import (
    Child,
    Family,
    LeaveBlock,
    LeaveType,
    Multiplicity,
    Parent,
    ParentRole,
    PayLevel,
    Scenario,
)
from foraldradagar.core.utils import add_months, add_years, count_weekdays, iter_month_starts, months_between

from conftest import weekday_records

MONDAY = datetime.date(2026, 1, 5)


class TestLeaveBlock:
    def test_two_full_weeks(self):
        block = LeaveBlock(start_date=MONDAY, end_date=MONDAY + datetime.timedelta(days=14))
        assert block.calendar_days == 14
        assert block.weekdays == 10
        assert block.days_consumed == Decimal("10")

    def test_part_time_consumption(self):
        block = LeaveBlock(
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=14),
            fraction=Decimal("0.5"),
        )
        assert block.days_consumed == Decimal("5")

    def test_half_year_block(self):
        block = LeaveBlock(start_date=MONDAY, end_date=datetime.date(2026, 7, 6))
        assert block.weekdays == 130
        assert block.months_span == 6

    @pytest.mark.parametrize("offset", range(7))
    def test_full_week_consumes_five_days_from_any_start(self, offset):
        start = MONDAY + datetime.timedelta(days=offset)
        block = LeaveBlock(start_date=start, end_date=start + datetime.timedelta(days=7))

        assert block.weekdays == 5
        assert block.days_consumed == Decimal("5")

    def test_weekend_only_block_consumes_nothing(self):
        saturday = datetime.date(2026, 1, 3)
        block = LeaveBlock(start_date=saturday, end_date=saturday + datetime.timedelta(days=2))
        assert block.days_consumed == 0

    def test_empty_block_is_allowed(self):
        block = LeaveBlock(start_date=MONDAY, end_date=MONDAY)
        assert block.calendar_days == 0
        assert block.days_consumed == 0

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="before start_date"):
            LeaveBlock(start_date=MONDAY, end_date=MONDAY - datetime.timedelta(days=1))

    @pytest.mark.parametrize("fraction", ["0.3", "0", "1.5"])
    def test_fraction_outside_levels_rejected(self, fraction):
        with pytest.raises(ValidationError, match="fraction"):
            LeaveBlock(start_date=MONDAY, end_date=MONDAY, fraction=Decimal(fraction))

    def test_unpaid_block_rejected(self):
        with pytest.raises(ValidationError):
            LeaveBlock(start_date=MONDAY, end_date=MONDAY, pay_level=PayLevel.NONE)

    def test_unknown_enum_value_rejected(self):
        with pytest.raises(ValidationError):
            LeaveBlock(start_date=MONDAY, end_date=MONDAY, pay_level="premium")


class TestScenario:
    def test_same_parent_overlap_rejected(self):
        with pytest.raises(ValidationError, match="overlapping"):
            Scenario(
                blocks=(
                    LeaveBlock(start_date=MONDAY, end_date=datetime.date(2026, 2, 2)),
                    LeaveBlock(start_date=datetime.date(2026, 1, 26), end_date=datetime.date(2026, 3, 2)),
                )
            )

    def test_cross_parent_overlap_allowed(self):
        scenario = Scenario(
            blocks=(
                LeaveBlock(start_date=MONDAY, end_date=datetime.date(2026, 2, 2), role=ParentRole.FIRST),
                LeaveBlock(start_date=MONDAY, end_date=datetime.date(2026, 2, 2), role=ParentRole.SECOND),
            )
        )
        assert len(scenario.parent1_blocks) == 1
        assert len(scenario.parent2_blocks) == 1

    def test_adjacent_blocks_do_not_overlap(self):
        scenario = Scenario(
            blocks=(
                LeaveBlock(start_date=datetime.date(2026, 2, 2), end_date=datetime.date(2026, 3, 2)),
                LeaveBlock(start_date=MONDAY, end_date=datetime.date(2026, 2, 2)),
            )
        )
        assert [b.start_date for b in scenario.sorted_blocks] == [MONDAY, datetime.date(2026, 2, 2)]


class TestFamily:
    def test_negative_income_rejected(self):
        with pytest.raises(ValidationError):
            Parent(monthly_gross_income=Decimal("-1"))

    def test_duplicate_roles_rejected(self):
        with pytest.raises(ValidationError, match="role"):
            Family(parents=(Parent(role=ParentRole.FIRST), Parent(role=ParentRole.FIRST)))

    def test_more_than_three_scenarios_rejected(self):
        with pytest.raises(ValidationError, match="scenarios"):
            Family(scenarios=tuple(Scenario(id=i, name=f"Plan {i}") for i in range(4)))

    def test_first_child_is_oldest(self):
        family = Family(
            children=(
                Child(birth_date=datetime.date(2026, 5, 1)),
                Child(birth_date=datetime.date(2023, 5, 1), multiplicity=Multiplicity.TWINS),
            )
        )
        assert family.first_child.birth_date == datetime.date(2023, 5, 1)

    def test_single_parent(self, single_parent_family, two_parent_family):
        assert single_parent_family.is_single_parent
        assert single_parent_family.parent2 is None
        assert not two_parent_family.is_single_parent

    def test_snapshots_are_hashable(self, two_parent_family):
        assert hash(two_parent_family) == hash(two_parent_family.model_copy())

    def test_day_counts_split_by_type_and_status(self):
        days = (
            weekday_records(5)
            + weekday_records(3, start=datetime.date(2026, 3, 2), leave_type=LeaveType.VAB)
            + weekday_records(2, start=datetime.date(2026, 5, 4), is_planned=True)
            + weekday_records(4, start=datetime.date(2025, 3, 3), leave_type=LeaveType.VAB)
        )
        parent = Parent(leave_days=days)
        assert parent.days_taken == 12
        assert parent.days_planned == 2
        assert parent.foraldra_days_taken == 5
        assert parent.vab_days_taken == 7
        assert parent.vab_days_in_year(2026) == 3

    def test_top_up_requires_both_fields(self):
        assert not Parent(employer_top_up_percentage=10).has_employer_top_up
        assert Parent(employer_top_up_percentage=10, employer_top_up_months=6).has_employer_top_up


class TestDateUtils:
    def test_count_weekdays(self):
        assert count_weekdays(MONDAY, MONDAY + datetime.timedelta(days=7)) == 5
        assert count_weekdays(datetime.date(2026, 1, 9), datetime.date(2026, 1, 10)) == 1  # fredag
        assert count_weekdays(datetime.date(2026, 1, 10), datetime.date(2026, 1, 12)) == 0  # helg
        assert count_weekdays(MONDAY, MONDAY) == 0
        assert count_weekdays(MONDAY, MONDAY - datetime.timedelta(days=3)) == 0

    def test_add_months_clamps_day(self):
        assert add_months(datetime.date(2026, 1, 31), 1) == datetime.date(2026, 2, 28)
        assert add_months(datetime.date(2025, 11, 30), 15) == datetime.date(2027, 2, 28)

    def test_add_years_leap_day(self):
        assert add_years(datetime.date(2024, 2, 29), 1) == datetime.date(2025, 2, 28)
        assert add_years(datetime.date(2024, 2, 29), 4) == datetime.date(2028, 2, 29)

    def test_months_between(self):
        assert months_between(MONDAY, datetime.date(2026, 7, 6)) == 6
        assert months_between(datetime.date(2026, 1, 31), datetime.date(2026, 2, 28)) == 0

    def test_iter_month_starts(self):
        assert iter_month_starts(datetime.date(2026, 11, 17), 3) == [
            datetime.date(2026, 11, 1),
            datetime.date(2026, 12, 1),
            datetime.date(2027, 1, 1),
        ]
