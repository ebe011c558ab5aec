"""
Tests for föräldrapenning and VAB compensation amounts.

Reference: income 35 000 kr/mån gives 420 000 × 0,97 × 0,80 / 365 ≈ 892,93 kr/dag.
"""

from decimal import Decimal

import pytest

from foraldradagar.core.calculator import (
    calculate_income,
    daily_rate_for,
    daily_sgi_payment,
    daily_vab_payment,
    leave_income_percentage,
    max_daily_sgi,
    max_daily_vab,
    monthly_on_leave,
    monthly_with_top_up,
)
from foraldradagar.core.formatting import format_currency, truncate_kronor
from foraldradagar.core.models import Family, Parent, ParentRole, PayLevel

CENT = Decimal("0.01")


def approx(value: Decimal, expected: str, tolerance: Decimal = CENT) -> bool:
    return abs(value - Decimal(expected)) < tolerance


class TestDailySgiPayment:
    def test_below_cap(self, rules):
        assert approx(daily_sgi_payment(Decimal("35000"), rules), "892.93")

    def test_above_cap_is_capped(self, rules):
        daily = daily_sgi_payment(Decimal("60000"), rules)
        assert approx(daily, "1258.61")
        assert daily == daily_sgi_payment(Decimal("100000"), rules)

    def test_zero_income(self, rules):
        assert daily_sgi_payment(Decimal("0"), rules) == 0

    def test_negative_income_treated_as_zero(self, rules):
        assert daily_sgi_payment(Decimal("-5000"), rules) == 0

    def test_monotonic_in_income(self, rules):
        incomes = [Decimal(i) for i in range(0, 80001, 5000)]
        rates = [daily_sgi_payment(i, rules) for i in incomes]
        assert rates == sorted(rates)

    def test_rule_year_changes_cap(self, rules, rules_2025):
        assert approx(daily_sgi_payment(Decimal("60000"), rules_2025), "1250.10")
        assert daily_sgi_payment(Decimal("60000"), rules_2025) < daily_sgi_payment(Decimal("60000"), rules)

    def test_max_daily_sgi_matches_cap(self, rules):
        assert approx(max_daily_sgi(rules), "1258.61")

    @pytest.mark.parametrize("income", ["0", "12345.67", "35000", "49333", "60000"])
    def test_repeated_calls_are_identical(self, rules, income):
        first = daily_sgi_payment(Decimal(income), rules)
        second = daily_sgi_payment(Decimal(income), rules)

        assert first.as_tuple() == second.as_tuple()
        assert daily_vab_payment(Decimal(income), rules).as_tuple() == daily_vab_payment(Decimal(income), rules).as_tuple()


class TestVabPayment:
    def test_below_both_caps_equals_sgi(self, rules):
        income = Decimal("35000")
        assert daily_vab_payment(income, rules) == daily_sgi_payment(income, rules)

    def test_vab_cap_is_lower(self, rules):
        income = Decimal("60000")
        assert approx(daily_vab_payment(income, rules), "943.96")
        assert daily_vab_payment(income, rules) < daily_sgi_payment(income, rules)

    def test_max_daily_vab(self, rules):
        assert max_daily_vab(rules) < max_daily_sgi(rules)


class TestMonthlyAmounts:
    def test_monthly_on_leave_uses_thirty_days(self, rules):
        income = Decimal("35000")
        assert monthly_on_leave(income, rules) == daily_sgi_payment(income, rules) * 30
        assert truncate_kronor(monthly_on_leave(income, rules)) == 26787
        assert format_currency(monthly_on_leave(income, rules)) == "26 787 kr"

    def test_top_up(self):
        assert monthly_with_top_up(Decimal("35000"), 10) == Decimal("3500")
        assert monthly_with_top_up(Decimal("35000"), 0) == 0

    def test_leave_income_percentage(self, rules):
        assert approx(leave_income_percentage(Decimal("35000"), rules), "76.54")
        assert leave_income_percentage(Decimal("0"), rules) == 0

    @pytest.mark.parametrize(
        "pay_level,expected",
        [
            (PayLevel.SGI_LEVEL, "892.93"),
            (PayLevel.BASIC_LEVEL, "180"),
            (PayLevel.NONE, "0"),
        ],
    )
    def test_daily_rate_for(self, rules, pay_level, expected):
        assert approx(daily_rate_for(pay_level, Decimal("35000"), rules), expected)


class TestCalculateIncome:
    def test_two_parents(self, rules, two_parent_family):
        income = calculate_income(two_parent_family, rules)

        assert income.household_monthly_working == Decimal("80000")
        assert income.parent1.name == "Anna"
        assert income.parent2.name == "Erik"
        assert approx(income.parent1.daily_rate, "892.93")
        assert income.household_monthly_both_on_leave == (
            income.parent1.monthly_on_leave + income.parent2.monthly_on_leave
        )
        assert income.monthly_difference == (
            income.household_monthly_working - income.household_monthly_both_on_leave
        )
        assert income.parent1.monthly_with_top_up is None

    def test_single_parent(self, rules, single_parent_family):
        income = calculate_income(single_parent_family, rules)
        assert len(income.parents) == 1
        assert income.parent2 is None
        assert income.household_monthly_working == Decimal("30000")

    def test_parents_ordered_by_role(self, rules):
        family = Family(
            parents=(
                Parent(name="B", role=ParentRole.SECOND),
                Parent(name="A", role=ParentRole.FIRST),
            )
        )
        assert [p.name for p in calculate_income(family, rules).parents] == ["A", "B"]

    def test_employer_top_up(self, rules):
        family = Family(
            parents=(
                Parent(
                    monthly_gross_income=Decimal("40000"),
                    employer_top_up_percentage=10,
                    employer_top_up_months=6,
                ),
            )
        )
        parent = calculate_income(family, rules).parent1
        assert parent.monthly_with_top_up == Decimal("4000")
        assert parent.top_up_months == 6

    def test_zero_income_parent(self, rules):
        family = Family(parents=(Parent(monthly_gross_income=Decimal("0")),))
        parent = calculate_income(family, rules).parent1
        assert parent.daily_rate == 0
        assert parent.leave_income_percentage == 0
