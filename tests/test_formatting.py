import datetime
from decimal import Decimal

import pytest

from foraldradagar.core.formatting import (
    duration_description,
    format_currency,
    format_date,
    format_days,
    format_days_until,
    format_short_date,
    month_year_label,
    parent_name,
    percentage_display,
    truncate_kronor,
)
from foraldradagar.core.models import Family, LeaveBlock, Parent, ParentRole


class TestCurrency:
    def test_truncates_not_rounds(self):
        assert truncate_kronor(Decimal("26787.99")) == 26787
        assert format_currency(Decimal("26787.99")) == "26 787 kr"

    def test_thousands_separator(self):
        assert format_currency(Decimal("1234567.5")) == "1 234 567 kr"
        assert format_currency(Decimal("180")) == "180 kr"
        assert format_currency(Decimal("0")) == "0 kr"


class TestDays:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("2.5"), "2,5"),
            (Decimal("10.000"), "10"),
            (Decimal("0.125"), "0,125"),
            (130, "130"),
        ],
    )
    def test_format_days(self, value, expected):
        assert format_days(value) == expected

    @pytest.mark.parametrize(
        "days,expected",
        [
            (0, "Utgånget"),
            (-5, "Utgånget"),
            (10, "10 dagar"),
            (45, "1 mån och 15 dagar"),
            (60, "2 månader"),
            (365, "1 år"),
            (400, "1 år och 1 mån"),
        ],
    )
    def test_format_days_until(self, days, expected):
        assert format_days_until(days) == expected


class TestDates:
    def test_long_and_short(self):
        date = datetime.date(2027, 3, 14)
        assert format_date(date) == "14 mars 2027"
        assert format_short_date(date) == "14 mar 2027"
        assert month_year_label(date) == "Mar 27"


class TestLabels:
    def test_percentage_display(self):
        assert percentage_display(Decimal("1")) == "100%"
        assert percentage_display(Decimal("0.125")) == "12,5%"

    def test_duration_description(self):
        block = LeaveBlock(start_date=datetime.date(2026, 1, 5), end_date=datetime.date(2026, 7, 6))
        assert duration_description(block) == "6 mån, 130 dagar"

    def test_parent_name_defaults(self):
        family = Family(parents=(Parent(role=ParentRole.FIRST),))
        assert parent_name(family, ParentRole.FIRST) == "Förälder 1"
        assert parent_name(family, ParentRole.SECOND) == "Förälder 2"
        named = Family(parents=(Parent(name="Anna"),))
        assert parent_name(named, ParentRole.FIRST) == "Anna"
