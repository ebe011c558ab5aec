# foraldradagar/core/formatting.py
"""
Formatering för visning (svenska).

Avrundning sker bara här: belopp trunkeras till hela kronor.
"""

import datetime
from decimal import ROUND_DOWN, Decimal

from foraldradagar.core.constants import DEFAULT_PARENT1_NAME, DEFAULT_PARENT2_NAME, MONTH_NAMES
from foraldradagar.core.models import Family, LeaveBlock, ParentRole

PERCENTAGE_LABELS: dict[Decimal, str] = {
    Decimal("1"): "100%",
    Decimal("0.75"): "75%",
    Decimal("0.5"): "50%",
    Decimal("0.25"): "25%",
    Decimal("0.125"): "12,5%",
}


def truncate_kronor(amount: Decimal) -> int:
    """Trunkerar mot noll till hela kronor."""
    return int(Decimal(amount).quantize(Decimal(1), rounding=ROUND_DOWN))


def format_currency(amount: Decimal) -> str:
    """
    Formaterar ett belopp som "26 788 kr".

    Tusentalsavgränsare är mellanslag, inga decimaler.
    """
    return f"{truncate_kronor(amount):,}".replace(",", " ") + " kr"


def format_days(days: Decimal | int) -> str:
    """Antal dagar utan onödiga decimaler, med decimalkomma ("2,5")."""
    value = Decimal(days)
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f").replace(".", ",")


def format_days_until(days: int) -> str:
    """Svensk text för tid kvar, t ex "1 år och 2 mån" eller "Utgånget"."""
    if days <= 0:
        return "Utgånget"

    years = days // 365
    months = (days % 365) // 30
    remaining_days = days % 30

    if years > 0 and months > 0:
        return f"{years} år och {months} mån"
    if years > 0:
        return f"{years} år"
    if months > 0 and remaining_days > 0:
        return f"{months} mån och {remaining_days} dagar"
    if months > 0:
        return f"{months} månader"
    return f"{remaining_days} dagar"


def format_date(date: datetime.date) -> str:
    """Långt svenskt datum, t ex "14 mars 2027"."""
    return f"{date.day} {MONTH_NAMES[date.month - 1]} {date.year}"


def format_short_date(date: datetime.date) -> str:
    """Kort svenskt datum, t ex "14 mar 2027"."""
    return f"{date.day} {MONTH_NAMES[date.month - 1][:3]} {date.year}"


def month_label(date: datetime.date) -> str:
    """Kort månadsnamn, t ex "Mar"."""
    return MONTH_NAMES[date.month - 1][:3].capitalize()


def month_year_label(date: datetime.date) -> str:
    """Kort månad och år, t ex "Mar 27"."""
    return f"{month_label(date)} {date.year % 100:02d}"


def percentage_display(fraction: Decimal) -> str:
    return PERCENTAGE_LABELS.get(Decimal(fraction), f"{int(Decimal(fraction) * 100)}%")


def duration_description(block: LeaveBlock) -> str:
    """Kort beskrivning av ett block, t ex "6 mån, 130 dagar"."""
    return f"{block.months_span} mån, {int(block.days_consumed)} dagar"


def parent_name(family: Family, role: ParentRole) -> str:
    """Förälderns namn, eller "Förälder 1"/"Förälder 2" om namn saknas."""
    parent = family.parent(role)
    if parent and parent.name:
        return parent.name
    return DEFAULT_PARENT1_NAME if role == ParentRole.FIRST else DEFAULT_PARENT2_NAME
