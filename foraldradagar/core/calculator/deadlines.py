"""Deadlines räknade från barnets födelsedatum."""

import datetime

from foraldradagar.core.constants import URGENT_DAYS_ALL_EXPIRY, URGENT_DAYS_BIRTH, URGENT_DAYS_SAVE_LIMIT
from foraldradagar.core.models import Child, Family, RuleConstants
from foraldradagar.core.types import DeadlineInfo, DeadlineKind
from foraldradagar.core.utils import add_months, add_years, get_today, whole_days_between

DEADLINE_DESCRIPTIONS: dict[DeadlineKind, str] = {
    DeadlineKind.BIRTH: "Beräknad födsel",
    DeadlineKind.DOUBLE_DAYS: "Dubbeldagar löper ut",
    DeadlineKind.SAVE_LIMIT: "SGI-dagar löper ut",
    DeadlineKind.ALL_DAYS_EXPIRY: "Alla dagar löper ut",
}

URGENT_THRESHOLD_DAYS: dict[DeadlineKind, int] = {
    DeadlineKind.BIRTH: URGENT_DAYS_BIRTH,
    DeadlineKind.DOUBLE_DAYS: URGENT_DAYS_SAVE_LIMIT,
    DeadlineKind.SAVE_LIMIT: URGENT_DAYS_SAVE_LIMIT,
    DeadlineKind.ALL_DAYS_EXPIRY: URGENT_DAYS_ALL_EXPIRY,
}


def save_limit_date(birth_date: datetime.date, rules: RuleConstants) -> datetime.date:
    """Barnets 4-årsdag: därefter får bara ett begränsat antal dagar sparas."""
    return add_years(birth_date, rules.save_limit_age)


def all_days_expiry_date(birth_date: datetime.date, rules: RuleConstants) -> datetime.date:
    """Barnets 12-årsdag: alla kvarvarande dagar förfaller."""
    return add_years(birth_date, rules.all_days_expiry_age)


def double_days_expiry_date(birth_date: datetime.date, rules: RuleConstants) -> datetime.date:
    """Dubbeldagar kan tas ut tills barnet är 15 månader."""
    return add_months(birth_date, rules.double_days_max_child_age_months)


def days_until(date: datetime.date, today: datetime.date | None = None) -> int:
    """Hela dagar kvar till datumet. Aldrig negativt: ett passerat datum ger 0."""
    return max(0, whole_days_between(today or get_today(), date))


def _deadline(kind: DeadlineKind, date: datetime.date, today: datetime.date) -> DeadlineInfo:
    remaining = days_until(date, today)
    return DeadlineInfo(
        kind=kind,
        description=DEADLINE_DESCRIPTIONS[kind],
        date=date,
        days_until=remaining,
        is_urgent=remaining < URGENT_THRESHOLD_DAYS[kind],
    )


def next_deadline(
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
) -> DeadlineInfo | None:
    """
    Nästa deadline att visa på översikten.

    - Ej fött barn med datum framåt: födseln är nästa deadline.
    - Annars 4-årsgränsen om den ligger framför och före 12-årsgränsen.
    - Annars 12-årsgränsen om den ligger framför.
    - Annars None (inga deadlines kvar, eller inget barn).
    """
    child = family.first_child
    if child is None:
        return None
    today = today or get_today()

    if not child.is_born and child.birth_date > today:
        return _deadline(DeadlineKind.BIRTH, child.birth_date, today)

    save_limit = save_limit_date(child.birth_date, rules)
    all_expiry = all_days_expiry_date(child.birth_date, rules)
    save_days = days_until(save_limit, today)
    all_days = days_until(all_expiry, today)

    if 0 < save_days < all_days:
        return _deadline(DeadlineKind.SAVE_LIMIT, save_limit, today)

    if all_days > 0:
        return _deadline(DeadlineKind.ALL_DAYS_EXPIRY, all_expiry, today)

    return None


def all_deadlines(
    child: Child,
    rules: RuleConstants,
    today: datetime.date | None = None,
    include_passed: bool = False,
) -> list[DeadlineInfo]:
    """
    Alla deadlines för ett barn, sorterade på datum.

    Args:
        child: Barnet
        rules: Regeltabell
        today: Referensdatum (default: idag)
        include_passed: Ta med deadlines som redan passerat (days_until = 0)
    """
    today = today or get_today()
    dates = [
        (DeadlineKind.DOUBLE_DAYS, double_days_expiry_date(child.birth_date, rules)),
        (DeadlineKind.SAVE_LIMIT, save_limit_date(child.birth_date, rules)),
        (DeadlineKind.ALL_DAYS_EXPIRY, all_days_expiry_date(child.birth_date, rules)),
    ]
    if not child.is_born:
        dates.insert(0, (DeadlineKind.BIRTH, child.birth_date))

    return [
        _deadline(kind, date, today)
        for kind, date in sorted(dates, key=lambda item: item[1])
        if include_passed or date >= today
    ]
