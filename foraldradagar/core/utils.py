# foraldradagar/core/utils.py
import calendar
import datetime

from foraldradagar.core.constants import WEEKEND_WEEKDAYS


def get_today() -> datetime.date:
    """Dagens datum. Egen funktion så att tester kan patcha den."""
    return datetime.date.today()


def add_months(date: datetime.date, months: int) -> datetime.date:
    """
    Lägger till hela månader till ett datum.

    Dagen kläms till månadens sista dag när den inte finns
    (t ex 31 januari + 1 månad = 28/29 februari).
    """
    month_index = date.month - 1 + months
    year = date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(date.day, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def add_years(date: datetime.date, years: int) -> datetime.date:
    """Lägger till hela år. 29 februari blir 28 februari under icke-skottår."""
    return add_months(date, years * 12)


def month_start(date: datetime.date) -> datetime.date:
    return date.replace(day=1)


def iter_month_starts(start: datetime.date, count: int) -> list[datetime.date]:
    """Returnerar `count` månadsstarter från och med start-datumets månad."""
    first = month_start(start)
    return [add_months(first, offset) for offset in range(count)]


def months_between(start: datetime.date, end: datetime.date) -> int:
    """Antal hela månader från start till end (negativt om end < start)."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months


def count_weekdays(start: datetime.date, end: datetime.date) -> int:
    """
    Räknar måndag-fredag i det halvöppna intervallet [start, end).

    Hela veckor räknas direkt (fem vardagar per vecka), resten dag för dag.
    Returnerar 0 om end <= start.
    """
    total_days = (end - start).days
    if total_days <= 0:
        return 0

    full_weeks, rest = divmod(total_days, 7)
    count = full_weeks * 5
    current = start + datetime.timedelta(weeks=full_weeks)
    for _ in range(rest):
        if current.weekday() not in WEEKEND_WEEKDAYS:
            count += 1
        current += datetime.timedelta(days=1)
    return count


def whole_days_between(start: datetime.date, end: datetime.date) -> int:
    return (end - start).days
