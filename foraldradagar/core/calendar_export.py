"""Generering av iCal-filer med deadlines och ledighetsblock."""

import datetime

from icalendar import Calendar, Event

from foraldradagar.core.calculator import all_deadlines
from foraldradagar.core.formatting import format_days, parent_name, percentage_display
from foraldradagar.core.models import Family, LeaveBlock, PayLevel, RuleConstants, Scenario
from foraldradagar.core.types import DeadlineInfo
from foraldradagar.core.utils import get_today

# Mappning av ersättningsnivåer till svenska namn
PAY_LEVEL_NAMES: dict[PayLevel, str] = {
    PayLevel.SGI_LEVEL: "Sjukpenningnivå",
    PayLevel.BASIC_LEVEL: "Lägstanivå",
    PayLevel.NONE: "Ingen ersättning",
}


def generate_ical(
    family: Family,
    rules: RuleConstants,
    scenario: Scenario | None = None,
    today: datetime.date | None = None,
) -> str:
    """
    Genererar en iCal-fil för en familj.

    Args:
        family: Familjens ögonblicksbild
        rules: Regeltabell
        scenario: Plan vars block ska tas med (valfri)
        today: Referensdatum för days_until (default: idag)

    Returns:
        iCal-formaterad sträng
    """
    today = today or get_today()

    cal = Calendar()
    cal.add("prodid", "-//Foraldradagar//foraldradagar.app//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", "Föräldradagar")
    cal.add("x-wr-timezone", "Europe/Stockholm")

    child = family.first_child
    if child is not None:
        for deadline in all_deadlines(child, rules, today=today):
            cal.add_component(_create_deadline_event(deadline, family.id))

    if scenario is not None:
        for block in scenario.sorted_blocks:
            cal.add_component(_create_block_event(block, family, scenario))

    return cal.to_ical().decode("utf-8")


def _create_deadline_event(deadline: DeadlineInfo, family_id: int | None) -> Event:
    """Heldagsevent för en deadline."""
    event = Event()
    event.add("summary", deadline.description)
    event.add("uid", f"{deadline.date.isoformat()}_{family_id}_{deadline.kind.value}@foraldradagar")
    event.add("dtstart", deadline.date)
    event.add("dtend", deadline.date + datetime.timedelta(days=1))
    event.add("description", f"Om {deadline.days_until} dagar")
    event.add("dtstamp", datetime.datetime.now(datetime.timezone.utc))
    return event


def _create_block_event(block: LeaveBlock, family: Family, scenario: Scenario) -> Event:
    """
    Skapar ett VEVENT för ett ledighetsblock.

    Slutdatum är exklusivt både i blocket och i iCal (DTEND), så det kan
    användas direkt.
    """
    event = Event()

    name = parent_name(family, block.role)
    event.add("summary", f"{name}: föräldraledig {percentage_display(block.fraction)}")
    event.add("uid", f"{block.start_date.isoformat()}_{family.id}_{scenario.id}_{block.role.value}@foraldradagar")
    event.add("dtstart", block.start_date)
    event.add("dtend", block.end_date)

    description_parts = [
        f"Plan: {scenario.name}",
        f"Nivå: {PAY_LEVEL_NAMES[block.pay_level]}",
        f"Förbrukar {format_days(block.days_consumed)} dagar ({block.weekdays} vardagar)",
    ]
    event.add("description", "\n".join(description_parts))
    event.add("dtstamp", datetime.datetime.now(datetime.timezone.utc))

    return event
