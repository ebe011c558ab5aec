import datetime

from icalendar import Calendar

from foraldradagar.core.calendar_export import _create_block_event, generate_ical
from foraldradagar.core.models import Child, Family, LeaveBlock, Parent, ParentRole, PayLevel, Scenario

TODAY = datetime.date(2026, 1, 15)


def _family() -> Family:
    return Family(
        id=7,
        parents=(Parent(name="Anna", role=ParentRole.FIRST), Parent(role=ParentRole.SECOND)),
        children=(Child(birth_date=datetime.date(2025, 12, 1), is_born=True),),
    )


def _scenario() -> Scenario:
    return Scenario(
        id=3,
        name="Plan A",
        blocks=(
            LeaveBlock(start_date=datetime.date(2026, 1, 5), end_date=datetime.date(2026, 7, 6)),
            LeaveBlock(
                start_date=datetime.date(2026, 7, 6),
                end_date=datetime.date(2026, 10, 5),
                role=ParentRole.SECOND,
                pay_level=PayLevel.BASIC_LEVEL,
            ),
        ),
    )


class TestCalendarExport:
    def test_generate_ical_is_valid(self, rules):
        """Deadlines only when no scenario is given."""
        cal = Calendar.from_ical(generate_ical(_family(), rules, today=TODAY))

        assert str(cal.get("x-wr-calname")) == "Föräldradagar"
        summaries = [str(e.get("summary")) for e in cal.walk("VEVENT")]
        assert summaries == ["Dubbeldagar löper ut", "SGI-dagar löper ut", "Alla dagar löper ut"]

    def test_deadline_events_are_all_day(self, rules):
        cal = Calendar.from_ical(generate_ical(_family(), rules, today=TODAY))
        save_limit = [e for e in cal.walk("VEVENT") if str(e.get("summary")) == "SGI-dagar löper ut"][0]

        assert save_limit.decoded("dtstart") == datetime.date(2029, 12, 1)
        assert save_limit.decoded("dtend") == datetime.date(2029, 12, 2)

    def test_scenario_blocks_included(self, rules):
        cal = Calendar.from_ical(generate_ical(_family(), rules, scenario=_scenario(), today=TODAY))
        events = cal.walk("VEVENT")

        assert len(events) == 5
        uids = {str(e.get("uid")) for e in events}
        assert len(uids) == 5

    def test_block_event_content(self):
        block = _scenario().blocks[1]
        event = _create_block_event(block, _family(), _scenario())

        assert str(event.get("summary")) == "Förälder 2: föräldraledig 100%"
        assert event.decoded("dtstart") == datetime.date(2026, 7, 6)
        assert event.decoded("dtend") == datetime.date(2026, 10, 5)
        description = str(event.get("description"))
        assert "Plan: Plan A" in description
        assert "Lägstanivå" in description
        assert "Förbrukar 65 dagar" in description

    def test_no_child_no_deadlines(self, rules):
        family = Family(parents=(Parent(),))
        cal = Calendar.from_ical(generate_ical(family, rules, today=TODAY))
        assert cal.walk("VEVENT") == []
