"""
Tests for advisory facts, system prompt and greeting texts.
"""

import datetime
from decimal import Decimal

from foraldradagar.core.advisory import (
    AdvisorConfig,
    build_family_facts,
    build_rules_document,
    build_system_prompt,
    greeting,
    starter_questions,
)
from foraldradagar.core.constants import ADVISOR_DISCLAIMER
from foraldradagar.core.models import Child, Family, KnowledgeLevel, Parent, ParentRole, PlanningPriority


class TestAdvisorConfig:
    def test_defaults(self):
        config = AdvisorConfig()
        assert config.model is None
        assert not config.has_api_key

    def test_api_key(self):
        assert AdvisorConfig(api_key="  secret ").has_api_key


class TestFamilyFacts:
    def test_facts_contain_calculator_output(self, rules, two_parent_family, today):
        facts = build_family_facts(two_parent_family, rules, today=today)

        assert facts["rules_year"] == 2026
        assert facts["is_single_parent"] is False
        assert [p["name"] for p in facts["parents"]] == ["Anna", "Erik"]
        assert facts["days"]["days_remaining_total"] == 480
        assert facts["household_monthly_working"] == Decimal("80000")
        assert facts["child"]["save_limit_date"] == datetime.date(2029, 12, 1)
        assert facts["next_deadline"]["kind"].value == "save_limit"

    def test_no_child(self, rules, today):
        facts = build_family_facts(Family(parents=(Parent(),)), rules, today=today)
        assert facts["child"] is None
        assert facts["next_deadline"] is None


class TestPrompt:
    def test_rules_document_uses_rule_table(self, rules):
        document = build_rules_document(rules)
        assert "REGLER 2026" in document
        assert "480 föräldrapenningdagar" in document
        assert "592 000 kr" in document

    def test_system_prompt(self, rules, two_parent_family, today):
        prompt = build_system_prompt(two_parent_family, rules, today=today)

        assert "Anna: 35 000 kr/mån" in prompt
        assert "Dagar kvar: 480 av 480" in prompt
        assert ADVISOR_DISCLAIMER in prompt

    def test_knowledge_level_changes_instructions(self, rules, two_parent_family, today):
        beginner = two_parent_family.model_copy(update={"knowledge_level": KnowledgeLevel.BEGINNER})
        prompt = build_system_prompt(beginner, rules, today=today)
        assert "nybörjare" in prompt


class TestStarterQuestions:
    def test_split_question_only_for_two_parents(self, rules, two_parent_family, single_parent_family, today):
        assert "Hur bör vi dela dagarna?" in starter_questions(two_parent_family, rules, today=today)
        assert "Hur bör vi dela dagarna?" not in starter_questions(single_parent_family, rules, today=today)

    def test_double_days_question(self, rules, today):
        family = Family(
            parents=(Parent(),),
            children=(Child(birth_date=datetime.date(2025, 3, 1), is_born=True),),
        )
        assert "Hur funkar dubbeldagar?" in starter_questions(family, rules, today=today)


class TestGreeting:
    def test_greets_by_name(self, rules, two_parent_family, today):
        assert greeting(two_parent_family, rules, today=today).startswith("Hej Anna!")

    def test_anonymous(self, rules, today):
        assert greeting(Family(parents=(Parent(role=ParentRole.FIRST),)), rules, today=today).startswith("Hej!")

    def test_double_days_nudge(self, rules):
        family = Family(
            parents=(Parent(name="Anna"),),
            children=(Child(birth_date=datetime.date(2025, 9, 1), is_born=True),),
            planning_priority=PlanningPriority.MAX_TIME,
        )
        text = greeting(family, rules, today=datetime.date(2026, 10, 1))

        assert "Dubbeldagarna går ut om 61 dagar" in text
        assert "maximera tiden hemma" in text
