# foraldradagar/core/advisory.py
"""
Structured facts and prompt text for the advisory chat.

Only builds strings and dicts from calculator output. The network call to a
language model lives outside this package; its settings are passed in
explicitly through AdvisorConfig.
"""

import datetime
from typing import Any

from pydantic import BaseModel, Field

from foraldradagar.core.calculator import (
    calculate_days,
    calculate_income,
    days_until,
    double_days_expiry_date,
    max_daily_sgi,
    next_deadline,
    save_limit_date,
)
from foraldradagar.core.constants import ADVISOR_DISCLAIMER
from foraldradagar.core.formatting import format_currency, format_date, format_days_until
from foraldradagar.core.models import Family, KnowledgeLevel, Parent, PlanningPriority, RuleConstants
from foraldradagar.core.utils import get_today


class AdvisorConfig(BaseModel):
    """Settings for the advisory text component. Never read from globals."""

    model: str | None = None
    max_tokens: int = Field(default=1024, gt=0)
    timeout_seconds: float = Field(default=30.0, gt=0)
    api_key: str = ""

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


KNOWLEDGE_INSTRUCTIONS: dict[KnowledgeLevel | None, str] = {
    KnowledgeLevel.BEGINNER: "Föräldern är nybörjare. Förklara begrepp som SGI, grundnivå etc. Undvik jargong.",
    KnowledgeLevel.GOOD: (
        "Föräldern har god kunskap. Du kan använda termer som SGI, prisbasbelopp etc. utan förklaring."
    ),
}
DEFAULT_KNOWLEDGE_INSTRUCTION = "Anpassa ditt språk, förklara begrepp vid behov men var inte övertydlig."

PRIORITY_TEXTS: dict[PlanningPriority, str] = {
    PlanningPriority.MAXIMIZE_INCOME: "Jag hjälper dig maximera familjens inkomst under ledigheten.",
    PlanningPriority.EQUAL_SPLIT: "Jag hjälper er hitta en rättvis uppdelning.",
    PlanningPriority.MAX_TIME: "Jag hjälper er maximera tiden hemma med barnet.",
}
DEFAULT_PRIORITY_TEXT = "Jag ger personliga svar baserade på just er situation."


def _top_up_description(parent: Parent | None) -> str | None:
    if parent is None or not parent.has_employer_top_up:
        return None
    return f"{parent.employer_top_up_percentage}% i {parent.employer_top_up_months} månader"


def build_family_facts(
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
) -> dict[str, Any]:
    """
    Samlar de siffror rådgivningen behöver i en dict.

    Belopp är Decimal och datum är date; serialisering sker hos anroparen.
    """
    today = today or get_today()
    days = calculate_days(family, rules, today=today)
    income = calculate_income(family, rules)
    deadline = next_deadline(family, rules, today=today)
    child = family.first_child

    parents = []
    for parent in family.parents:
        parent_income = income.for_role(parent.role)
        parents.append(
            {
                "role": parent.role.value,
                "name": parent.name,
                "monthly_gross_income": parent.monthly_gross_income,
                "employer_top_up": _top_up_description(parent),
                "days_taken": parent.foraldra_days_taken,
                "daily_rate": parent_income.daily_rate,
                "monthly_on_leave": parent_income.monthly_on_leave,
            }
        )

    facts: dict[str, Any] = {
        "rules_year": rules.year,
        "parents": parents,
        "is_single_parent": family.is_single_parent,
        "child": None,
        "days": days.model_dump(),
        "household_monthly_working": income.household_monthly_working,
        "household_monthly_both_on_leave": income.household_monthly_both_on_leave,
        "next_deadline": deadline.model_dump() if deadline else None,
        "planning_priority": family.planning_priority.value if family.planning_priority else None,
        "knowledge_level": family.knowledge_level.value if family.knowledge_level else None,
    }
    if child is not None:
        facts["child"] = {
            "birth_date": child.birth_date,
            "is_born": child.is_born,
            "multiplicity": child.multiplicity.value,
            "save_limit_date": save_limit_date(child.birth_date, rules),
            "double_days_expiry_date": double_days_expiry_date(child.birth_date, rules),
        }
    return facts


def build_rules_document(rules: RuleConstants) -> str:
    """Kort regelsammanfattning för regelåret, byggd från regeltabellen."""
    return "\n".join(
        [
            f"SVENSKA FÖRÄLDRAFÖRSÄKRINGEN, REGLER {rules.year}",
            f"• {rules.total_days_per_child} föräldrapenningdagar per barn.",
            f"• {rules.sgi_level_days} dagar på sjukpenningnivå, {rules.lagstaniva_days} dagar på lägstanivå "
            f"({format_currency(rules.lagstaniva_daily)}/dag).",
            f"• {rules.reserved_days_per_parent} reserverade dagar per förälder, {rules.shared_days} överlåtbara.",
            f"• SGI-tak: {format_currency(rules.sgi_cap)}/år, max ca {format_currency(max_daily_sgi(rules))}/dag.",
            f"• VAB har LÄGRE tak: {format_currency(rules.vab_sgi_cap)}/år.",
            f"• Dubbeldagar: {rules.double_days_count} st, tills barnet är "
            f"{rules.double_days_max_child_age_months} månader.",
            f"• Efter {rules.save_limit_age} år får max {rules.max_days_saveable_after_age_4} dagar sparas "
            f"({rules.max_days_saveable_after_age_4_twins} för tvillingar).",
            f"• Alla dagar förfaller när barnet fyller {rules.all_days_expiry_age} år.",
            f"• Helgregel sedan {rules.weekend_rule_effective.isoformat()}: lördag/söndag ger bara ersättning "
            f"om angränsande vardag också tas ut.",
        ]
    )


def _family_context(family: Family, rules: RuleConstants, today: datetime.date) -> str:
    facts = build_family_facts(family, rules, today)
    days = facts["days"]
    lines = ["FAMILJENS SITUATION:"]
    for parent in facts["parents"]:
        line = (
            f"- {parent['name'] or parent['role']}: {format_currency(parent['monthly_gross_income'])}/mån, "
            f"ca {format_currency(parent['daily_rate'])}/dag på ledighet, {parent['days_taken']} dagar uttagna"
        )
        if parent["employer_top_up"]:
            line += f", utfyllnad {parent['employer_top_up']}"
        lines.append(line)

    child = facts["child"]
    if child is not None:
        status = "fött" if child["is_born"] else "väntas"
        lines.append(f"- Barn: {status} {format_date(child['birth_date'])} ({child['multiplicity']})")

    lines.append(
        f"- Dagar kvar: {days['days_remaining_total']} av {days['total_days']} "
        f"({days['days_remaining_sgi']} SGI-nivå, {days['days_remaining_basic']} lägstanivå)"
    )
    lines.append(
        f"- Reserverade kvar: {days['reserved_remaining_parent1']} / {days['reserved_remaining_parent2']}, "
        f"delade kvar: {days['shared_days_remaining']}"
    )
    deadline = facts["next_deadline"]
    if deadline is not None:
        lines.append(
            f"- Nästa deadline: {deadline['description']} {format_date(deadline['date'])} "
            f"(om {format_days_until(deadline['days_until'])})"
        )
    return "\n".join(lines)


def build_system_prompt(
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
) -> str:
    """Systemprompt med regler och familjens siffror."""
    today = today or get_today()
    knowledge = KNOWLEDGE_INSTRUCTIONS.get(family.knowledge_level, DEFAULT_KNOWLEDGE_INSTRUCTION)

    return "\n\n".join(
        [
            "Du är en varm, kunnig och stöttande rådgivare för svenska föräldrar. "
            "Svara ALLTID på svenska. Var tydlig, konkret och personlig. "
            "Alla belopp är uppskattningar före skatt.",
            build_rules_document(rules),
            _family_context(family, rules, today),
            "INSTRUKTIONER:\n"
            "- Använd konkreta siffror (kronor, dagar, datum)\n"
            "- Visa alltid månadsbelopp, inte bara dagbelopp\n"
            f"- {knowledge}\n"
            '- Om du inte är säker, säg "Det vet jag inte säkert, kontakta Försäkringskassan"\n'
            f"- Avsluta varje svar med: {ADVISOR_DISCLAIMER}",
        ]
    )


def starter_questions(
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
) -> list[str]:
    """Förslag på första frågor utifrån familjens situation."""
    today = today or get_today()
    questions = ["Hur många dagar har vi kvar?", "Hur skyddar jag min SGI?"]
    if not family.is_single_parent:
        questions.insert(1, "Hur bör vi dela dagarna?")

    child = family.first_child
    if child is not None:
        if days_until(save_limit_date(child.birth_date, rules), today) < 365 * 2:
            questions.append("Vilka dagar försvinner snart?")
        double_days_left = days_until(double_days_expiry_date(child.birth_date, rules), today)
        if 0 < double_days_left < 365:
            questions.append("Hur funkar dubbeldagar?")

    extras = [
        "Hur påverkar helgregeln mig?",
        "Vad händer med min pension?",
        "Kan jag jobba deltid under ledigheten?",
    ]
    if len(questions) < 5:
        questions.append(extras[today.day % len(extras)])
    return questions


def greeting(
    family: Family,
    rules: RuleConstants,
    today: datetime.date | None = None,
) -> str:
    """Personlig hälsning med en påminnelse när en deadline närmar sig."""
    today = today or get_today()
    parent1 = family.parent1
    name = parent1.name if parent1 else ""
    base = f"Hej {name}!" if name else "Hej!"

    nudge = ""
    child = family.first_child
    if child is not None:
        double_days_left = days_until(double_days_expiry_date(child.birth_date, rules), today)
        save_days_left = days_until(save_limit_date(child.birth_date, rules), today)
        if 0 < double_days_left < 90:
            nudge = f" ⏰ Dubbeldagarna går ut om {double_days_left} dagar. Fråga mig hur ni använder dem bäst!"
        elif 0 < save_days_left < 365:
            nudge = f" ⏰ Era SGI-dagar börjar gå ut om {save_days_left} dagar. Fråga mig vad ni bör göra."

    priority_text = PRIORITY_TEXTS.get(family.planning_priority, DEFAULT_PRIORITY_TEXT)
    return f"{base} Jag kan hela föräldraförsäkringen. {priority_text} Fråga mig vad som helst!{nudge}"

