# foraldradagar/core/rules.py
"""Uppslag av regeltabeller per år."""

from functools import lru_cache

from foraldradagar.core.logging_config import get_logger
from foraldradagar.core.models import RuleConstants
from foraldradagar.core.storage import StorageError, available_rule_years, load_rule_constants
from foraldradagar.core.utils import get_today

logger = get_logger(__name__)


@lru_cache(maxsize=16)
def _cached_rules(year: int) -> RuleConstants:
    return load_rule_constants(year)


def get_rules(year: int | None = None) -> RuleConstants:
    """
    Hämtar regeltabellen för ett år (default: innevarande år).

    Saknas tabell för året används närmast föregående år, eller det äldsta
    kända året om året ligger före alla tabeller.

    Raises:
        StorageError: Om inga regeltabeller finns alls
    """
    if year is None:
        year = get_today().year

    years = available_rule_years()
    if not years:
        raise StorageError("No rule tables found")

    if year in years:
        return _cached_rules(year)

    earlier = [y for y in years if y < year]
    fallback = earlier[-1] if earlier else years[0]
    logger.warning(f"No rule table for {year}, falling back to {fallback}")
    return _cached_rules(fallback)


def clear_rules_cache() -> None:
    _cached_rules.cache_clear()
