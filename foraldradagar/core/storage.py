# foraldradagar/core/storage.py
"""
Loading of rule tables from data files.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from foraldradagar.core.models import RuleConstants

logger = logging.getLogger(__name__)

#: Katalog med en JSON-fil per regelår, t ex data/rules/2026.json.
RULES_DIR = Path(__file__).resolve().parent.parent / "data" / "rules"


class StorageError(Exception):
    """General error type for problems loading data files."""

    pass


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def available_rule_years(rules_dir: Path = RULES_DIR) -> list[int]:
    """Return all rule-years that have a data file, oldest first."""
    years = []
    for path in rules_dir.glob("*.json"):
        if path.stem.isdigit():
            years.append(int(path.stem))
    return sorted(years)


def load_rule_constants(year: int, rules_dir: Path = RULES_DIR) -> RuleConstants:
    """
    Load the rule table for one year.
    Args:
        year: Rule-year, e.g. 2026
        rules_dir: Directory holding <year>.json files
    Returns:
        Validated, frozen rule constants
    Raises:
        StorageError: If the file cannot be loaded, parsed or violates invariants
    """
    file_path = rules_dir / f"{year}.json"
    data = _load_json(file_path)
    try:
        if not isinstance(data, dict):
            raise TypeError("Expected rule table dict")
        rules = RuleConstants(**data)
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse rule table from %s", file_path)
        raise StorageError(f"Could not parse rule table from {file_path}: {e}") from e

    if rules.year != year:
        raise StorageError(f"Rule table {file_path} declares year {rules.year}, expected {year}")
    return rules
