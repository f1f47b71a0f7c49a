"""Loader for the static expense category table (Kostenarten)."""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import yaml

from ..models.expense_category import ExpenseCategory
from .settings import get_configs_dir

logger = logging.getLogger(__name__)


def get_categories_path() -> Path:
    """Get path to expense_categories.yaml."""
    return get_configs_dir() / "expense_categories.yaml"


def parse_categories(data) -> Tuple[ExpenseCategory, ...]:
    """Build ExpenseCategory entries from loaded YAML data.

    Raises:
        ValueError: If the data is not a list of category mappings or a code repeats
    """
    entries = data.get("categories") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError("Expense categories must be a list of mappings")

    categories = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"Invalid expense category entry: {entry!r}")
        category = ExpenseCategory.from_dict(entry)
        if category.code in seen:
            raise ValueError(f"Duplicate expense category code: {category.code}")
        seen.add(category.code)
        categories.append(category)
    return tuple(categories)


def load_expense_categories_from(path: Path) -> Tuple[ExpenseCategory, ...]:
    """Load expense categories from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Expense categories not found (expected at {path})")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not data:
        raise ValueError(f"Expense categories file is empty: {path}")

    categories = parse_categories(data)
    logger.debug("Loaded %d expense categories from %s", len(categories), path)
    return categories


@lru_cache(maxsize=1)
def get_expense_categories() -> Tuple[ExpenseCategory, ...]:
    """Expense categories in display order, loaded once per process."""
    return load_expense_categories_from(get_categories_path())


@lru_cache(maxsize=1)
def get_expense_category_map() -> Mapping[str, ExpenseCategory]:
    """Read-only mapping code -> ExpenseCategory."""
    return MappingProxyType({c.code: c for c in get_expense_categories()})


def find_expense_category(code: str) -> Optional[ExpenseCategory]:
    """Look up a category by code (None if the code is not in the table)."""
    return get_expense_category_map().get(str(code).strip())


def cost_type_choices(current_code: str = "") -> Tuple[List[str], Dict[str, str]]:
    """Options for a Kostenart picker: ("" + all codes, code -> label).

    Codes are not validated, so a current code that is missing from the
    table is appended as an extra option instead of being dropped.
    """
    codes = [""] + [c.code for c in get_expense_categories()]
    labels = {c.code: c.label for c in get_expense_categories()}
    if current_code and current_code not in labels:
        codes.append(current_code)
        labels[current_code] = f"{current_code} (nicht in der Liste)"
    return codes, labels
