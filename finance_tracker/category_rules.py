"""Category Rules - Keyword-based transaction categorization.

This module suggests a category for a transaction from keywords in its
description.  Rules are kept in declaration order and the first keyword
found in the description decides the category; later rules are never
consulted, even if the first rule's category does not exist for the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from .lib.config import get_categorization_config
from .models import Category, CategoryRole, Transaction, TransactionSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryRule:
    """A keyword that maps descriptions onto a category name."""
    keyword: str
    category: str

    def matches(self, description_lower: str) -> bool:
        return self.keyword in description_lower


@lru_cache(maxsize=None)
def get_rules() -> Tuple[CategoryRule, ...]:
    """Load the ordered keyword table from configuration."""
    table = get_categorization_config()['keyword_categories']
    return tuple(CategoryRule(keyword=keyword.lower(), category=category) for keyword, category in table)


def suggest_category_name(description: str, rules: Optional[Iterable[CategoryRule]] = None) -> Optional[str]:
    """Return the category name of the first rule whose keyword appears in ``description``.

    Example:
        >>> suggest_category_name('Shell benzin istasyonu')
        'Ulaşım'
    """
    if not description:
        return None
    desc_lower = description.lower()
    for rule in (rules if rules is not None else get_rules()):
        if rule.matches(desc_lower):
            return rule.category
    return None


def suggest_category(
    description: str,
    categories: Iterable[Category],
    rules: Optional[Iterable[CategoryRule]] = None,
) -> Optional[Category]:
    """Suggest one of the user's categories for a description.

    Args:
        description: Free-text transaction description
        categories: The user's categories
        rules: Keyword rules; defaults to the configured table

    Returns:
        The category named by the first matching rule, or ``None`` when no
        keyword matches or the user has no category with that name
    """
    name = suggest_category_name(description, rules)
    if name is None:
        return None
    for category in categories:
        if category.name == name:
            return category
    logger.debug("Keyword matched '%s' but the user has no such category", name)
    return None


def auto_categorize(transaction: Transaction, categories: Iterable[Category]) -> Transaction:
    """Fill in a missing category from the description.

    A transaction that already has a category, or whose description matches
    nothing, is returned unchanged.  Otherwise a copy is returned with the
    suggested category and ``source`` set to ``ai``.
    """
    if transaction.category_id or not transaction.description:
        return transaction
    suggested = suggest_category(transaction.description, categories)
    if suggested is None:
        return transaction
    logger.info("Auto-categorized transaction %s as %s", transaction.id, suggested.name)
    return replace(transaction, category_id=suggested.id, source=TransactionSource.AI)


def is_income_category(category: Optional[Category]) -> bool:
    return category is not None and category.role is CategoryRole.INCOME


def default_categories(user_id: Optional[str] = None) -> List[Category]:
    """Build the seed categories offered to a new user.

    Ids are derived from the position so repeated seeding is stable.
    """
    seeds = get_categorization_config()['default_categories']
    prefix = user_id or 'default'
    return [
        Category(
            id=f"{prefix}-{index}",
            name=seed['name'],
            icon=seed.get('icon', ''),
            color=seed.get('color', '#9E9E9E'),
            is_default=True,
            user_id=user_id,
            role=CategoryRole(seed['role']) if seed.get('role') else None,
        )
        for index, seed in enumerate(seeds, start=1)
    ]
