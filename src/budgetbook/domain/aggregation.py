"""Per-category aggregation of signed transaction amounts."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping

from budgetbook.domain.amounts import signed_amount
from budgetbook.domain.entities import Category, CategoryRule, Transaction

logger = logging.getLogger(__name__)


def index_categories(categories: Iterable[Category]) -> dict[int, Category]:
    """Build an id lookup for categories."""
    return {category.id: category for category in categories}


def aggregate_by_category(
    transactions: Iterable[Transaction],
    categories: Mapping[int, Category],
) -> dict[int, Decimal]:
    """Sum signed amounts per category.

    Args:
        transactions: Transactions to aggregate, already filtered
        categories: Category lookup by ID

    Returns:
        Mapping of category ID to net signed sum. Categories without
        transactions are absent. Transactions whose category no longer
        exists are skipped.
    """
    raw_net: dict[int, Decimal] = {}
    skipped = 0
    for txn in transactions:
        if txn.category_id not in categories:
            skipped += 1
            continue
        raw_net[txn.category_id] = raw_net.get(txn.category_id, Decimal("0")) + signed_amount(
            txn.amount, txn.is_income
        )

    if skipped:
        logger.debug(f"aggregate_by_category: skipped_orphans={skipped}")
    return raw_net


def displayed_amount(rule: CategoryRule, raw_net: Decimal) -> Decimal:
    """Amount shown for a category: earned for income, spent for spending.

    A negative result for a spending category means the category is in
    profit.
    """
    return -raw_net if rule == CategoryRule.SPENDING else raw_net


def is_profit(rule: CategoryRule, raw_net: Decimal) -> bool:
    """Check whether a spending category had more money returned than spent."""
    return rule == CategoryRule.SPENDING and raw_net > 0
