"""Display formatting helpers for CLI output."""

from decimal import Decimal
from typing import Optional


def format_money(amount: Decimal) -> str:
    """Format an amount as dollars, e.g. $1,234.50 or -$20.00."""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def format_spent(spent: Decimal, is_profit: bool) -> str:
    """Format a category's spent amount; profit is shown as a gain."""
    if is_profit:
        return f"+{format_money(-spent)} profit"
    return format_money(spent)


def format_budget(budget_amount: Optional[Decimal]) -> str:
    """Format a budget amount, or a dash when unset."""
    if budget_amount is None or budget_amount <= 0:
        return "-"
    return format_money(budget_amount)
