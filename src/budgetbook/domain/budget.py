"""Monthly budget domain service."""

from decimal import Decimal
from typing import Optional

from budgetbook.database.base import Database
from budgetbook.domain.entities import MonthlyBudget
from budgetbook.domain.errors import NotFoundError, category_not_found
from budgetbook.utils.amount_parser import to_cents
from budgetbook.utils.month import Month


class BudgetService:
    """Service for setting and reading monthly budgets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_budget(self, category_id: int, month: Month, amount: Optional[Decimal]) -> None:
        """Set a category's budget for a month.

        Args:
            category_id: Category ID
            month: Month the budget applies to
            amount: Budget amount, rounded to cents; None or an amount that
                rounds to zero or below removes it

        Raises:
            NotFoundError: If the category doesn't exist
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        if amount is not None:
            amount = to_cents(amount)
        self.db.set_budget(category_id, month, amount)

    def list_budgets(self, month: Month) -> list[MonthlyBudget]:
        """List budget rows of a month."""
        return self.db.list_monthly_budgets(month)
