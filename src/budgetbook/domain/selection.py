"""Selected month domain service."""

from typing import Optional

from budgetbook.database.base import Database
from budgetbook.domain.rollover import BudgetRolloverService
from budgetbook.utils.month import Month

SELECTED_MONTH_KEY = "selected_month"


class MonthService:
    """Service for the persisted month selection shared by all views."""

    def __init__(self, db: Database):
        """Initialize month service.

        Args:
            db: Database instance
        """
        self.db = db
        self.rollover = BudgetRolloverService(db)

    def selected_month(self) -> Month:
        """Return the selected month, defaulting to the current month."""
        stored: Optional[str] = self.db.get_setting(SELECTED_MONTH_KEY)
        if stored is None:
            return Month.current()
        return Month.parse(stored)

    def select_month(self, month: Month) -> Month:
        """Persist a new month selection and roll budgets into it."""
        self.db.set_setting(SELECTED_MONTH_KEY, month.key)
        self.rollover.ensure_budgets_for_month(month)
        return month

    def shift_selected(self, delta: int) -> Month:
        """Move the selection by `delta` months."""
        return self.select_month(self.selected_month().shift(delta))
