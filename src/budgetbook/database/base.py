"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from budgetbook.domain.entities import (
    Category,
    CategoryGroup,
    CategoryRule,
    MonthlyBudget,
    Transaction,
    TransactionInput,
)
from budgetbook.utils.month import Month


class Database(ABC):
    """Abstract database interface for budgetbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category group operations
    @abstractmethod
    def create_group(self, name: str, sort_order: int, color: Optional[str] = None) -> int:
        """Create a category group. Returns group ID.

        Raises:
            ConflictError: If a group with the same name exists
        """
        pass

    @abstractmethod
    def get_group(self, group_id: int) -> Optional[CategoryGroup]:
        """Get group by ID."""
        pass

    @abstractmethod
    def list_groups(self) -> list[CategoryGroup]:
        """List groups ordered by sort order."""
        pass

    @abstractmethod
    def max_group_sort_order(self) -> Optional[int]:
        """Highest sort order in use, or None when there are no groups."""
        pass

    @abstractmethod
    def update_group_sort_orders(self, sort_orders: dict[int, int]) -> None:
        """Write sort orders for several groups in one transaction."""
        pass

    @abstractmethod
    def update_group_color(self, group_id: int, color: Optional[str]) -> None:
        """Set or clear a group's color."""
        pass

    @abstractmethod
    def delete_group(self, group_id: int) -> int:
        """Delete a group, moving its categories to Unassigned.

        Returns the number of categories that were unassigned.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, rule: CategoryRule, group_id: Optional[int] = None) -> int:
        """Create a category. Returns category ID.

        Raises:
            ConflictError: If a category with the same name exists
        """
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories by name, with group name and color resolved."""
        pass

    @abstractmethod
    def update_category_group(self, category_id: int, group_id: Optional[int]) -> None:
        """Assign a category to a group, or to Unassigned with None."""
        pass

    @abstractmethod
    def count_transactions_for_category(self, category_id: int) -> int:
        """Count transactions referencing a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category and its monthly budgets.

        Callers must check that no transactions reference the category.
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        description: str,
        account: str,
        is_income: bool,
        amount: Decimal,
        category_id: int,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def create_transactions(self, inputs: Sequence[TransactionInput]) -> int:
        """Insert several transactions in one transaction. Returns count."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, values: TransactionInput) -> None:
        """Replace all editable fields of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions_for_month(
        self,
        month: Month,
        category_id: Optional[int] = None,
        account: Optional[str] = None,
    ) -> list[Transaction]:
        """List a month's transactions, newest first.

        Args:
            month: Month to list
            category_id: Optional category ID filter
            account: Optional account label filter
        """
        pass

    @abstractmethod
    def list_accounts(self) -> list[str]:
        """List distinct account labels."""
        pass

    @abstractmethod
    def count_transactions_for_month(self, month: Month) -> int:
        """Count a month's transactions."""
        pass

    @abstractmethod
    def delete_transactions_for_month(self, month: Month) -> int:
        """Delete a month's transactions. Returns count deleted."""
        pass

    # Monthly budget operations
    @abstractmethod
    def list_monthly_budgets(self, month: Month) -> list[MonthlyBudget]:
        """List budget rows for a month."""
        pass

    @abstractmethod
    def month_has_budgets(self, month: Month) -> bool:
        """Check whether any budget rows exist for a month."""
        pass

    @abstractmethod
    def most_recent_month_with_budgets_before(self, month: Month) -> Optional[Month]:
        """Latest month strictly before `month` with at least one budget row."""
        pass

    @abstractmethod
    def copy_budgets(self, from_month: Month, to_month: Month) -> int:
        """Copy budget rows between months without overwriting existing rows.

        Returns the number of rows inserted.
        """
        pass

    @abstractmethod
    def set_budget(self, category_id: int, month: Month, amount: Optional[Decimal]) -> None:
        """Set a category's budget for a month. None or <= 0 removes it."""
        pass

    @abstractmethod
    def delete_budgets_for_month(self, month: Month) -> int:
        """Delete a month's budget rows. Returns count deleted."""
        pass

    # Settings
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get an application setting."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Store an application setting."""
        pass
