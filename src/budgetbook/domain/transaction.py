"""Transaction domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from budgetbook.database.base import Database
from budgetbook.domain.entities import Transaction as TransactionEntity, TransactionInput
from budgetbook.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    transaction_not_found,
)
from budgetbook.utils.amount_parser import to_cents
from budgetbook.utils.month import Month

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _build_input(
        self,
        date: date,
        description: str,
        account: str,
        amount: Decimal,
        category_id: int,
        is_income: Optional[bool],
        notes: Optional[str],
    ) -> TransactionInput:
        """Validate user-supplied transaction fields."""
        description = (description or "").strip()
        account = (account or "").strip()
        if date is None:
            raise ValidationError("Date is required")
        if not description:
            raise ValidationError("Description is required")
        if not account:
            raise ValidationError("Account is required")
        if amount is None or not amount.is_finite():
            raise ValidationError("Amount must be a positive number")
        # Amounts are stored at cent precision
        amount = to_cents(amount)
        if amount <= 0:
            raise ValidationError("Amount must be at least 0.01")
        if category_id is None:
            raise ValidationError("Category is required")

        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        # Direction follows the category unless given explicitly
        if is_income is None:
            is_income = category.is_income

        notes = notes.strip() if notes else None
        return TransactionInput(
            date=date,
            description=description,
            account=account,
            is_income=is_income,
            amount=amount,
            category_id=category_id,
            notes=notes or None,
        )

    def create_transaction(
        self,
        date: date,
        description: str,
        account: str,
        amount: Decimal,
        category_id: int,
        is_income: Optional[bool] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            date: Transaction date
            description: Description
            account: Account label
            amount: Positive amount
            category_id: Category ID
            is_income: Direction; defaults from the category's rule
            notes: Optional notes

        Returns:
            Transaction ID

        Raises:
            ValidationError: If a required field is empty or amount isn't positive
            NotFoundError: If the category doesn't exist
        """
        values = self._build_input(date, description, account, amount, category_id, is_income, notes)
        return self.db.create_transaction(
            date=values.date,
            description=values.description,
            account=values.account,
            is_income=values.is_income,
            amount=values.amount,
            category_id=values.category_id,
            notes=values.notes,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        account: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        is_income: Optional[bool] = None,
        notes: Optional[str] = None,
        clear_notes: bool = False,
    ) -> None:
        """Update transaction fields. Fields left as None keep their value.

        Raises:
            NotFoundError: If the transaction or category doesn't exist
            ValidationError: If the resulting transaction is invalid
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if is_income is None and category_id is None:
            is_income = txn.is_income

        values = self._build_input(
            date=date if date is not None else txn.date,
            description=description if description is not None else txn.description,
            account=account if account is not None else txn.account,
            amount=amount if amount is not None else txn.amount,
            category_id=category_id if category_id is not None else txn.category_id,
            is_income=is_income,
            notes=None if clear_notes else (notes if notes is not None else txn.notes),
        )
        self.db.update_transaction(transaction_id, values)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        self.db.delete_transaction(transaction_id)

    def list_transactions_for_month(
        self,
        month: Month,
        category_id: Optional[int] = None,
        account: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List a month's transactions, newest first, with optional filters."""
        return self.db.list_transactions_for_month(month, category_id=category_id, account=account)

    def list_accounts(self) -> list[str]:
        """List account labels used so far."""
        return self.db.list_accounts()

    def count_for_month(self, month: Month) -> int:
        """Count a month's transactions."""
        return self.db.count_transactions_for_month(month)

    def reset_month(self, month: Month) -> tuple[int, int]:
        """Delete all transactions and budgets of a month.

        Other months are not affected.

        Returns:
            Tuple of (transactions deleted, budget rows deleted)
        """
        transactions_deleted = self.db.delete_transactions_for_month(month)
        budgets_deleted = self.db.delete_budgets_for_month(month)
        logger.info(
            f"month_reset: month={month} transactions={transactions_deleted} budgets={budgets_deleted}"
        )
        return transactions_deleted, budgets_deleted
