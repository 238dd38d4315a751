"""Month export and transaction import domain service."""

import logging
from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from budgetbook.database.base import Database
from budgetbook.domain.entities import TransactionInput
from budgetbook.domain.errors import ValidationError
from budgetbook.utils.amount_parser import to_cents
from budgetbook.utils.month import Month

logger = logging.getLogger(__name__)


def _number(value: Decimal) -> int | float:
    """JSON number for an amount, without a trailing .0 for whole values."""
    return int(value) if value == value.to_integral_value() else float(value)


class TransferService:
    """Service for exporting a month and importing transactions."""

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_month(self, month: Month) -> dict[str, Any]:
        """Export a month's categories, budgets and transactions.

        Returns:
            JSON-serialisable dictionary
        """
        categories = self.db.list_categories()
        budgets = self.db.list_monthly_budgets(month)
        # Oldest first so a re-import keeps insertion order
        transactions = list(reversed(self.db.list_transactions_for_month(month)))

        return {
            "month": month.key,
            "exportedAt": datetime.now(UTC).isoformat(),
            "categories": [
                {"id": category.id, "name": category.name, "rule": category.rule.value}
                for category in categories
            ],
            "budgets": [
                {"categoryId": budget.category_id, "budgetAmount": _number(budget.budget_amount)}
                for budget in budgets
            ],
            "transactions": [
                {
                    "date": txn.date.isoformat(),
                    "description": txn.description,
                    "account": txn.account,
                    "isIncome": 1 if txn.is_income else 0,
                    "amount": _number(txn.amount),
                    "categoryId": txn.category_id,
                    "notes": txn.notes,
                }
                for txn in transactions
            ],
        }

    def parse_import(self, payload: Any) -> list[TransactionInput]:
        """Parse the `transactions` array of an export file.

        Category IDs are not checked against the database; rows pointing at
        unknown categories are ignored by reports.

        Raises:
            ValidationError: If the payload has no transactions array or an
                entry is malformed
        """
        if not isinstance(payload, dict) or not isinstance(payload.get("transactions"), list):
            raise ValidationError("The JSON file must contain a 'transactions' array")

        inputs = []
        for index, item in enumerate(payload["transactions"]):
            try:
                inputs.append(self._parse_transaction(item))
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                raise ValidationError(f"Invalid transaction at index {index}: {e}") from e
        return inputs

    def _parse_transaction(self, item: dict[str, Any]) -> TransactionInput:
        amount = Decimal(str(item["amount"]))
        if not amount.is_finite():
            raise ValueError("amount must be a positive number")
        amount = to_cents(amount)
        if amount <= 0:
            raise ValueError("amount must be at least 0.01")

        description = item["description"]
        if not isinstance(description, str):
            raise ValueError("description must be a string")

        is_income = item.get("isIncome") or 0
        if is_income not in (0, 1, "0", "1"):
            raise ValueError("isIncome must be 0 or 1")

        return TransactionInput(
            date=date.fromisoformat(item["date"]),
            description=description,
            account=str(item.get("account") or ""),
            is_income=is_income in (1, "1"),
            amount=amount,
            category_id=int(item["categoryId"]),
            notes=item.get("notes") or None,
        )

    def import_transactions(self, inputs: Sequence[TransactionInput]) -> int:
        """Insert parsed transactions. Duplicates are not detected.

        Returns:
            Number of transactions imported
        """
        count = self.db.create_transactions(inputs)
        logger.info(f"transactions_imported: count={count}")
        return count
