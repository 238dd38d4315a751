"""Tests for transaction management."""

from datetime import date
from decimal import Decimal

import pytest

from budgetbook.domain.errors import NotFoundError, ValidationError
from budgetbook.utils.month import Month


@pytest.fixture
def add(transaction_service, sample_categories):
    """Create a transaction with sensible defaults."""

    def _add(day=date(2024, 1, 15), description="Coffee", account="Checking",
             amount="4.50", category="Eating Out", **kwargs):
        return transaction_service.create_transaction(
            date=day,
            description=description,
            account=account,
            amount=Decimal(amount),
            category_id=sample_categories[category],
            **kwargs,
        )

    return _add


def test_create_transaction(transaction_service, sample_categories, add):
    txn_id = add(notes="  with a muffin  ")

    txn = transaction_service.get_transaction(txn_id)
    assert txn.date == date(2024, 1, 15)
    assert txn.description == "Coffee"
    assert txn.account == "Checking"
    assert txn.amount == Decimal("4.50")
    assert txn.category_id == sample_categories["Eating Out"]
    assert txn.notes == "with a muffin"
    assert txn.month == Month(2024, 1)


def test_direction_defaults_from_category(transaction_service, add):
    spend = transaction_service.get_transaction(add())
    pay = transaction_service.get_transaction(add(description="Payday", amount="2000", category="Wages"))

    assert not spend.is_income
    assert pay.is_income


def test_explicit_direction_overrides_category(transaction_service, add):
    refund = transaction_service.get_transaction(add(description="Refund", is_income=True))
    assert refund.is_income


@pytest.mark.parametrize(
    "overrides",
    [
        {"description": "  "},
        {"account": ""},
        {"amount": "0"},
        {"amount": "-5"},
    ],
)
def test_create_transaction_validation(add, overrides):
    with pytest.raises(ValidationError):
        add(**overrides)


def test_create_transaction_missing_category(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            date=date(2024, 1, 1),
            description="Mystery",
            account="Cash",
            amount=Decimal("1"),
            category_id=123,
        )


def test_list_transactions_for_month(transaction_service, sample_categories, add):
    add(day=date(2024, 1, 31), description="Late")
    add(day=date(2024, 1, 1), description="Early")
    add(day=date(2024, 2, 1), description="Next month")
    add(day=date(2023, 12, 31), description="Last year")

    txns = transaction_service.list_transactions_for_month(Month(2024, 1))

    assert [t.description for t in txns] == ["Late", "Early"]
    assert transaction_service.count_for_month(Month(2024, 1)) == 2


def test_list_transactions_filters(transaction_service, sample_categories, add):
    add(description="Coffee", account="Checking")
    add(description="Shirt", account="Visa", category="Clothes")
    add(description="Lunch", account="Visa")

    by_category = transaction_service.list_transactions_for_month(
        Month(2024, 1), category_id=sample_categories["Clothes"]
    )
    by_account = transaction_service.list_transactions_for_month(Month(2024, 1), account="Visa")

    assert [t.description for t in by_category] == ["Shirt"]
    assert {t.description for t in by_account} == {"Shirt", "Lunch"}
    assert transaction_service.list_accounts() == ["Checking", "Visa"]


def test_update_transaction(transaction_service, sample_categories, add):
    txn_id = add(notes="old")

    transaction_service.update_transaction(
        txn_id,
        description="Espresso",
        amount=Decimal("3.25"),
        category_id=sample_categories["Groceries"],
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.description == "Espresso"
    assert txn.amount == Decimal("3.25")
    assert txn.category_id == sample_categories["Groceries"]
    assert txn.account == "Checking"
    assert txn.notes == "old"


def test_update_transaction_category_sets_direction(transaction_service, sample_categories, add):
    txn_id = add()

    transaction_service.update_transaction(txn_id, category_id=sample_categories["Wages"])

    assert transaction_service.get_transaction(txn_id).is_income


def test_update_keeps_direction_without_category_change(transaction_service, add):
    txn_id = add(is_income=True)

    transaction_service.update_transaction(txn_id, description="Refund")

    assert transaction_service.get_transaction(txn_id).is_income


def test_update_clear_notes(transaction_service, add):
    txn_id = add(notes="remove me")
    transaction_service.update_transaction(txn_id, clear_notes=True)
    assert transaction_service.get_transaction(txn_id).notes is None


def test_update_transaction_errors(transaction_service, add):
    txn_id = add()
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction(txn_id + 100, description="x")
    with pytest.raises(ValidationError):
        transaction_service.update_transaction(txn_id, amount=Decimal("0"))
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction(txn_id, category_id=999)


def test_delete_transaction(transaction_service, add):
    txn_id = add()
    transaction_service.delete_transaction(txn_id)
    assert transaction_service.get_transaction(txn_id) is None
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(txn_id)


def test_reset_month(temp_db, transaction_service, budget_service, sample_categories, add):
    add(day=date(2024, 1, 5))
    add(day=date(2024, 1, 20))
    add(day=date(2024, 2, 2))
    budget_service.set_budget(sample_categories["Eating Out"], Month(2024, 1), Decimal("100"))
    budget_service.set_budget(sample_categories["Eating Out"], Month(2024, 2), Decimal("120"))

    assert transaction_service.reset_month(Month(2024, 1)) == (2, 1)

    assert transaction_service.count_for_month(Month(2024, 1)) == 0
    assert transaction_service.count_for_month(Month(2024, 2)) == 1
    assert temp_db.list_monthly_budgets(Month(2024, 1)) == []
    assert len(temp_db.list_monthly_budgets(Month(2024, 2))) == 1


def test_amount_stored_in_cents(transaction_service, add):
    txn_id = add(amount="12.345")

    assert transaction_service.get_transaction(txn_id).amount == Decimal("12.35")


@pytest.mark.parametrize("amount", ["0.004", "NaN"])
def test_amount_that_rounds_to_zero_rejected(transaction_service, add, amount):
    with pytest.raises(ValidationError):
        add(amount=amount)
    assert transaction_service.count_for_month(Month(2024, 1)) == 0
