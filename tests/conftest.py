"""Shared pytest fixtures for budgetbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from budgetbook.database.factories import create_sqlite_database
from budgetbook.domain.budget import BudgetService
from budgetbook.domain.category import CategoryService
from budgetbook.domain.entities import Category, CategoryRule, MonthlyBudget, Transaction
from budgetbook.domain.group import CategoryGroupService
from budgetbook.domain.report import ReportService
from budgetbook.domain.rollover import BudgetRolloverService
from budgetbook.domain.transaction import TransactionService
from budgetbook.domain.transfer import TransferService
from budgetbook.utils.month import Month


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def group_service(temp_db):
    """Create a CategoryGroupService with a temporary database."""
    return CategoryGroupService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def rollover_service(temp_db):
    """Create a BudgetRolloverService with a temporary database."""
    return BudgetRolloverService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def sample_categories(category_service):
    """Create a small category set and return IDs by name."""
    return {
        "Groceries": category_service.create_category("Groceries"),
        "Eating Out": category_service.create_category("Eating Out"),
        "Clothes": category_service.create_category("Clothes"),
        "Wages": category_service.create_category("Wages", rule=CategoryRule.INCOME),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def make_category(id, name, rule=CategoryRule.SPENDING, group_id=None, group_name=None):
    """Build a Category entity without a database."""
    return Category(id=id, name=name, rule=rule, group_id=group_id, group_name=group_name)


def make_transaction(id, category_id, amount, is_income=False, day=date(2024, 1, 15)):
    """Build a Transaction entity without a database."""
    return Transaction(
        id=id,
        date=day,
        description=f"Transaction {id}",
        account="Checking",
        is_income=is_income,
        amount=Decimal(str(amount)),
        category_id=category_id,
    )


def make_budget(category_id, amount, month=Month(2024, 1)):
    """Build a MonthlyBudget entity without a database."""
    return MonthlyBudget(category_id=category_id, month=month, budget_amount=Decimal(str(amount)))
