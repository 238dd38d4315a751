"""CLI tests driven through click's test runner."""

import json
from datetime import date
from decimal import Decimal

import pytest

from budgetbook.cli.main import cli
from budgetbook.utils.month import Month


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Run a CLI command against the temporary database."""

    def _invoke(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return _invoke


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "overview" in result.output


def test_init_categories(invoke):
    result = invoke("init-categories")
    assert result.exit_code == 0
    assert "Created 13 of 13 default categories." in result.output

    result = invoke("init-categories")
    assert "already exist" in result.output


def test_category_commands(invoke):
    assert invoke("category", "create", "Travel").exit_code == 0
    assert invoke("category", "create", "Salary", "--rule", "income").exit_code == 0

    result = invoke("category", "create", "Travel")
    assert result.exit_code == 1
    assert "Error: A category named 'Travel' already exists" in result.output

    result = invoke("category", "list")
    assert result.exit_code == 0
    assert "Travel" in result.output
    assert "income" in result.output

    result = invoke("category", "delete", "Travel", "--yes")
    assert result.exit_code == 0
    assert "Deleted category 'Travel'" in result.output


def test_unknown_category(invoke):
    result = invoke("budget", "set", "Nope", "10", "--month", "2024-01")
    assert result.exit_code == 1
    assert "Error: Category 'Nope' not found" in result.output


def test_group_commands(invoke):
    assert "ID: 1" in invoke("group", "create", "Essentials").output
    assert "ID: 2" in invoke("group", "create", "Fun", "--color", "#dc2626").output

    result = invoke("group", "move", "2", "up")
    assert "Moved group 2 up" in result.output
    result = invoke("group", "move", "2", "up")
    assert "already at the top" in result.output

    result = invoke("group", "list")
    lines = [line for line in result.output.splitlines() if "ID:" in line]
    assert "Fun" in lines[0]
    assert "Essentials" in lines[1]

    invoke("category", "create", "Rent", "--group", "1")
    result = invoke("group", "delete", "1", "--yes")
    assert "1 categories moved to Unassigned" in result.output


def test_add_and_list_transactions(invoke):
    invoke("category", "create", "Groceries")

    result = invoke(
        "add", "--date", "2024-01-15", "--description", "Weekly shop",
        "--account", "Checking", "--amount", "$54.20", "--category", "Groceries",
    )
    assert result.exit_code == 0
    assert "Created transaction 1" in result.output
    assert "-$54.20" in result.output

    result = invoke("transaction", "list", "--month", "2024-01")
    assert "Weekly shop" in result.output
    assert "Total: 1 transaction" in result.output

    result = invoke("transaction", "list", "--month", "2024-02")
    assert "No transactions for February 2024." in result.output


def test_add_rejects_bad_amount(invoke):
    invoke("category", "create", "Groceries")
    result = invoke(
        "add", "--description", "Bad", "--account", "Checking",
        "--amount", "0", "--category", "Groceries",
    )
    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_edit_and_delete_transaction(invoke):
    invoke("category", "create", "Groceries")
    invoke(
        "add", "--date", "2024-01-15", "--description", "Shop",
        "--account", "Checking", "--amount", "20", "--category", "Groceries",
    )

    result = invoke("transaction", "edit", "1", "--amount", "25", "--notes", "receipt lost")
    assert result.exit_code == 0
    assert "-$25.00" in invoke("transaction", "list", "--month", "2024-01").output

    result = invoke("transaction", "delete", "1", "--yes")
    assert "Deleted transaction 1" in result.output

    result = invoke("transaction", "delete", "1", "--yes")
    assert result.exit_code == 1


def test_overview(invoke, temp_db):
    groceries = temp_db.create_category(name="Groceries", rule="spending")
    clothes = temp_db.create_category(name="Clothes", rule="spending")
    wages = temp_db.create_category(name="Wages", rule="income")
    temp_db.create_transaction(date(2024, 1, 5), "Shop", "Checking", False, Decimal("150"), groceries)
    temp_db.create_transaction(date(2024, 1, 6), "Refund", "Visa", True, Decimal("20"), clothes)
    temp_db.create_transaction(date(2024, 1, 1), "Pay", "Checking", True, Decimal("2000"), wages)
    temp_db.set_budget(groceries, Month(2024, 1), Decimal("100"))

    result = invoke("overview", "--month", "2024-01")

    assert result.exit_code == 0
    assert "Overview for January 2024" in result.output
    assert "$2,000.00" in result.output
    assert "$130.00 of $100.00 budgeted (OVER BUDGET)" in result.output
    assert "+$20.00 profit" in result.output
    assert "150% !" in result.output


def test_budget_set_and_show(invoke, temp_db):
    temp_db.create_category(name="Groceries", rule="spending")
    temp_db.create_category(name="Wages", rule="income")

    result = invoke("budget", "set", "Groceries", "300", "--month", "2024-01")
    assert result.exit_code == 0
    assert "Set January 2024 budget for 'Groceries' to $300.00" in result.output

    # February picks up January's budget when first viewed
    result = invoke("budget", "show", "--month", "2024-02")
    assert "Spent $0.00 of $300.00 budgeted" in result.output
    assert "Unassigned" in result.output

    result = invoke("budget", "show", "--month", "2024-02", "--all")
    assert "Wages" in result.output

    result = invoke("budget", "set", "Groceries", "--month", "2024-02")
    assert "Removed February 2024 budget" in result.output


def test_month_selection(invoke):
    result = invoke("month", "select", "2024-12")
    assert "Selected December 2024" in result.output

    assert "Selected January 2025" in invoke("month", "next").output
    assert "Selected December 2024" in invoke("month", "prev").output
    assert "December 2024 (2024-12)" in invoke("month", "show").output

    result = invoke("month", "select", "2024-13")
    assert result.exit_code == 1


def test_selected_month_is_default(invoke):
    invoke("category", "create", "Groceries")
    invoke(
        "add", "--date", "2024-03-10", "--description", "Shop",
        "--account", "Checking", "--amount", "20", "--category", "Groceries",
    )
    invoke("month", "select", "2024-03")

    result = invoke("transaction", "list")
    assert "Transactions for March 2024" in result.output


def test_month_reset(invoke):
    invoke("category", "create", "Groceries")
    for day in ("2024-03-10", "2024-03-11", "2024-04-01"):
        invoke(
            "add", "--date", day, "--description", "Shop",
            "--account", "Checking", "--amount", "20", "--category", "Groceries",
        )

    result = invoke("month", "reset", "--month", "2024-03", input="n\n")
    assert "Cancelled." in result.output

    result = invoke("month", "reset", "--month", "2024-03", "--yes")
    assert "Deleted 2 transactions and 0 budgets for March 2024." in result.output
    assert "Total: 1 transaction" in invoke("transaction", "list", "--month", "2024-04").output


def test_export_and_import(invoke, tmp_path):
    invoke("category", "create", "Groceries")
    invoke(
        "add", "--date", "2024-01-15", "--description", "Shop",
        "--account", "Checking", "--amount", "20", "--category", "Groceries",
    )
    export_path = tmp_path / "january.json"

    result = invoke("export", "--month", "2024-01", "--output", str(export_path))
    assert result.exit_code == 0
    assert "Exported 1 transactions for January 2024" in result.output
    data = json.loads(export_path.read_text())
    assert data["month"] == "2024-01"

    result = invoke("import", str(export_path), "--yes")
    assert result.exit_code == 0
    assert "1 transaction imported." in result.output
    assert "Total: 2 transactions" in invoke("transaction", "list", "--month", "2024-01").output


def test_import_rejects_invalid_file(invoke, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"month": "2024-01"}))

    result = invoke("import", str(bad), "--yes")

    assert result.exit_code == 1
    assert "'transactions' array" in result.output


def test_import_rejects_non_utf8_file(invoke, tmp_path):
    bad = tmp_path / "latin1.json"
    bad.write_bytes(b'{"transactions": [{"description": "Caf\xe9"}]}')

    result = invoke("import", str(bad), "--yes")

    assert result.exit_code == 1
    assert "Error: Invalid JSON file" in result.output


def test_sub_cent_amount_rejected(invoke):
    invoke("category", "create", "Groceries")

    result = invoke("budget", "set", "Groceries", "0.004", "--month", "2024-01")

    assert result.exit_code == 1
    assert "Error: Invalid amount" in result.output
