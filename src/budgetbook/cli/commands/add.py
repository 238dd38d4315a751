"""Add transaction command."""

import click
from budgetbook.cli.error_handling import handle_domain_error, handle_invalid_input
from budgetbook.cli.resolution import resolve_category_or_exit
from budgetbook.domain.errors import DomainError
from budgetbook.domain.transaction import TransactionService
from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", required=True, help="Transaction description")
@click.option("--account", required=True, help="Account label (e.g. 'Checking')")
@click.option("--amount", required=True, help="Positive amount (e.g. 123.45)")
@click.option("--category", required=True, help="Category name or ID")
@click.option(
    "--income/--spending",
    "is_income",
    default=None,
    help="Direction of the transaction (defaults from the category rule)",
)
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    description: str,
    account: str,
    amount: str,
    category: str,
    is_income: bool | None,
    notes: str | None,
):
    """Add a transaction.

    Examples:
        budgetbook add --description "Weekly shop" --account Checking --amount 54.20 --category Groceries
        budgetbook add --date 2024-01-31 --description Payroll --account Checking --amount 2500 --category Wages
        budgetbook add --description "Refund" --account Visa --amount 30 --category Clothes --income
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        handle_invalid_input(ctx, "date format", e)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        handle_invalid_input(ctx, "amount", e)

    category_obj = resolve_category_or_exit(ctx, category)

    try:
        transaction_id = service.create_transaction(
            date=txn_date,
            description=description,
            account=account,
            amount=txn_amount,
            category_id=category_obj.id,
            is_income=is_income,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {'+' if txn.is_income else '-'}${txn.amount:,.2f}")
    click.echo(f"  Category: {category_obj.name}")
    click.echo(f"  Account: {txn.account}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
