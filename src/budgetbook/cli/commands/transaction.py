"""Transaction management commands."""

import click
from budgetbook.cli.error_handling import handle_domain_error, handle_invalid_input
from budgetbook.cli.resolution import resolve_category_or_exit, resolve_month_or_exit
from budgetbook.domain.category import CategoryService
from budgetbook.domain.errors import DomainError
from budgetbook.domain.transaction import TransactionService
from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--month", help="Month (YYYY-MM, 'this month', 'last month'); defaults to the selected month")
@click.option("--category", help="Category name or ID")
@click.option("--account", help="Account label")
@click.pass_context
def list_transactions(ctx, month: str | None, category: str | None, account: str | None):
    """List a month's transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    category_service = CategoryService(db)

    target = resolve_month_or_exit(ctx, month)
    category_id = resolve_category_or_exit(ctx, category).id if category else None

    transactions = service.list_transactions_for_month(target, category_id=category_id, account=account)
    if not transactions:
        click.echo(f"No transactions for {target.label}.")
        return

    names = {cat.id: cat.name for cat in category_service.list_categories()}
    click.echo(f"\nTransactions for {target.label}:")
    click.echo(f"{'ID':>5}  {'Date':<10}  {'Description':<30} {'Account':<15} {'Category':<20} {'Amount':>12}")
    click.echo("-" * 100)
    for txn in transactions:
        sign = "+" if txn.is_income else "-"
        amount = f"{sign}${txn.amount:,.2f}"
        category_name = names.get(txn.category_id, "(unknown)")
        click.echo(
            f"{txn.id:>5}  {txn.date.isoformat():<10}  {txn.description[:30]:<30} "
            f"{txn.account[:15]:<15} {category_name[:20]:<20} {amount:>12}"
        )
    click.echo(f"\nTotal: {len(transactions)} transaction{'s' if len(transactions) != 1 else ''}")


@transaction_group.command("accounts")
@click.pass_context
def list_accounts(ctx):
    """List account labels used so far."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    for account in service.list_accounts():
        click.echo(account)


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--description", help="Transaction description")
@click.option("--account", help="Account label")
@click.option("--amount", help="Positive amount")
@click.option("--category", help="Category name or ID")
@click.option("--income/--spending", "is_income", default=None, help="Direction of the transaction")
@click.option("--notes", help="Notes (empty string clears them)")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    date: str | None,
    description: str | None,
    account: str | None,
    amount: str | None,
    category: str | None,
    is_income: bool | None,
    notes: str | None,
):
    """Edit a transaction. Only the given fields change."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            handle_invalid_input(ctx, "date format", e)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            handle_invalid_input(ctx, "amount", e)

    category_id = resolve_category_or_exit(ctx, category).id if category else None

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            description=description,
            account=account,
            amount=txn_amount,
            category_id=category_id,
            is_income=is_income,
            notes=notes or None,
            clear_notes=notes == "",
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete '{txn.description}' for ${txn.amount:,.2f}?"):
        click.echo("Cancelled.")
        return

    service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
