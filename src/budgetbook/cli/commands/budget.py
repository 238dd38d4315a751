"""Monthly budget commands."""

import click
from budgetbook.cli.error_handling import handle_domain_error, handle_invalid_input
from budgetbook.cli.formatting import format_budget, format_money, format_spent
from budgetbook.cli.resolution import resolve_category_or_exit, resolve_month_or_exit
from budgetbook.domain.budget import BudgetService
from budgetbook.domain.entities import CategoryRule
from budgetbook.domain.errors import DomainError
from budgetbook.domain.report import ReportService
from budgetbook.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage monthly budgets."""
    pass


@budget_group.command("set")
@click.argument("category")
@click.argument("amount", required=False)
@click.option("--month", help="Month (YYYY-MM, 'this month', 'next month'); defaults to the selected month")
@click.pass_context
def set_budget(ctx, category: str, amount: str | None, month: str | None):
    """Set CATEGORY's budget to AMOUNT, or remove it when AMOUNT is omitted."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    target = resolve_month_or_exit(ctx, month)
    cat = resolve_category_or_exit(ctx, category)

    budget_amount = None
    if amount is not None:
        try:
            budget_amount = parse_amount(amount)
        except ValueError as e:
            handle_invalid_input(ctx, "amount", e)

    try:
        service.set_budget(cat.id, target, budget_amount)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if budget_amount is None:
        click.echo(f"Removed {target.label} budget for '{cat.name}'")
    else:
        click.echo(f"Set {target.label} budget for '{cat.name}' to {format_money(budget_amount)}")


@budget_group.command("show")
@click.option("--month", help="Month (YYYY-MM, 'this month', 'last month'); defaults to the selected month")
@click.option("--all", "include_inactive", is_flag=True, help="Include categories with no activity or budget")
@click.pass_context
def show_budget(ctx, month: str | None, include_inactive: bool):
    """Show the budget sheet grouped by category group."""
    db = ctx.obj["db"]
    service = ReportService(db)

    target = resolve_month_or_exit(ctx, month)
    report = service.budget_sheet(target, include_inactive=include_inactive)

    click.echo(f"\nBudget for {target.label}")
    click.echo(f"Spent {format_money(report.total_spent)} of {format_money(report.total_budgeted)} budgeted")

    if not report.sections:
        click.echo("\nNothing to show. Set a budget with 'budget set' or add transactions.")
        return

    for section in report.sections:
        click.echo()
        header = f"{section.label} ({section.color})" if section.color else section.label
        click.echo(f"{header:<40} {format_money(section.spent):>12} / {format_money(section.budgeted):>12}")
        for row in section.rows:
            actual = format_spent(row.actual, row.rule == CategoryRule.SPENDING and row.actual < 0)
            click.echo(f"    {row.name:<36} {actual:>12} / {format_budget(row.budget_amount):>12}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
