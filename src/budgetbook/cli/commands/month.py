"""Selected month commands."""

import click
from budgetbook.cli.resolution import resolve_month_or_exit
from budgetbook.domain.selection import MonthService
from budgetbook.domain.transaction import TransactionService


@click.group()
def month_group():
    """Select the month all commands default to."""
    pass


@month_group.command("show")
@click.pass_context
def show_month(ctx):
    """Show the selected month."""
    service = MonthService(ctx.obj["db"])
    selected = service.selected_month()
    click.echo(f"{selected.label} ({selected.key})")


@month_group.command("select")
@click.argument("month")
@click.pass_context
def select_month(ctx, month: str):
    """Select MONTH (YYYY-MM, 'this month', 'last month', 'next month')."""
    service = MonthService(ctx.obj["db"])
    selected = service.select_month(resolve_month_or_exit(ctx, month))
    click.echo(f"Selected {selected.label}")


@month_group.command("next")
@click.pass_context
def next_month(ctx):
    """Select the month after the current selection."""
    service = MonthService(ctx.obj["db"])
    click.echo(f"Selected {service.shift_selected(1).label}")


@month_group.command("prev")
@click.pass_context
def prev_month(ctx):
    """Select the month before the current selection."""
    service = MonthService(ctx.obj["db"])
    click.echo(f"Selected {service.shift_selected(-1).label}")


@month_group.command("reset")
@click.option("--month", help="Month to reset; defaults to the selected month")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def reset_month(ctx, month: str | None, yes: bool):
    """Delete all transactions and budgets of a month.

    Other months are not affected.
    """
    service = TransactionService(ctx.obj["db"])
    target = resolve_month_or_exit(ctx, month)

    count = service.count_for_month(target)
    if count == 0:
        click.echo(f"There are no transactions for {target.label}.")
        return

    if not yes and not click.confirm(
        f"This will permanently delete {count} transaction{'s' if count != 1 else ''} "
        f"for {target.label}. Continue?"
    ):
        click.echo("Cancelled.")
        return

    transactions, budgets = service.reset_month(target)
    click.echo(f"Deleted {transactions} transactions and {budgets} budgets for {target.label}.")


def register_commands(cli):
    """Register month commands with main CLI."""
    cli.add_command(month_group, name="month")
