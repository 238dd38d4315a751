"""Monthly overview command."""

import click
from budgetbook.cli.formatting import format_budget, format_money, format_spent
from budgetbook.cli.resolution import resolve_month_or_exit
from budgetbook.domain.report import ReportService


@click.command("overview")
@click.option("--month", help="Month (YYYY-MM, 'this month', 'last month'); defaults to the selected month")
@click.pass_context
def overview(ctx, month: str | None):
    """Show income, spending and budget progress for a month."""
    db = ctx.obj["db"]
    service = ReportService(db)

    target = resolve_month_or_exit(ctx, month)
    report = service.overview(target)

    click.echo(f"\nOverview for {target.label}")
    click.echo(f"  Income:   {format_money(report.total_income):>14}")
    click.echo(f"  Spending: {format_money(report.total_spending):>14}")
    click.echo(f"  Net:      {format_money(report.net):>14}")
    if report.total_budgeted > 0:
        status = "OVER BUDGET" if report.overall_over else f"{report.overall_pct:.0f}%"
        click.echo(
            f"  {format_money(report.total_spending)} of {format_money(report.total_budgeted)} budgeted ({status})"
        )
    click.echo(f"  Transactions: {report.transaction_count}")

    rows = report.spending_rows
    if not rows:
        click.echo("\nNo spending this month.")
        return

    click.echo(f"\n{'Category':<30} {'Spent':>18} {'Budget':>12} {'Used':>7}")
    click.echo("-" * 70)
    for row in rows:
        if row.is_profit or not row.has_budget:
            used = ""
        else:
            used = f"{row.pct_used:.0f}%"
        marker = " !" if row.is_over else ""
        click.echo(
            f"{row.name:<30} {format_spent(row.spent, row.is_profit):>18} "
            f"{format_budget(row.budget_amount):>12} {used:>7}{marker}"
        )


def register_commands(cli):
    """Register overview command with main CLI."""
    cli.add_command(overview)
