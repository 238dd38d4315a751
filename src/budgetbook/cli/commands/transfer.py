"""Export and import commands."""

import json

import click
from budgetbook.cli.error_handling import handle_domain_error, handle_invalid_input
from budgetbook.cli.resolution import resolve_month_or_exit
from budgetbook.domain.errors import DomainError
from budgetbook.domain.transfer import TransferService


@click.command("export")
@click.option("--month", help="Month to export; defaults to the selected month")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Output file (default: budget-YYYY-MM.json)",
)
@click.pass_context
def export_month(ctx, month: str | None, output: str | None):
    """Export a month's categories, budgets and transactions as JSON."""
    db = ctx.obj["db"]
    service = TransferService(db)

    target = resolve_month_or_exit(ctx, month)
    data = service.export_month(target)
    path = output or f"budget-{target.key}.json"

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    click.echo(f"Exported {len(data['transactions'])} transactions for {target.label} to {path}")


@click.command("import")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def import_transactions(ctx, json_file: str, yes: bool):
    """Import the transactions array of an exported JSON file."""
    db = ctx.obj["db"]
    service = TransferService(db)

    try:
        with open(json_file, encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        handle_invalid_input(ctx, "JSON file", e)

    try:
        inputs = service.parse_import(payload)
    except DomainError as e:
        handle_domain_error(ctx, e)

    count = len(inputs)
    if not yes and not click.confirm(
        f"Import {count} transaction{'s' if count != 1 else ''}? "
        "This may create duplicates if the data was already imported."
    ):
        click.echo("Cancelled.")
        return

    imported = service.import_transactions(inputs)
    click.echo(f"{imported} transaction{'s' if imported != 1 else ''} imported.")


def register_commands(cli):
    """Register export and import commands with main CLI."""
    cli.add_command(export_month)
    cli.add_command(import_transactions)
