"""Main CLI entry point."""

import logging

import click
from budgetbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from budgetbook.cli.commands import (
    add,
    budget,
    category,
    group,
    init_categories,
    month,
    overview,
    transaction,
    transfer,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETBOOK_DB_PATH environment variable)",
    envvar="BUDGETBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BUDGETBOOK_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Budgetbook - Monthly budget tracker.

    Track income and spending by category, set monthly budgets that roll
    forward automatically, and review where each month stands.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=getattr(logging, log_level.upper()))

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_categories.register_commands(cli)
category.register_commands(cli)
group.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
overview.register_commands(cli)
month.register_commands(cli)
transfer.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
