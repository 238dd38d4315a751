"""Initialize default categories."""

import click
from budgetbook.domain.category import CategoryService, DEFAULT_CATEGORIES


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default set of categories.

    Categories that already exist are left untouched.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.seed_default_categories()
    if created == 0:
        click.echo("Default categories already exist.")
        return

    click.echo(f"Created {created} of {len(DEFAULT_CATEGORIES)} default categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
