"""Category management commands."""

import click
from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.cli.resolution import resolve_category_or_exit
from budgetbook.domain.category import CategoryService
from budgetbook.domain.colors import group_dot_color
from budgetbook.domain.entities import CategoryRule
from budgetbook.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories with their rule and group."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo(f"\n{'ID':>4}  {'Name':<30} {'Rule':<9} {'Group':<20} {'Txns':>5}")
    click.echo("-" * 74)
    for cat in categories:
        group = cat.group_name or "Unassigned"
        color = group_dot_color(cat.group_color, cat.group_name)
        count = service.transaction_count(cat.id)
        click.echo(f"{cat.id:>4}  {cat.name:<30} {cat.rule.value:<9} {group:<20} {count:>5}  {color}")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--rule",
    type=click.Choice([rule.value for rule in CategoryRule], case_sensitive=False),
    default=CategoryRule.SPENDING.value,
    help="Category rule (default: spending)",
)
@click.option("--group", "group_id", type=int, help="Group ID to place the category in")
@click.pass_context
def create_category(ctx, name: str, rule: str, group_id: int | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(name=name, rule=CategoryRule(rule.lower()), group_id=group_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


@category_group.command("assign")
@click.argument("category")
@click.option("--group", "group_id", type=int, help="Group ID (omit to move to Unassigned)")
@click.pass_context
def assign_category(ctx, category: str, group_id: int | None):
    """Move a category into a group, or to Unassigned."""
    db = ctx.obj["db"]
    service = CategoryService(db)
    cat = resolve_category_or_exit(ctx, category)

    try:
        service.assign_group(cat.id, group_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    target = f"group {group_id}" if group_id is not None else "Unassigned"
    click.echo(f"Moved '{cat.name}' to {target}")


@category_group.command("delete")
@click.argument("category")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category that has no transactions.

    Its monthly budgets are removed as well.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)
    cat = resolve_category_or_exit(ctx, category)

    if not yes and not click.confirm(f"Delete '{cat.name}'? Its monthly budgets will also be removed."):
        click.echo("Cancelled.")
        return

    try:
        service.delete_category(cat.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{cat.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
