"""Category group management commands."""

import click
from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.colors import PALETTE, name_color
from budgetbook.domain.errors import DomainError
from budgetbook.domain.group import CategoryGroupService


@click.group()
def group_group():
    """Manage category groups."""
    pass


@group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List groups in display order."""
    db = ctx.obj["db"]
    service = CategoryGroupService(db)

    groups = service.list_groups()
    if not groups:
        click.echo("No groups yet. Create one with 'group create'.")
        return

    for grp in groups:
        color = grp.color or f"{name_color(grp.name)} (auto)"
        click.echo(f"{grp.sort_order:>3}. {grp.name} (ID: {grp.id}) {color}")


@group_group.command("create")
@click.argument("name")
@click.option("--color", type=click.Choice(PALETTE, case_sensitive=False), help="Group color")
@click.pass_context
def create_group(ctx, name: str, color: str | None):
    """Create a new group at the end of the list."""
    db = ctx.obj["db"]
    service = CategoryGroupService(db)

    try:
        group_id = service.create_group(name=name, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created group '{name.strip()}' (ID: {group_id})")


@group_group.command("move")
@click.argument("group_id", type=int)
@click.argument("direction", type=click.Choice(["up", "down"]))
@click.pass_context
def move_group(ctx, group_id: int, direction: str):
    """Move a group up or down in the display order."""
    db = ctx.obj["db"]
    service = CategoryGroupService(db)

    try:
        moved = service.move_group(group_id, direction)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if moved:
        click.echo(f"Moved group {group_id} {direction}")
    else:
        click.echo(f"Group {group_id} is already at the {'top' if direction == 'up' else 'bottom'}")


@group_group.command("color")
@click.argument("group_id", type=int)
@click.argument("color", required=False, type=click.Choice(PALETTE, case_sensitive=False))
@click.pass_context
def set_group_color(ctx, group_id: int, color: str | None):
    """Set a group's color, or clear it when COLOR is omitted."""
    db = ctx.obj["db"]
    service = CategoryGroupService(db)

    try:
        service.set_color(group_id, color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Set color of group {group_id} to {color}" if color else f"Cleared color of group {group_id}")


@group_group.command("delete")
@click.argument("group_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_group(ctx, group_id: int, yes: bool):
    """Delete a group. Its categories move to Unassigned."""
    db = ctx.obj["db"]
    service = CategoryGroupService(db)

    try:
        grp = service.require_group(group_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Delete '{grp.name}'? Its categories will move to Unassigned."):
        click.echo("Cancelled.")
        return

    unassigned = service.delete_group(group_id)
    click.echo(f"Deleted group '{grp.name}' ({unassigned} categories moved to Unassigned)")


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
