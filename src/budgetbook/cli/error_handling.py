"""CLI error handling helpers."""

import logging

import click

from budgetbook.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    logger.debug(f"command_failed: command={ctx.info_name} error={type(error).__name__}")
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_invalid_input(ctx: click.Context, what: str, error: ValueError) -> None:
    """Render an unparseable option value, e.g. "Invalid amount: ...", and exit."""
    click.echo(f"Error: Invalid {what}: {error}", err=True)
    ctx.exit(1)
