"""CLI helpers for resolving months and categories from arguments."""

from __future__ import annotations

import click

from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.category import CategoryService
from budgetbook.domain.entities import Category
from budgetbook.domain.errors import DomainError
from budgetbook.domain.selection import MonthService
from budgetbook.utils.month import Month, parse_month


def resolve_month_or_exit(ctx: click.Context, month: str | None) -> Month:
    """Resolve a --month option, defaulting to the selected month."""
    if month is None:
        return MonthService(ctx.obj["db"]).selected_month()
    try:
        return parse_month(month)
    except ValueError as e:
        handle_domain_error(ctx, e)


def resolve_category_or_exit(ctx: click.Context, category: str) -> Category:
    """Resolve a category name or ID, or exit with a CLI error."""
    try:
        return CategoryService(ctx.obj["db"]).resolve_category(category)
    except DomainError as e:
        handle_domain_error(ctx, e)
