"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain never sees ORM rows.
"""

from decimal import Decimal

from budgetbook.domain import entities as domain
from budgetbook.database.models import (
    Category as ORMCategory,
    CategoryGroup as ORMCategoryGroup,
    Transaction as ORMTransaction,
    MonthlyBudget as ORMMonthlyBudget,
)
from budgetbook.utils.month import Month


def group_to_domain(orm_group: ORMCategoryGroup) -> domain.CategoryGroup:
    """Convert SQLAlchemy CategoryGroup model to domain CategoryGroup entity."""
    return domain.CategoryGroup(
        id=orm_group.id,
        name=orm_group.name,
        sort_order=orm_group.sort_order,
        color=orm_group.color,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    group = orm_category.group
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        rule=domain.CategoryRule(orm_category.rule),
        group_id=orm_category.group_id,
        group_name=group.name if group is not None else None,
        group_color=group.color if group is not None else None,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        account=orm_transaction.account,
        is_income=bool(orm_transaction.is_income),
        amount=Decimal(orm_transaction.amount),
        category_id=orm_transaction.category_id,
        notes=orm_transaction.notes,
    )


def monthly_budget_to_domain(orm_budget: ORMMonthlyBudget) -> domain.MonthlyBudget:
    """Convert SQLAlchemy MonthlyBudget model to domain MonthlyBudget entity."""
    return domain.MonthlyBudget(
        category_id=orm_budget.category_id,
        month=Month.parse(orm_budget.month),
        budget_amount=Decimal(orm_budget.budget_amount),
    )
