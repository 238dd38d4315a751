"""Overview and budget sheet reports.

The builders are pure functions over already-fetched categories,
transactions and budgets. `ReportService` performs the fetch sequence for a
month, running the budget rollover first so that percentages reflect
carried-forward budgets.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from budgetbook.database.base import Database
from budgetbook.domain.aggregation import (
    aggregate_by_category,
    displayed_amount,
    index_categories,
)
from budgetbook.domain.colors import INCOME_COLOR
from budgetbook.domain.entities import (
    BudgetRow,
    Category,
    CategoryGroup,
    CategoryRule,
    FlatReport,
    GroupedReport,
    GroupSection,
    MonthlyBudget,
    ReportRow,
    Transaction,
)
from budgetbook.domain.rollover import BudgetRolloverService
from budgetbook.utils.month import Month

INCOME_KEY = "income"
UNASSIGNED_KEY = "unassigned"

ZERO = Decimal("0")


def budget_lookup(budgets: Iterable[MonthlyBudget]) -> dict[int, Decimal]:
    """Build a category ID to budget amount lookup."""
    return {budget.category_id: budget.budget_amount for budget in budgets}


def percent_used(spent: Decimal, budget_amount: Optional[Decimal]) -> float:
    """Percentage of the budget used; 0 when there is no positive budget.

    Negative when the category is in profit.
    """
    if budget_amount is None or budget_amount <= 0:
        return 0.0
    return float(spent / budget_amount * 100)


def report_sort_key(row: ReportRow) -> tuple:
    """Ordering for overview rows.

    Budgeted rows come first, over-budget before within-budget, each by
    descending percentage used. Unbudgeted rows follow by descending spend.
    """
    if row.has_budget:
        return (0, 0 if row.is_over else 1, -row.pct_used)
    return (1, 0, -row.spent)


def build_flat_report(
    month: Month,
    categories: Sequence[Category],
    transactions: Sequence[Transaction],
    budgets: Iterable[MonthlyBudget],
) -> FlatReport:
    """Build the flat per-category overview.

    Args:
        month: Month the data belongs to
        categories: All categories, in listing order
        transactions: The month's transactions
        budgets: The month's budget rows

    Returns:
        FlatReport with sorted rows and totals
    """
    raw_net = aggregate_by_category(transactions, index_categories(categories))
    budget_map = budget_lookup(budgets)

    rows: list[ReportRow] = []
    total_income = ZERO
    total_spending = ZERO
    total_budgeted = ZERO

    for category in categories:
        spent = displayed_amount(category.rule, raw_net.get(category.id, ZERO))
        budget_amount = budget_map.get(category.id)

        # Profit in a spending category lowers total spending
        if category.rule == CategoryRule.INCOME:
            total_income += spent
        else:
            total_spending += spent

        row = ReportRow(
            category_id=category.id,
            name=category.name,
            rule=category.rule,
            spent=spent,
            budget_amount=budget_amount,
            pct_used=percent_used(spent, budget_amount),
            group_name=category.group_name,
            group_color=category.group_color,
        )
        if row.spent == 0 and not row.has_budget:
            continue
        if row.has_budget and category.rule == CategoryRule.SPENDING:
            total_budgeted += budget_amount
        rows.append(row)

    rows.sort(key=report_sort_key)

    return FlatReport(
        month=month,
        rows=tuple(rows),
        total_income=total_income,
        total_spending=total_spending,
        total_budgeted=total_budgeted,
        transaction_count=len(transactions),
    )


def build_budget_rows(
    categories: Sequence[Category],
    transactions: Sequence[Transaction],
    budgets: Iterable[MonthlyBudget],
) -> list[BudgetRow]:
    """Build one budget sheet row per category."""
    raw_net = aggregate_by_category(transactions, index_categories(categories))
    budget_map = budget_lookup(budgets)
    return [
        BudgetRow(
            category_id=category.id,
            name=category.name,
            rule=category.rule,
            budget_amount=budget_map.get(category.id),
            actual=displayed_amount(category.rule, raw_net.get(category.id, ZERO)),
            group_id=category.group_id,
            group_name=category.group_name,
            group_color=category.group_color,
        )
        for category in categories
    ]


def group_sections(rows: Iterable[BudgetRow], groups: Sequence[CategoryGroup]) -> list[GroupSection]:
    """Bucket budget rows into Income, named groups and Unassigned.

    Income comes first, named groups follow in the order given, Unassigned is
    last. Buckets without rows are dropped.
    """
    income = GroupSection(key=INCOME_KEY, label="Income", color=INCOME_COLOR)
    unassigned = GroupSection(key=UNASSIGNED_KEY, label="Unassigned", color=None)
    named = {
        group.id: GroupSection(key=str(group.id), label=group.name, color=group.color)
        for group in groups
    }

    for row in rows:
        if row.rule == CategoryRule.INCOME:
            income.add(row)
        elif row.group_id is not None and row.group_id in named:
            named[row.group_id].add(row)
        else:
            unassigned.add(row)

    sections = [income] + [named[group.id] for group in groups] + [unassigned]
    return [section for section in sections if section.rows]


def build_grouped_report(
    month: Month,
    categories: Sequence[Category],
    groups: Sequence[CategoryGroup],
    transactions: Sequence[Transaction],
    budgets: Iterable[MonthlyBudget],
    include_inactive: bool = False,
) -> GroupedReport:
    """Build the grouped budget sheet.

    Args:
        month: Month the data belongs to
        categories: All categories
        groups: Groups ordered by sort order
        transactions: The month's transactions
        budgets: The month's budget rows
        include_inactive: If True, keep categories with no activity and no
            budget (needed when editing budgets)

    Returns:
        GroupedReport with sections and header totals
    """
    rows = build_budget_rows(categories, transactions, budgets)

    total_budgeted = ZERO
    total_spent = ZERO
    for row in rows:
        if row.rule != CategoryRule.SPENDING:
            continue
        if row.has_budget:
            total_budgeted += row.budget_amount
        if row.actual > 0:
            total_spent += row.actual

    if not include_inactive:
        rows = [row for row in rows if row.is_active]

    return GroupedReport(
        month=month,
        sections=tuple(group_sections(rows, groups)),
        total_budgeted=total_budgeted,
        total_spent=total_spent,
    )


class ReportService:
    """Service that loads a month's data and builds reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.rollover = BudgetRolloverService(db)

    def overview(self, month: Month) -> FlatReport:
        """Build the flat overview for a month."""
        self.rollover.ensure_budgets_for_month(month)
        categories = self.db.list_categories()
        transactions = self.db.list_transactions_for_month(month)
        budgets = self.db.list_monthly_budgets(month)
        return build_flat_report(month, categories, transactions, budgets)

    def budget_sheet(self, month: Month, include_inactive: bool = False) -> GroupedReport:
        """Build the grouped budget sheet for a month."""
        self.rollover.ensure_budgets_for_month(month)
        categories = self.db.list_categories()
        groups = self.db.list_groups()
        transactions = self.db.list_transactions_for_month(month)
        budgets = self.db.list_monthly_budgets(month)
        return build_grouped_report(
            month,
            categories,
            groups,
            transactions,
            budgets,
            include_inactive=include_inactive,
        )
