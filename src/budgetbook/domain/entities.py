"""Domain model entities for budgetbook.

These are pure data classes representing business concepts, independent of
database schema. Storage rows are converted into these records at the
database boundary so the reporting code never works on untyped mappings.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from budgetbook.utils.month import Month


class CategoryRule(str, Enum):
    """Direction a category is reported in."""

    INCOME = "income"
    SPENDING = "spending"


@dataclass(frozen=True)
class CategoryGroup:
    """Named, ordered bucket of categories."""

    id: int
    name: str
    sort_order: int
    color: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Category domain entity.

    `group_name` and `group_color` are read through from the assigned group.
    """

    id: int
    name: str
    rule: CategoryRule
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    group_color: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.rule == CategoryRule.INCOME


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    `amount` is always a positive magnitude; direction is carried by
    `is_income`.
    """

    id: int
    date: date
    description: str
    account: str
    is_income: bool
    amount: Decimal
    category_id: int
    notes: Optional[str] = None

    @property
    def month(self) -> Month:
        return Month.of(self.date)


@dataclass(frozen=True)
class TransactionInput:
    """Transaction fields as supplied by a caller or an import file."""

    date: date
    description: str
    account: str
    is_income: bool
    amount: Decimal
    category_id: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class MonthlyBudget:
    """Budget allocation for a category in one month."""

    category_id: int
    month: Month
    budget_amount: Decimal


@dataclass(frozen=True)
class ReportRow:
    """One category line of the flat overview report."""

    category_id: int
    name: str
    rule: CategoryRule
    spent: Decimal
    budget_amount: Optional[Decimal]
    pct_used: float
    group_name: Optional[str] = None
    group_color: Optional[str] = None

    @property
    def has_budget(self) -> bool:
        return self.budget_amount is not None and self.budget_amount > 0

    @property
    def is_over(self) -> bool:
        return self.pct_used > 100

    @property
    def is_profit(self) -> bool:
        """Money flowed back into a spending category."""
        return self.rule == CategoryRule.SPENDING and self.spent < 0


@dataclass(frozen=True)
class FlatReport:
    """Flat per-category overview for one month."""

    month: Month
    rows: tuple[ReportRow, ...]
    total_income: Decimal
    total_spending: Decimal
    total_budgeted: Decimal
    transaction_count: int

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_spending

    @property
    def overall_pct(self) -> float:
        if self.total_budgeted <= 0:
            return 0.0
        return min(float(self.total_spending / self.total_budgeted * 100), 100.0)

    @property
    def overall_over(self) -> bool:
        return self.total_budgeted > 0 and self.total_spending > self.total_budgeted

    @property
    def spending_rows(self) -> tuple[ReportRow, ...]:
        return tuple(row for row in self.rows if row.rule == CategoryRule.SPENDING)

    @property
    def budgeted_rows(self) -> tuple[ReportRow, ...]:
        return tuple(row for row in self.spending_rows if row.has_budget)


@dataclass(frozen=True)
class BudgetRow:
    """One category line of the grouped budget sheet."""

    category_id: int
    name: str
    rule: CategoryRule
    budget_amount: Optional[Decimal]
    actual: Decimal
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    group_color: Optional[str] = None

    @property
    def has_budget(self) -> bool:
        return self.budget_amount is not None and self.budget_amount > 0

    @property
    def is_active(self) -> bool:
        return self.actual != 0 or self.has_budget


@dataclass
class GroupSection:
    """A bucket of budget rows: Income, a named group, or Unassigned."""

    key: str
    label: str
    color: Optional[str]
    budgeted: Decimal = Decimal("0")
    spent: Decimal = Decimal("0")
    rows: list[BudgetRow] = field(default_factory=list)

    def add(self, row: BudgetRow) -> None:
        self.rows.append(row)
        if row.has_budget:
            self.budgeted += row.budget_amount
        # Profit rows never reduce a bucket total
        if row.actual > 0:
            self.spent += row.actual


@dataclass(frozen=True)
class GroupedReport:
    """Grouped budget sheet for one month."""

    month: Month
    sections: tuple[GroupSection, ...]
    total_budgeted: Decimal
    total_spent: Decimal

    def section(self, key: str) -> Optional[GroupSection]:
        for section in self.sections:
            if section.key == key:
                return section
        return None
