"""Domain layer for budgetbook application."""

from importlib import import_module

# Services import the database layer, which imports domain.entities, so they
# are loaded lazily to avoid circular dependencies
_SERVICES = {
    "TransactionService": "budgetbook.domain.transaction",
    "CategoryService": "budgetbook.domain.category",
    "CategoryGroupService": "budgetbook.domain.group",
    "BudgetService": "budgetbook.domain.budget",
    "BudgetRolloverService": "budgetbook.domain.rollover",
    "ReportService": "budgetbook.domain.report",
    "MonthService": "budgetbook.domain.selection",
    "TransferService": "budgetbook.domain.transfer",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
