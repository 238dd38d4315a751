"""Utility functions for budgetbook."""

from budgetbook.utils.date_parser import parse_date
from budgetbook.utils.amount_parser import parse_amount, to_cents
from budgetbook.utils.month import Month, parse_month

__all__ = ["parse_date", "parse_amount", "to_cents", "Month", "parse_month"]
