"""Signed ledger amounts."""

from decimal import Decimal


def signed_amount(amount: Decimal, is_income: bool) -> Decimal:
    """Convert a stored magnitude into a signed ledger contribution.

    Income is positive, spending is negative. This is the only place the
    direction of a transaction is derived.
    """
    return amount if is_income else -amount
