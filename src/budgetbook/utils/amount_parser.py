"""Amount parsing utilities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    """Round an amount to whole cents, the precision amounts are stored at."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a positive Decimal magnitude.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"

    Direction is never carried by the sign, so negative amounts and zero are
    rejected. Amounts are rounded to cents; anything that rounds to zero is
    rejected as well.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount in cents, always greater than zero

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError("Amount must be a positive number")
    try:
        amount = to_cents(amount)
    except InvalidOperation as e:
        raise ValueError(f"Amount '{amount_str}' is too large") from e
    if amount <= 0:
        raise ValueError("Amount must be at least 0.01")
    return amount
