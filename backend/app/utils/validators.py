"""
Validators — Rule-based checks for registration form input.
"""
import re
from decimal import Decimal, InvalidOperation

# Numeric(12, 2): two decimal places, ten integer digits
MAX_AMOUNT = Decimal("1e10")
AMOUNT_PLACES = 2


def validate_email(email: str | None) -> bool:
    """Loose shape check: local@domain.tld, no whitespace."""
    if not email:
        return False
    return bool(re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email.strip()))


def clean_text(value) -> str:
    """Strip surrounding whitespace; non-strings become empty."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def parse_amount(value) -> Decimal | None:
    """Convert to a positive, finite Decimal that fits the amount column.
    Returns None if not possible.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0 or amount >= MAX_AMOUNT:
        return None
    if amount.normalize().as_tuple().exponent < -AMOUNT_PLACES:
        return None
    return amount
