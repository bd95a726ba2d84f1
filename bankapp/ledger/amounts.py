"""
Amount Coercion

Turns whatever the caller supplied into a Decimal, or None when the value
cannot be an amount at all. Range checks (> 0, <= balance) are the
ledger's job, not this module's.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def coerce_amount(value: Any) -> Optional[Decimal]:
    """
    Convert int, float, Decimal or numeric str to a finite Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1").
    Returns None for bool, None, non-numeric text, NaN and infinities.
    """
    # bool is an int subclass; True is not an amount
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not amount.is_finite():
        return None
    return amount


def parse_amount(text: Any) -> Optional[Decimal]:
    """
    Parse an amount typed by a user.

    Accepts a comma as the decimal separator and ignores spaces used as
    thousands separators ("1 250,50"). Values that are already numbers
    (from a numeric widget) skip the text clean-up. Returns None unless the
    result is a finite number greater than zero.
    """
    if isinstance(text, str):
        text = text.replace(" ", "").replace("\u00a0", "").replace(",", ".")
        if not text:
            return None

    amount = coerce_amount(text)
    if amount is None or amount <= 0:
        return None
    return amount
