"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "123,45" (decimal comma)
    - "1 234,56" / "1,234.56" (thousands separators)
    - "123.45 ₽", "$123.45" (currency symbols)
    - "-123.45", "(123.45)" (negative)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and any whitespace (incl. non-breaking spaces)
    amount_str = re.sub(r"[$€£¥₽]|руб\.?", "", amount_str)
    amount_str = re.sub(r"\s", "", amount_str)

    # A lone comma followed by one or two digits is a decimal comma
    if "." not in amount_str and re.fullmatch(r"-?\d+,\d{1,2}", amount_str):
        amount_str = amount_str.replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    if is_negative:
        amount = -amount
    return amount
