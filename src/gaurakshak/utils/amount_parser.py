"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a positive amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45"
    - "Rs. 1,234.56"
    - "1,00,000" (Indian digit grouping)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount greater than zero

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()
    cleaned = re.sub(r"^(₹|rs\.?|inr)", "", cleaned, flags=re.IGNORECASE)
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got '{amount_str}'")
    return amount
