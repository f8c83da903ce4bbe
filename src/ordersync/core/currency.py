#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Currency handling for the order reconciliation engine.
All financial calculations use integer cents to avoid floating-point errors.

Currency Systems:
- Internal calculations use cents: 100 cents = $1.00
- Provider exports and bank feeds use dollar strings or floats: "12.34", 12.34
- Display uses dollar strings: "$12.34"

Sign Convention:
- The ledger records money leaving an account as a negative amount.
- A purchase is therefore matched against, and split into, negative amounts;
  a return or refund against positive amounts.
- sign_for_direction() is the one place this convention is encoded.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

PURCHASE_SIGN = -1
REFUND_SIGN = 1


def sign_for_direction(is_purchase: bool) -> int:
    """
    Get the ledger sign for a money direction.

    Args:
        is_purchase: True for money leaving the account (purchase, tip, fee),
                     False for money coming back (return, refund)

    Returns:
        -1 for purchases, +1 for refunds

    Example:
        sign_for_direction(True) -> -1
    """
    return PURCHASE_SIGN if is_purchase else REFUND_SIGN


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse dollar string to cents, rounding fractional cents half up.

    Args:
        dollars_str: String representation of dollar amount

    Returns:
        Amount in cents

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$12.34") -> 1234
        parse_dollars_to_cents("1,234.56") -> 123456
        parse_dollars_to_cents("-12.5") -> -1250
        parse_dollars_to_cents("10.005") -> 1001

    Raises:
        ValueError: If the string is not a number
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()

    if not clean:
        return 0

    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid dollar amount: '{dollars_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid dollar amount: '{dollars_str}'")

    # Same rounding as floats, so a value parses alike from JSON or CSV
    return int(amount.scaleb(2).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def safe_currency_to_cents(value: Union[str, int, float, None]) -> int:
    """
    Convert a loosely formatted currency value to integer cents.

    Floats coming from JSON or CSV are rounded to the nearest cent through
    Decimal so that 45.99 becomes 4599 and not 4598.

    Args:
        value: '$12.34', '12.34', 12.34, 12 (dollars) or None

    Returns:
        Integer cents, 0 for empty or unparseable input

    Examples:
        safe_currency_to_cents('$45.99') -> 4599
        safe_currency_to_cents(45.99) -> 4599
        safe_currency_to_cents('FREE') -> 0
    """
    if value is None:
        return 0
    try:
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value * 100
        if isinstance(value, float):
            if value != value:  # NaN from pandas
                return 0
            return int(Decimal(repr(value)).scaleb(2).quantize(Decimal(1), rounding=ROUND_HALF_UP))

        clean_str = str(value).replace("$", "").replace(",", "").strip()
        if not clean_str or clean_str.lower() in ("nan", "none", "free"):
            return 0

        return int(Decimal(clean_str).scaleb(2).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except (ValueError, TypeError, OverflowError, InvalidOperation):
        return 0


def round_half_up_div(numerator: int, denominator: int) -> int:
    """
    Integer division rounded half away from zero.

    This is the "round to cents" step of every proportional calculation:
    round_half_up_div(price_cents * total_cents, list_total_cents).

    Args:
        numerator: Dividend (any sign)
        denominator: Divisor (must be non-zero)

    Returns:
        Rounded quotient

    Examples:
        round_half_up_div(5, 2) -> 3
        round_half_up_div(-5, 2) -> -3
        round_half_up_div(4, 3) -> 1
    """
    if denominator == 0:
        raise ZeroDivisionError("round_half_up_div() denominator is zero")

    negative = (numerator < 0) != (denominator < 0)
    num, den = abs(numerator), abs(denominator)
    quotient = (2 * num + den) // (2 * den)
    return -quotient if negative else quotient


def safe_divide_proportional(numerator: int, denominator: int, total: int) -> int:
    """
    Proportional share of total, rounded half up.

    Args:
        numerator: The part (e.g. a category subtotal)
        denominator: The whole (e.g. the order subtotal)
        total: The amount being distributed (e.g. the order tax)

    Returns:
        round(numerator * total / denominator), or 0 when denominator is 0
    """
    if denominator == 0:
        return 0
    return round_half_up_div(numerator * total, denominator)


def largest_index(amounts: list[int], by_magnitude: bool = False) -> int:
    """
    Index of the largest amount, first seen on ties.

    Args:
        amounts: Amounts in cents (must not be empty)
        by_magnitude: Compare absolute values instead of signed values

    Returns:
        Index of the largest entry
    """
    if not amounts:
        raise ValueError("largest_index() of empty list")

    best = 0
    for i, amount in enumerate(amounts):
        current = abs(amount) if by_magnitude else amount
        leader = abs(amounts[best]) if by_magnitude else amounts[best]
        if current > leader:
            best = i
    return best


def validate_sum_equals_total(amounts: list[int], total: int, tolerance: int = 0) -> bool:
    """
    Validate that amounts sum to the expected total.

    Args:
        amounts: Amounts in cents
        total: Expected total in cents (negative for expenses)
        tolerance: Allowed difference in cents (default: 0 for exact match)

    Returns:
        True if sum matches within tolerance
    """
    return abs(sum(amounts) - total) <= tolerance


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix ("-$1.00" when negative)."""
    if cents < 0:
        return f"-${cents_to_dollars_str(-cents)}"
    return f"${cents_to_dollars_str(cents)}"
