#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from typing import Union

from .currency import (
    format_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Supports both positive (refunds/inflows) and negative (purchases/outflows) amounts.
    Uses integer arithmetic throughout to prevent floating-point errors.

    Examples:
        >>> order_total = Money.from_dollars("103.27")
        >>> str(order_total)
        '$103.27'

        >>> charge = Money.from_float(-52.55)  # bank feed amount
        >>> charge.to_cents()
        -5255

        >>> charge.abs()
        Money(cents=5255)
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int) -> "Money":
        """
        Parse from dollar string like '$123.45' or integer dollars.

        Args:
            dollars: String like "$12.34" or integer like 12

        Returns:
            Money object
        """
        if isinstance(dollars, int):
            return cls(cents=dollars * 100)
        return cls(cents=parse_dollars_to_cents(dollars))

    @classmethod
    def from_float(cls, dollars: float) -> "Money":
        """
        Create Money from a float dollar amount, rounded to the nearest cent.

        Bank feeds and provider APIs report amounts as floats; this is the
        only place they enter the system.
        """
        return cls(cents=safe_currency_to_cents(float(dollars)))

    @classmethod
    def parse(cls, value: Union["Money", str, int, float, None]) -> "Money":
        """
        Coerce a raw JSON/CSV value into Money.

        Strings and floats are dollars; Money passes through; None is zero.
        """
        if isinstance(value, Money):
            return value
        if isinstance(value, str):
            return cls(cents=parse_dollars_to_cents(value))
        return cls(cents=safe_currency_to_cents(value))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_float(self) -> float:
        """Get value in dollars as float (for JSON output only)."""
        return self.cents / 100

    def to_dollars(self) -> str:
        """Get formatted dollar string."""
        return str(self)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def with_sign(self, sign: int) -> "Money":
        """Return the magnitude of this amount carrying the given sign (+1/-1)."""
        return Money(cents=abs(self.cents) * (1 if sign >= 0 else -1))

    def is_zero(self) -> bool:
        """Check whether the amount is zero."""
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __neg__(self) -> "Money":
        """Negate."""
        return Money(cents=-self.cents)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"


def sum_money(amounts: list[Money]) -> Money:
    """Sum a list of Money values (zero for an empty list)."""
    return Money(cents=sum(m.cents for m in amounts))
