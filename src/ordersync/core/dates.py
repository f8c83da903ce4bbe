#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for financial operations.
Provides standardized date handling across provider orders and bank feeds.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def from_value(cls, value: Any) -> "FinancialDate":
        """
        Coerce a raw value into a FinancialDate.

        Accepts FinancialDate, date, datetime (and pandas Timestamp, which is a
        datetime subclass) or a string. Strings may carry a time component
        ("2024-01-15T10:30:00Z"); only the date part is kept.
        """
        if isinstance(value, FinancialDate):
            return value
        if isinstance(value, datetime):
            return cls(date=value.date())
        if isinstance(value, date):
            return cls(date=value)
        if isinstance(value, str) and value:
            return cls.from_string(value.strip()[:10])
        raise ValueError(f"Cannot convert {value!r} to FinancialDate")

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def days_between(self, other: "FinancialDate") -> int:
        """
        Absolute number of days between two dates.

        Args:
            other: Date to compare to

        Returns:
            Non-negative day count
        """
        return abs((other.date - self.date).days)

    def age_days(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate days between this date and another (or today).

        Args:
            other: Other date to compare to (default: today)

        Returns:
            Number of days difference (signed)
        """
        if other is None:
            other = FinancialDate.today()
        return (other.date - self.date).days

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
