#!/usr/bin/env python3
"""
Matching Domain Models

Configuration and result types for order to bank transaction matching.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..core.errors import ValidationError
from ..core.models import BankTransaction
from ..core.money import Money, sum_money

if TYPE_CHECKING:
    from ..core.config import MatchingConfig


class MatchValidationError(ValidationError):
    """Raised when multi-charge matching inputs or results are inconsistent."""

    pass


# Days between order date and bank posting differ per provider
PROVIDER_DATE_TOLERANCES = {
    "walmart": 3,
    "amazon": 5,
    "costco": 5,
}

DEFAULT_AMOUNT_TOLERANCE_CENTS = 1
DEFAULT_DATE_TOLERANCE_DAYS = 5


@dataclass(frozen=True)
class MatcherConfig:
    """
    Matching tolerances.

    amount_tolerance is the largest allowed difference between the order
    total and the transaction magnitude. date_tolerance is the largest
    allowed number of days between order date and transaction date.
    """

    amount_tolerance: Money = field(default_factory=lambda: Money.from_cents(DEFAULT_AMOUNT_TOLERANCE_CENTS))
    date_tolerance: int = DEFAULT_DATE_TOLERANCE_DAYS

    @classmethod
    def for_provider(cls, provider: str) -> "MatcherConfig":
        """
        Preset tolerances for a provider.

        Args:
            provider: Provider name ("walmart", "amazon", ...), case-insensitive

        Returns:
            MatcherConfig with the provider's date tolerance (default for unknown providers)
        """
        days = PROVIDER_DATE_TOLERANCES.get(provider.lower(), DEFAULT_DATE_TOLERANCE_DAYS)
        return cls(date_tolerance=days)

    @classmethod
    def from_config(cls, matching: "MatchingConfig") -> "MatcherConfig":
        """Build from the environment-driven application config."""
        return cls(
            amount_tolerance=Money.from_cents(matching.amount_tolerance_cents),
            date_tolerance=matching.date_tolerance_days,
        )


@dataclass(frozen=True)
class MatchResult:
    """
    A bank transaction accepted as the payment for an order (or one charge of it).

    date_diff is in whole days and amount_diff is absolute.
    confidence is informational; it never affects which candidate wins.
    """

    transaction: BankTransaction
    date_diff: int
    amount_diff: Money
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "transaction_id": self.transaction.id,
            "transaction_amount": self.transaction.amount.to_float(),
            "transaction_date": self.transaction.date.to_iso_string(),
            "date_diff": self.date_diff,
            "amount_diff": self.amount_diff.to_float(),
            "confidence": self.confidence,
        }


@dataclass
class MultiMatchResult:
    """
    Result of matching each charge of a multi-charge order.

    matches is index-aligned with amounts: matches[i] is the transaction found
    for amounts[i], or None when that charge has not posted yet.
    """

    matches: list[MatchResult | None]
    amounts: list[Money]
    all_found: bool

    @property
    def found_count(self) -> int:
        return sum(1 for m in self.matches if m is not None)

    @property
    def transactions(self) -> list[BankTransaction]:
        """Matched transactions in charge order (missing charges omitted)."""
        return [m.transaction for m in self.matches if m is not None]

    @property
    def transaction_ids(self) -> list[str]:
        return [tx.id for tx in self.transactions]

    @property
    def matched_sum(self) -> Money:
        """Sum of matched transaction magnitudes."""
        return sum_money([tx.amount.abs() for tx in self.transactions])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "amounts": [a.to_float() for a in self.amounts],
            "matches": [m.to_dict() if m else None for m in self.matches],
            "all_found": self.all_found,
        }
