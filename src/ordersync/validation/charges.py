#!/usr/bin/env python3
"""
Charge Validation

Checks whether the bank charges found for an order account for everything
the provider says was paid by card. A mismatch is reported, not raised:
the usual cause is a charge that simply hasn't posted yet.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..core.money import Money, sum_money

logger = logging.getLogger(__name__)

# Each independently rounded charge can be a cent off
DEFAULT_CHARGE_TOLERANCE = Money.from_cents(2)


@dataclass(frozen=True)
class ChargeValidation:
    """
    Outcome of reconciling bank charges against an order.

    difference is bank_charges_sum - expected_sum (negative when short).
    reason is empty when valid.
    """

    valid: bool
    bank_charges_sum: Money
    expected_sum: Money
    difference: Money
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "valid": self.valid,
            "bank_charges_sum": self.bank_charges_sum.to_float(),
            "expected_sum": self.expected_sum.to_float(),
            "difference": self.difference.to_float(),
            "reason": self.reason,
        }


def validate_charges(
    bank_charges: list[Money],
    order_total: Money,
    non_bank_amount: Money | None = None,
    tolerance: Money | None = None,
) -> ChargeValidation:
    """
    Reconcile bank charges against an order total net of non-bank payments.

    Args:
        bank_charges: Charge amounts (positive)
        order_total: Order total (positive)
        non_bank_amount: Part paid by gift cards, points and similar
        tolerance: Allowed absolute difference (default 2 cents)

    Returns:
        ChargeValidation describing the comparison
    """
    if non_bank_amount is None:
        non_bank_amount = Money.zero()
    if tolerance is None:
        tolerance = DEFAULT_CHARGE_TOLERANCE

    expected = order_total - non_bank_amount
    if expected.to_cents() < 0:
        expected = Money.zero()

    charges_sum = sum_money(bank_charges)
    difference = charges_sum - expected

    if difference.abs() <= tolerance:
        return ChargeValidation(True, charges_sum, expected, difference)

    if difference.to_cents() < 0:
        reason = (
            f"bank charges ({charges_sum}) are less than expected ({expected}) - "
            f"missing {difference.abs()}, likely a charge hasn't posted yet"
        )
    else:
        reason = (
            f"bank charges ({charges_sum}) exceed expected ({expected}) by {difference} - "
            f"possible duplicate or stale record"
        )

    logger.debug("Charge validation failed: %s", reason)
    return ChargeValidation(False, charges_sum, expected, difference, reason)


def validate_charges_simple(bank_charges: list[Money], order_total: Money) -> ChargeValidation:
    """Validate charges for an order paid entirely through the bank."""
    return validate_charges(bank_charges, order_total, Money.zero())
