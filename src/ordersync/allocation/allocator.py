#!/usr/bin/env python3
"""
Pro-rata Cost Allocator

Distributes an amount actually paid across items in proportion to their
list prices. Used when a provider reports list prices but the bank charged
something else (discounts, gift cards, partial charges).

Uses integer arithmetic throughout: each share is
round_half_up(list_price * order_total / total_list_price) in cents, and a
small rounding remainder is folded into the largest share so the shares add
up to the order total.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..core.currency import largest_index, round_half_up_div
from ..core.errors import ValidationError
from ..core.models import OrderItem
from ..core.money import Money, sum_money

logger = logging.getLogger(__name__)

# Remainders this large point at bad input rather than rounding
ALLOCATION_CORRECTION_LIMIT = Money.from_cents(10)


class AllocationError(ValidationError):
    """Raised when allocation inputs are invalid"""

    pass


@dataclass(frozen=True)
class AllocationItem:
    """An item to receive a share of the order total."""

    name: str
    list_price: Money

    @classmethod
    def from_order_item(cls, item: OrderItem) -> "AllocationItem":
        """Use the item's line price as its list price."""
        return cls(name=item.name, list_price=item.price)


@dataclass(frozen=True)
class Allocation:
    """One item's share of the order total."""

    name: str
    list_price: Money
    allocated_cost: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "list_price": self.list_price.to_float(),
            "allocated_cost": self.allocated_cost.to_float(),
        }


@dataclass
class AllocationResult:
    """
    Allocation of an order total across items.

    multiplier is order_total / total_list_price, for display only.
    allocations is index-aligned with the input items.
    """

    multiplier: float
    allocations: list[Allocation]
    total_allocated: Money

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "multiplier": self.multiplier,
            "allocations": [a.to_dict() for a in self.allocations],
            "total_allocated": self.total_allocated.to_float(),
        }


def allocate(
    items: list[AllocationItem],
    order_total: Money,
    correction_limit: Money | None = None,
) -> AllocationResult:
    """
    Allocate order_total across items proportionally to list price.

    Args:
        items: Items with non-negative list prices
        order_total: Non-negative amount to distribute
        correction_limit: Largest rounding remainder that is folded into the
            biggest share (exclusive; default ALLOCATION_CORRECTION_LIMIT)

    Returns:
        AllocationResult with one Allocation per item

    Raises:
        AllocationError: If items is empty, order_total is negative, or any
            list price is negative
    """
    if correction_limit is None:
        correction_limit = ALLOCATION_CORRECTION_LIMIT

    if not items:
        raise AllocationError("no items to allocate")

    if order_total.to_cents() < 0:
        raise AllocationError(f"order total cannot be negative: {order_total}")

    for item in items:
        if item.list_price.to_cents() < 0:
            raise AllocationError(f"item list price cannot be negative: {item.name} {item.list_price}")

    total_list_cents = sum(item.list_price.to_cents() for item in items)
    total_cents = order_total.to_cents()

    # Nothing to scale against: every item was free
    if total_list_cents == 0:
        logger.debug("All %d items are free, allocating zero", len(items))
        allocations = [Allocation(item.name, item.list_price, Money.zero()) for item in items]
        return AllocationResult(multiplier=0.0, allocations=allocations, total_allocated=Money.zero())

    shares = [round_half_up_div(item.list_price.to_cents() * total_cents, total_list_cents) for item in items]

    diff = total_cents - sum(shares)
    if diff != 0:
        if abs(diff) < correction_limit.to_cents():
            idx = largest_index(shares)
            shares[idx] += diff
            logger.debug("Folded %d cent remainder into %s", diff, items[idx].name)
        else:
            logger.warning(
                "Allocation remainder %s exceeds correction limit %s, left uncorrected",
                Money.from_cents(diff),
                correction_limit,
            )

    allocations = [
        Allocation(name=item.name, list_price=item.list_price, allocated_cost=Money.from_cents(share))
        for item, share in zip(items, shares, strict=True)
    ]

    return AllocationResult(
        multiplier=total_cents / total_list_cents,
        allocations=allocations,
        total_allocated=sum_money([a.allocated_cost for a in allocations]),
    )
