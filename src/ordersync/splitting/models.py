#!/usr/bin/env python3
"""
Split Domain Models

Category splits produced for a matched bank transaction.
"""

from dataclasses import dataclass
from typing import Any

from ..core.errors import ValidationError
from ..core.models import OrderItem
from ..core.money import Money


class SplitCalculationError(ValidationError):
    """Raised when split calculation fails validation"""

    pass


@dataclass(frozen=True)
class CategorySplit:
    """
    One category's portion of a bank transaction.

    amount carries the parent transaction's sign, except for a tip split,
    which is always an expense.
    """

    category_id: str
    category_name: str
    amount: Money
    notes: str
    items: tuple[OrderItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "amount": self.amount.to_float(),
            "notes": self.notes,
            "items": [item.name for item in self.items],
        }
