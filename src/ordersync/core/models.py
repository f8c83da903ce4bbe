#!/usr/bin/env python3
"""
Core Data Models for Order Sync

Common data structures shared by the matcher, allocator, splitter and
reconciler. Orders come from provider fetchers, transactions from the
ledger's bank feed; both are read-only inside the engine.
"""

from dataclasses import dataclass, field
from typing import Any

from .dates import FinancialDate
from .money import Money, sum_money


@dataclass(frozen=True)
class Category:
    """
    Ledger spending category.

    Categories are opaque to the engine: only the id and display name are used.
    """

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """Create Category from dictionary."""
        return cls(id=str(data["id"]), name=str(data["name"]))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class OrderItem:
    """
    Individual line item from a provider order.

    price is the line price (unit price times quantity) as listed by the provider.
    """

    name: str
    price: Money
    quantity: int = 1

    # Optional fields
    unit_price: Money | None = None
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "price": self.price.to_float(),
            "quantity": self.quantity,
            "unit_price": self.unit_price.to_float() if self.unit_price else None,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderItem":
        """Create OrderItem from dictionary (amounts in dollars)."""
        unit_price = data.get("unit_price")
        quantity = data.get("quantity", 1)
        return cls(
            name=str(data["name"]),
            price=Money.parse(data.get("price")),
            quantity=int(quantity) if quantity else 1,
            unit_price=Money.parse(unit_price) if unit_price is not None else None,
            category=data.get("category"),
        )


@dataclass(frozen=True)
class Order:
    """
    Provider-side purchase record.

    total is signed: positive for a purchase, negative for a return or refund.
    charges lists the separate bank charges the provider reports for this
    order, when known; more than one charge makes it a multi-charge order.
    non_bank_amount is the part paid by gift cards, points and similar.
    """

    id: str
    date: FinancialDate
    total: Money
    subtotal: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    tip: Money = field(default_factory=Money.zero)
    fees: Money = field(default_factory=Money.zero)
    items: tuple[OrderItem, ...] = ()

    provider: str = "unknown"
    charges: tuple[Money, ...] = ()
    non_bank_amount: Money = field(default_factory=Money.zero)

    @property
    def is_return(self) -> bool:
        """Returns and refunds carry a negative total."""
        return self.total.to_cents() < 0

    @property
    def is_multi_charge(self) -> bool:
        return len(self.charges) > 1

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def items_subtotal(self) -> Money:
        """Sum of item line prices."""
        return sum_money([item.price for item in self.items])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        """
        Create Order from a provider export dictionary.

        Amounts are dollars (strings or floats); date is ISO formatted.
        A missing subtotal defaults to the sum of item prices.
        """
        items = tuple(OrderItem.from_dict(item) for item in data.get("items", []))
        subtotal = data.get("subtotal")
        return cls(
            id=str(data["id"]),
            date=FinancialDate.from_value(data["date"]),
            total=Money.parse(data["total"]),
            subtotal=(
                Money.parse(subtotal) if subtotal is not None else sum_money([i.price for i in items])
            ),
            tax=Money.parse(data.get("tax")),
            tip=Money.parse(data.get("tip")),
            fees=Money.parse(data.get("fees")),
            items=items,
            provider=data.get("provider", "unknown"),
            charges=tuple(Money.parse(c) for c in data.get("charges", [])),
            non_bank_amount=Money.parse(data.get("non_bank_amount")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "provider": self.provider,
            "date": self.date.to_iso_string(),
            "total": self.total.to_float(),
            "subtotal": self.subtotal.to_float(),
            "tax": self.tax.to_float(),
            "tip": self.tip.to_float(),
            "fees": self.fees.to_float(),
            "items": [item.to_dict() for item in self.items],
            "charges": [c.to_float() for c in self.charges],
            "non_bank_amount": self.non_bank_amount.to_float(),
        }


@dataclass(frozen=True)
class BankTransaction:
    """
    Bank-feed transaction from the ledger.

    amount is signed: negative for money out (purchases), positive for money in
    (refunds). has_splits marks a transaction that was already split and must
    not be split again; is_split_transaction marks a child split, which is
    never a candidate for matching.
    """

    id: str
    amount: Money
    date: FinancialDate
    has_splits: bool = False
    is_split_transaction: bool = False

    # Optional fields
    merchant: str | None = None
    category_id: str | None = None
    notes: str | None = None

    @property
    def is_purchase(self) -> bool:
        """Money leaving the account (zero counts as a purchase)."""
        return self.amount.to_cents() <= 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BankTransaction":
        """Create BankTransaction from a ledger export dictionary (amount in dollars)."""
        return cls(
            id=str(data["id"]),
            amount=Money.parse(data["amount"]),
            date=FinancialDate.from_value(data["date"]),
            has_splits=_parse_bool(data.get("has_splits", False)),
            is_split_transaction=_parse_bool(data.get("is_split_transaction", False)),
            merchant=data.get("merchant") or None,
            category_id=data.get("category_id") or None,
            notes=data.get("notes") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "amount": self.amount.to_float(),
            "date": self.date.to_iso_string(),
            "has_splits": self.has_splits,
            "is_split_transaction": self.is_split_transaction,
            "merchant": self.merchant,
        }


def _parse_bool(value: Any) -> bool:
    """Parse CSV/JSON truthy values ("true", "1", True)."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    if value != value:  # NaN from pandas
        return False
    return bool(value)


# Type aliases for common data structures
OrderList = list[Order]
TransactionList = list[BankTransaction]
CategoryList = list[Category]
