#!/usr/bin/env python3
"""
Category Splitter

Turns a categorized order into category splits for its matched bank
transaction. Uses integer arithmetic throughout.

Key Features:
- Items grouped by category in first-seen order
- Tax shared across categories in proportion to their subtotals
- Delivery tip kept as its own expense split
- Final rounding correction so splits sum exactly to the transaction
"""

import logging
from dataclasses import dataclass, field

from ..core.config import DEFAULT_TIP_CATEGORIES, DEFAULT_TIP_FALLBACK_CATEGORY, SplittingConfig
from ..core.currency import largest_index, safe_divide_proportional, sign_for_direction
from ..core.models import BankTransaction, Category, Order, OrderItem
from ..core.money import Money, sum_money
from .cache import CategorizationCache
from .categorizer import CategorizationResult, Categorizer
from .models import CategorySplit, SplitCalculationError

logger = logging.getLogger(__name__)

TIP_NOTES = "Delivery Driver Tip"
ROUNDING_ADJUSTMENT_NOTES = "Rounding adjustment"

# Notes list the item count once a group gets this big
NOTES_ITEM_COUNT_THRESHOLD = 3


@dataclass(frozen=True)
class SplitterConfig:
    """
    Split calculation settings.

    rounding_warn_threshold: corrections larger than this are logged as suspicious
    require_two_splits: ledger rejects one-line splits, so a single-category
        order is written as a main split plus a 1-cent adjustment
    tip_categories: category names tried, in order, for the tip split
    tip_fallback_category: category name tried when none of tip_categories exist
    """

    rounding_warn_threshold: Money = field(default_factory=lambda: Money.from_cents(1))
    require_two_splits: bool = False
    tip_categories: tuple[str, ...] = DEFAULT_TIP_CATEGORIES
    tip_fallback_category: str = DEFAULT_TIP_FALLBACK_CATEGORY

    @classmethod
    def from_config(cls, splitting: SplittingConfig) -> "SplitterConfig":
        """Build from the environment-driven application config."""
        return cls(
            rounding_warn_threshold=Money.from_cents(splitting.rounding_warn_cents),
            require_two_splits=splitting.require_two_splits,
            tip_categories=tuple(splitting.tip_categories),
            tip_fallback_category=splitting.tip_fallback_category,
        )


class Splitter:
    """Category split calculator for matched orders"""

    def __init__(
        self,
        categorizer: Categorizer,
        cache: CategorizationCache | None = None,
        config: SplitterConfig | None = None,
    ):
        """
        Initialize the splitter.

        Args:
            categorizer: Item categorizer (usually a CachingCategorizer)
            cache: Per-order categorization cache (default: a fresh one)
            config: Split settings
        """
        self.categorizer = categorizer
        self.cache = cache if cache is not None else CategorizationCache()
        self.config = config or SplitterConfig()

    def create_splits(
        self,
        order: Order,
        transaction: BankTransaction,
        categories: list[Category],
    ) -> list[CategorySplit] | None:
        """
        Calculate category splits for a matched transaction.

        Args:
            order: Provider order whose items are being split
            transaction: Matched bank transaction; split signs follow its amount
            categories: Available ledger categories

        Returns:
            Splits summing exactly to transaction.amount, or None when every
            item landed in one category (set the category directly instead)

        Raises:
            SplitCalculationError: If the order has no items or the categorizer
                answers for the wrong number of items
            CategorizationError: If the categorizer fails
        """
        result = self._categorize(order, categories)
        category_ids = result.category_ids

        if len(category_ids) == 1:
            if not self.config.require_two_splits:
                logger.debug("Order %s: single category %s", order.id, category_ids[0])
                return None
            return self._single_category_splits(order, transaction, result)

        sign = sign_for_direction(transaction.is_purchase)
        splits = self._category_splits(order, result, sign)

        if order.tip.to_cents() > 0:
            splits.append(self._tip_split(order, categories, splits))

        splits = self._apply_rounding_correction(order, transaction, splits)

        logger.debug("Order %s: %d splits for %s", order.id, len(splits), transaction.amount)
        return splits

    def get_single_category_info(self, order: Order, categories: list[Category]) -> tuple[str, str]:
        """
        Category and notes for an order whose items share one category.

        Reuses the categorization from create_splits when it is still cached.

        Returns:
            (category_id, notes)

        Raises:
            SplitCalculationError: If there are no categorizations
        """
        result = self._categorize(order, categories)
        if not result.categorizations:
            raise SplitCalculationError(f"No categorizations for order {order.id}")

        first = result.categorizations[0]
        return first.category_id, format_split_notes(first.category_name, list(order.items), count_prefix=False)

    def _categorize(self, order: Order, categories: list[Category]) -> CategorizationResult:
        """Categorize order items through the single-entry cache."""
        cached = self.cache.get(order.id)
        if cached is not None:
            return cached

        if not order.items:
            raise SplitCalculationError(f"Order {order.id} has no items to split")

        result = self.categorizer.categorize_items(list(order.items), categories)
        if len(result) != order.item_count:
            raise SplitCalculationError(
                f"Categorization returned {len(result)} results for {order.item_count} items in order {order.id}"
            )

        self.cache.put(order.id, result)
        return result

    def _single_category_splits(
        self, order: Order, transaction: BankTransaction, result: CategorizationResult
    ) -> list[CategorySplit]:
        """Main split plus a 1-cent adjustment, for ledgers that need two lines."""
        first = result.categorizations[0]
        sign = sign_for_direction(transaction.is_purchase)
        adjustment = Money.from_cents(sign)
        items = tuple(order.items)

        return [
            CategorySplit(
                category_id=first.category_id,
                category_name=first.category_name,
                amount=transaction.amount - adjustment,
                notes=format_split_notes(first.category_name, list(items)),
                items=items,
            ),
            CategorySplit(
                category_id=first.category_id,
                category_name=first.category_name,
                amount=adjustment,
                notes=ROUNDING_ADJUSTMENT_NOTES,
            ),
        ]

    def _category_splits(self, order: Order, result: CategorizationResult, sign: int) -> list[CategorySplit]:
        """One split per category: item subtotal plus proportional tax."""
        groups: dict[str, list[OrderItem]] = {}
        names: dict[str, str] = {}
        for item, categorization in zip(order.items, result.categorizations, strict=True):
            groups.setdefault(categorization.category_id, []).append(item)
            names.setdefault(categorization.category_id, categorization.category_name)

        order_subtotal = order.subtotal.to_cents()
        order_tax = order.tax.to_cents()

        splits = []
        for category_id, items in groups.items():
            subtotal = sum(item.price.to_cents() for item in items)
            tax_share = safe_divide_proportional(subtotal, order_subtotal, order_tax)
            amount = Money.from_cents(subtotal + tax_share).with_sign(sign)

            splits.append(
                CategorySplit(
                    category_id=category_id,
                    category_name=names[category_id],
                    amount=amount,
                    notes=format_split_notes(names[category_id], items),
                    items=tuple(items),
                )
            )
        return splits

    def _tip_split(self, order: Order, categories: list[Category], splits: list[CategorySplit]) -> CategorySplit:
        """Tip is always an expense, whatever the transaction direction."""
        category = self._find_tip_category(categories)
        if category is None:
            largest = splits[largest_index([s.amount.to_cents() for s in splits], by_magnitude=True)]
            category = Category(id=largest.category_id, name=largest.category_name)

        return CategorySplit(
            category_id=category.id,
            category_name=category.name,
            amount=order.tip.with_sign(sign_for_direction(True)),
            notes=TIP_NOTES,
        )

    def _find_tip_category(self, categories: list[Category]) -> Category | None:
        by_name = {c.name.lower(): c for c in categories}
        for name in (*self.config.tip_categories, self.config.tip_fallback_category):
            category = by_name.get(name.lower())
            if category is not None:
                return category
        return None

    def _apply_rounding_correction(
        self, order: Order, transaction: BankTransaction, splits: list[CategorySplit]
    ) -> list[CategorySplit]:
        """Fold any remainder into the largest split so the sum is exact."""
        diff = transaction.amount - sum_money([s.amount for s in splits])
        if diff.is_zero():
            return splits

        if diff.abs() > self.config.rounding_warn_threshold:
            logger.warning(
                "Order %s: split correction %s exceeds %s (transaction %s)",
                order.id,
                diff,
                self.config.rounding_warn_threshold,
                transaction.id,
            )

        idx = largest_index([s.amount.to_cents() for s in splits], by_magnitude=True)
        target = splits[idx]
        corrected = list(splits)
        corrected[idx] = CategorySplit(
            category_id=target.category_id,
            category_name=target.category_name,
            amount=target.amount + diff,
            notes=target.notes,
            items=target.items,
        )
        return corrected


def format_split_notes(category_name: str, items: list[OrderItem], count_prefix: bool = True) -> str:
    """
    Notes text for a split: "<category>: item, item (xN)".

    Groups of more than three items are prefixed with the item count unless
    count_prefix is False (transaction notes for a single-category order).
    """
    names = [f"{item.name} (x{item.quantity})" if item.quantity > 1 else item.name for item in items]
    notes = f"{category_name}: {', '.join(names)}"
    if count_prefix and len(items) > NOTES_ITEM_COUNT_THRESHOLD:
        notes = f"({len(items)} items) {notes}"
    return notes
