#!/usr/bin/env python3
"""
Item Categorization

Interfaces for mapping order items to ledger categories, plus the local
pieces around the external categorizer: a per-item-name answer store and
an offline backend that trusts the provider's own item categories.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..core.errors import CategorizationError
from ..core.models import Category, OrderItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemCategorization:
    """Category assigned to a single item."""

    item_name: str
    category_id: str
    category_name: str
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_name": self.item_name,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "confidence": self.confidence,
        }


@dataclass
class CategorizationResult:
    """Categorizations index-aligned with the items that were categorized."""

    categorizations: list[ItemCategorization] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.categorizations)

    @property
    def category_ids(self) -> list[str]:
        """Distinct category ids in first-seen order."""
        seen: list[str] = []
        for c in self.categorizations:
            if c.category_id not in seen:
                seen.append(c.category_id)
        return seen


class Categorizer(Protocol):
    """Anything that can assign categories to order items."""

    def categorize_items(self, items: list[OrderItem], categories: list[Category]) -> CategorizationResult: ...


class CategoryStore(Protocol):
    """Key/value store of item name to category id."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryCategoryStore:
    """In-process CategoryStore, safe to share between workers."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


def normalize_item_name(name: str) -> str:
    """Store key for an item name."""
    return name.strip().lower()


class CachingCategorizer:
    """
    Categorizer that remembers previous answers per item name.

    Items seen before are answered from the store with confidence 1.0; only
    the rest go to the backend, whose answers are stored for next time.
    """

    def __init__(self, backend: Categorizer, store: CategoryStore | None = None):
        """
        Initialize the caching categorizer.

        Args:
            backend: Categorizer consulted for items not in the store
            store: Item name to category id store (default: in-memory)
        """
        self.backend = backend
        self.store = store if store is not None else MemoryCategoryStore()

    def categorize_items(self, items: list[OrderItem], categories: list[Category]) -> CategorizationResult:
        """
        Categorize items, consulting the backend only for unseen names.

        Args:
            items: Order items to categorize
            categories: Available ledger categories

        Returns:
            CategorizationResult index-aligned with items

        Raises:
            CategorizationError: If the backend fails or answers for the wrong number of items
        """
        by_id = {c.id: c for c in categories}
        results: list[ItemCategorization | None] = []
        uncached: list[tuple[int, OrderItem]] = []

        for i, item in enumerate(items):
            cached_id = self.store.get(normalize_item_name(item.name))
            category = by_id.get(cached_id) if cached_id else None
            if category is None:
                uncached.append((i, item))
                results.append(None)
            else:
                results.append(ItemCategorization(item.name, category.id, category.name, 1.0))

        logger.debug("Categorizing %d items: %d cached, %d new", len(items), len(items) - len(uncached), len(uncached))

        if uncached:
            try:
                backend_result = self.backend.categorize_items([item for _, item in uncached], categories)
            except CategorizationError:
                raise
            except Exception as e:
                raise CategorizationError(f"Categorizer backend failed: {e}") from e

            if len(backend_result) != len(uncached):
                raise CategorizationError(
                    f"Categorizer returned {len(backend_result)} results for {len(uncached)} items"
                )

            for (i, item), categorization in zip(uncached, backend_result.categorizations, strict=True):
                self.store.set(normalize_item_name(item.name), categorization.category_id)
                results[i] = categorization

        return CategorizationResult(categorizations=[r for r in results if r is not None])


class ProviderCategoryCategorizer:
    """
    Offline categorizer that maps each item's provider category onto a
    ledger category of the same name (case-insensitive).

    Items without a recognizable provider category land in the default category.
    """

    def __init__(self, default_category_name: str = "Shopping"):
        self.default_category_name = default_category_name

    def categorize_items(self, items: list[OrderItem], categories: list[Category]) -> CategorizationResult:
        by_name = {c.name.lower(): c for c in categories}
        default = by_name.get(self.default_category_name.lower())

        categorizations = []
        for item in items:
            category = by_name.get((item.category or "").strip().lower())
            confidence = 0.9
            if category is None:
                if default is None:
                    raise CategorizationError(
                        f"No category for item '{item.name}' and default category "
                        f"'{self.default_category_name}' is not available"
                    )
                category = default
                confidence = 0.5
            categorizations.append(ItemCategorization(item.name, category.id, category.name, confidence))

        return CategorizationResult(categorizations=categorizations)
