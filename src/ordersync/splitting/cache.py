#!/usr/bin/env python3
"""
Single-entry categorization cache.

The splitter categorizes an order once and may need the answer twice
(split calculation, then single-category notes). Holding exactly one
order's result keeps that reuse explicit. Not thread-safe: one cache per
Splitter, one Splitter per worker.
"""

from .categorizer import CategorizationResult


class CategorizationCache:
    """Remembers the categorization of the most recent order."""

    def __init__(self) -> None:
        self._order_id: str | None = None
        self._result: CategorizationResult | None = None

    def get(self, order_id: str) -> CategorizationResult | None:
        """Cached result for order_id, or None if a different order is held."""
        if self._order_id == order_id:
            return self._result
        return None

    def put(self, order_id: str, result: CategorizationResult) -> None:
        """Store a result, evicting whatever was held before."""
        self._order_id = order_id
        self._result = result

    def clear(self) -> None:
        self._order_id = None
        self._result = None
