"""
Category Splitting Package

Categorizes order items and divides a matched transaction into
category splits that sum exactly to its amount.

Key Components:
- splitter: split calculation with tax share, tip and rounding correction
- categorizer: categorizer interfaces, answer store and offline backend
- cache: single-entry per-order categorization cache
"""

from .cache import CategorizationCache
from .categorizer import (
    CachingCategorizer,
    CategorizationResult,
    Categorizer,
    CategoryStore,
    ItemCategorization,
    MemoryCategoryStore,
    ProviderCategoryCategorizer,
)
from .models import CategorySplit, SplitCalculationError
from .splitter import Splitter, SplitterConfig, format_split_notes

__all__ = [
    "CachingCategorizer",
    "CategorizationCache",
    "CategorizationResult",
    "Categorizer",
    "CategorySplit",
    "CategoryStore",
    "ItemCategorization",
    "MemoryCategoryStore",
    "ProviderCategoryCategorizer",
    "SplitCalculationError",
    "Splitter",
    "SplitterConfig",
    "format_split_notes",
]
