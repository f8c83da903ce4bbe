"""
Reconciliation Package

Runs the matching and splitting engine over batches of orders and
loads its inputs from disk.
"""

from .loader import load_categories, load_orders, load_transactions
from .reconciler import (
    LedgerWriter,
    ProcessingRecord,
    ProcessingStatus,
    ReconciliationRun,
    Reconciler,
)

__all__ = [
    "LedgerWriter",
    "ProcessingRecord",
    "ProcessingStatus",
    "ReconciliationRun",
    "Reconciler",
    "load_categories",
    "load_orders",
    "load_transactions",
]
