"""
Cost Allocation Package

Pro-rata distribution of an amount paid across items by list price.
"""

from .allocator import (
    ALLOCATION_CORRECTION_LIMIT,
    Allocation,
    AllocationError,
    AllocationItem,
    AllocationResult,
    allocate,
)

__all__ = [
    "ALLOCATION_CORRECTION_LIMIT",
    "Allocation",
    "AllocationError",
    "AllocationItem",
    "AllocationResult",
    "allocate",
]
