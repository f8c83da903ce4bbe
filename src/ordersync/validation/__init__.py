"""
Charge Validation Package

Reconciles bank charges against order totals net of non-bank payments.
"""

from .charges import (
    DEFAULT_CHARGE_TOLERANCE,
    ChargeValidation,
    validate_charges,
    validate_charges_simple,
)

__all__ = [
    "DEFAULT_CHARGE_TOLERANCE",
    "ChargeValidation",
    "validate_charges",
    "validate_charges_simple",
]
