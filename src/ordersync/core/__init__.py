"""
Core Utilities Package

Shared business logic, data models, and utilities used across the
reconciliation engine.

This package provides:
- Currency handling with integer arithmetic for precision
- Money and FinancialDate value types
- Order, transaction and category data models
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    is_test,
    reload_config,
)
from .currency import (
    cents_to_dollars_str,
    format_cents,
    largest_index,
    parse_dollars_to_cents,
    round_half_up_div,
    safe_currency_to_cents,
    safe_divide_proportional,
    sign_for_direction,
    validate_sum_equals_total,
)
from .dates import FinancialDate
from .errors import CategorizationError, ValidationError
from .models import (
    BankTransaction,
    Category,
    Order,
    OrderItem,
)
from .money import Money, sum_money

__all__ = [
    # Data models
    "BankTransaction",
    "Category",
    "CategorizationError",
    # Configuration
    "Config",
    "Environment",
    "FinancialDate",
    "Money",
    "Order",
    "OrderItem",
    "ValidationError",
    # Currency utilities
    "cents_to_dollars_str",
    "format_cents",
    "get_config",
    "get_data_dir",
    "get_output_dir",
    "is_test",
    "largest_index",
    "parse_dollars_to_cents",
    "reload_config",
    "round_half_up_div",
    "safe_currency_to_cents",
    "safe_divide_proportional",
    "sign_for_direction",
    "sum_money",
    "validate_sum_equals_total",
]
