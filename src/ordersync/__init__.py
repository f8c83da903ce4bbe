"""
Order Sync - Provider Order Reconciliation

Matches purchase records from retail providers against bank-feed
transactions in a personal-finance ledger, then splits each matched
transaction across spending categories.

Domain Packages:
- core: Currency handling, data models, configuration
- matching: Order to transaction matching (single and multi-charge)
- allocation: Pro-rata cost allocation
- splitting: Item categorization and category splits
- validation: Bank charge validation
- reconcile: Reconciliation pass and input loading
- cli: Command-line interface

Example Usage:
    from ordersync.matching import Matcher
    from ordersync.splitting import Splitter
    from ordersync.core.money import Money
"""

__version__ = "0.1.0"

from .core.config import Environment, get_config
from .core.models import BankTransaction, Category, Order, OrderItem
from .core.money import Money

__all__ = [
    "BankTransaction",
    "Category",
    "Environment",
    "Money",
    "Order",
    "OrderItem",
    "get_config",
]
