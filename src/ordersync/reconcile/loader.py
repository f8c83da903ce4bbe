#!/usr/bin/env python3
"""
Reconciliation Input Loader

Loads the three inputs of a reconciliation pass from disk:
- load_orders: provider orders exported as JSON
- load_transactions: bank-feed export as CSV (or JSON)
- load_categories: ledger categories as YAML
"""

import logging
from pathlib import Path

import pandas as pd
import yaml

from ..core.json_utils import read_json
from ..core.models import BankTransaction, Category, Order

logger = logging.getLogger(__name__)

TRANSACTION_REQUIRED_COLUMNS = ["id", "date", "amount"]


def load_orders(path: str | Path) -> list[Order]:
    """
    Load provider orders from a JSON file.

    The file holds either a list of order objects or {"orders": [...]}.
    Amounts are dollars; see Order.from_dict for the fields.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a list of orders
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Orders file not found: {path}")

    data = read_json(path)
    if isinstance(data, dict):
        data = data.get("orders", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of orders in {path}")

    orders = [Order.from_dict(entry) for entry in data]
    logger.info("Loaded %d orders from %s", len(orders), path)
    return orders


def load_transactions(path: str | Path) -> list[BankTransaction]:
    """
    Load bank transactions from a CSV or JSON export.

    CSV columns: id, date, amount (signed dollars, negative for money out),
    and optionally has_splits, is_split_transaction, merchant, category_id, notes.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transactions file not found: {path}")

    if path.suffix.lower() == ".json":
        data = read_json(path)
        if isinstance(data, dict):
            data = data.get("transactions", [])
        transactions = [BankTransaction.from_dict(entry) for entry in data]
    else:
        # Read amounts and ids as text so no value passes through a float
        df = pd.read_csv(path, dtype={"id": str, "amount": str})

        missing = [c for c in TRANSACTION_REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Transactions file {path} is missing columns: {', '.join(missing)}")

        df["date"] = pd.to_datetime(df["date"])

        df = df.astype(object).where(pd.notna(df), None)
        transactions = [BankTransaction.from_dict(row) for row in df.to_dict(orient="records")]

    logger.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions


def load_categories(path: str | Path) -> list[Category]:
    """
    Load ledger categories from YAML.

    Expected layout:
        categories:
          - id: cat-groceries
            name: Groceries

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If no categories list is present
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Categories file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("categories") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError(f"Expected a 'categories' list in {path}")

    categories = [Category.from_dict(entry) for entry in entries]
    logger.info("Loaded %d categories from %s", len(categories), path)
    return categories
