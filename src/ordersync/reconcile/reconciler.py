#!/usr/bin/env python3
"""
Reconciliation Pass

Drives the engine over a batch of provider orders: match each order to its
bank transaction(s), then categorize and split, then hand the result to the
ledger. Orders are processed strictly in sequence so that one used-id set
threads through the whole pass and no transaction is claimed twice.

Per order:
1. Multi-charge orders - validate charges, match every charge, consolidate
   the charges into one transaction, allocate item prices to the bank sum
2. Single bank charge differing from the total (gift cards, points) -
   validate the charge, match on it, allocate item prices to it
3. Single-charge orders - match, skip transactions that are already split
4. Split - one category sets the category directly; several write splits
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from ..allocation.allocator import AllocationItem, allocate
from ..core.errors import CategorizationError, ValidationError
from ..core.models import BankTransaction, Category, Order
from ..core.money import Money, sum_money
from ..matching.matcher import Matcher
from ..splitting.models import CategorySplit
from ..splitting.splitter import Splitter
from ..validation.charges import DEFAULT_CHARGE_TOLERANCE, ChargeValidation, validate_charges

logger = logging.getLogger(__name__)


class ProcessingStatus(Enum):
    """Outcome of reconciling one order"""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    NO_MATCH = "no-match"
    DRY_RUN = "dry-run"


class LedgerWriter(Protocol):
    """Write side of the ledger API."""

    def update_category(self, transaction_id: str, category_id: str, notes: str) -> None: ...

    def update_splits(self, transaction_id: str, splits: list[CategorySplit]) -> None: ...

    def consolidate(self, transactions: list[BankTransaction], order: Order) -> BankTransaction: ...


@dataclass
class ProcessingRecord:
    """What happened to one order during a reconciliation pass."""

    order_id: str
    provider: str
    status: ProcessingStatus = ProcessingStatus.FAILED
    transaction_id: str | None = None
    split_count: int = 0
    categories: list[str] = field(default_factory=list)
    confidence: float | None = None
    date_diff: int | None = None
    message: str = ""
    matched_transaction_ids: list[str] = field(default_factory=list)
    splits: list[CategorySplit] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "order_id": self.order_id,
            "provider": self.provider,
            "status": self.status.value,
            "transaction_id": self.transaction_id,
            "split_count": self.split_count,
            "categories": self.categories,
            "confidence": self.confidence,
            "date_diff": self.date_diff,
            "message": self.message,
            "matched_transaction_ids": self.matched_transaction_ids,
            "splits": [s.to_dict() for s in self.splits],
        }


@dataclass
class ReconciliationRun:
    """Summary of a reconciliation pass over a batch of orders."""

    dry_run: bool
    records: list[ProcessingRecord] = field(default_factory=list)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    def _count(self, *statuses: ProcessingStatus) -> int:
        return sum(1 for r in self.records if r.status in statuses)

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def processed(self) -> int:
        """Orders that were split (or would have been, in a dry run)."""
        return self._count(ProcessingStatus.SUCCESS, ProcessingStatus.DRY_RUN)

    @property
    def skipped(self) -> int:
        return self._count(ProcessingStatus.SKIPPED)

    @property
    def no_match(self) -> int:
        return self._count(ProcessingStatus.NO_MATCH)

    @property
    def failed(self) -> int:
        return self._count(ProcessingStatus.FAILED)

    @property
    def match_rate(self) -> float:
        """Percentage of orders that found their bank transaction."""
        if self.total == 0:
            return 0.0
        matched = sum(1 for r in self.records if r.transaction_id is not None)
        return (matched / self.total) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "summary": {
                "total_orders": self.total,
                "processed": self.processed,
                "skipped": self.skipped,
                "no_match": self.no_match,
                "failed": self.failed,
                "match_rate": round(self.match_rate, 1),
            },
            "records": [r.to_dict() for r in self.records],
        }


class Reconciler:
    """Sequential reconciliation of provider orders against bank transactions"""

    def __init__(
        self,
        matcher: Matcher,
        splitter: Splitter,
        ledger: LedgerWriter | None = None,
        charge_tolerance: Money = DEFAULT_CHARGE_TOLERANCE,
        allocation_correction_limit: Money | None = None,
    ):
        """
        Initialize the reconciler.

        Args:
            matcher: Order to transaction matcher
            splitter: Category splitter
            ledger: Ledger write API; required unless every run is a dry run
            charge_tolerance: Tolerance for bank charge validation
            allocation_correction_limit: Rounding limit passed to the allocator
        """
        self.matcher = matcher
        self.splitter = splitter
        self.ledger = ledger
        self.charge_tolerance = charge_tolerance
        self.allocation_correction_limit = allocation_correction_limit

    def reconcile(
        self,
        orders: list[Order],
        transactions: list[BankTransaction],
        categories: list[Category],
        dry_run: bool = False,
        used_ids: set[str] | None = None,
    ) -> ReconciliationRun:
        """
        Reconcile a batch of orders.

        Args:
            orders: Provider orders, processed in the given order
            transactions: Bank transactions available for matching
            categories: Ledger categories
            dry_run: Compute everything but write nothing to the ledger
            used_ids: Transaction ids already claimed; ids claimed in this
                pass are added to it

        Returns:
            ReconciliationRun with one ProcessingRecord per order

        Raises:
            ValueError: If dry_run is False and no ledger writer was given
        """
        if not dry_run and self.ledger is None:
            raise ValueError("A ledger writer is required unless dry_run is set")

        if used_ids is None:
            used_ids = set()

        run = ReconciliationRun(dry_run=dry_run, started_at=datetime.now())
        logger.info("Reconciling %d orders against %d transactions", len(orders), len(transactions))

        for order in orders:
            run.records.append(self.process_order(order, transactions, categories, used_ids, dry_run))

        run.finished_at = datetime.now()
        logger.info(
            "Reconciliation complete: %d processed, %d skipped, %d no match, %d failed",
            run.processed,
            run.skipped,
            run.no_match,
            run.failed,
        )
        return run

    def process_order(
        self,
        order: Order,
        transactions: list[BankTransaction],
        categories: list[Category],
        used_ids: set[str],
        dry_run: bool,
    ) -> ProcessingRecord:
        """
        Reconcile one order. Validation and categorization failures are
        recorded as failed; anything else propagates.
        """
        record = ProcessingRecord(order_id=order.id, provider=order.provider)

        try:
            if order.is_multi_charge:
                self._process_multi_charge(order, transactions, categories, used_ids, dry_run, record)
            elif order.charges or order.non_bank_amount.to_cents() > 0:
                self._process_bank_charge(order, transactions, categories, used_ids, dry_run, record)
            else:
                self._process_single_charge(order, transactions, categories, used_ids, dry_run, record)
        except (ValidationError, CategorizationError) as e:
            logger.error("Order %s failed: %s", order.id, e)
            record.status = ProcessingStatus.FAILED
            record.message = str(e)

        return record

    def _process_single_charge(
        self,
        order: Order,
        transactions: list[BankTransaction],
        categories: list[Category],
        used_ids: set[str],
        dry_run: bool,
        record: ProcessingRecord,
    ) -> None:
        tx = self._claim_match(order, transactions, used_ids, record)
        if tx is not None:
            self._apply_splits(order, tx, categories, dry_run, record)

    def _process_bank_charge(
        self,
        order: Order,
        transactions: list[BankTransaction],
        categories: list[Category],
        used_ids: set[str],
        dry_run: bool,
        record: ProcessingRecord,
    ) -> None:
        """
        One bank charge that can differ from the order total, as when part of
        the order was paid with a gift card or points. Without a reported
        charge the bank is expected to have charged the rest of the total.
        """
        charge = order.charges[0] if order.charges else order.total.abs() - order.non_bank_amount
        if charge.to_cents() <= 0:
            logger.info("Order %s: paid entirely without a bank charge, skipping", order.id)
            record.status = ProcessingStatus.SKIPPED
            record.message = "no bank charge: order paid entirely by non-bank payments"
            return

        validation = self._check_charges(order, [charge], record)
        if validation is None:
            return

        # Match on what the bank charged rather than the order total
        match_order = replace(order, total=charge.with_sign(-1 if order.is_return else 1))
        tx = self._claim_match(match_order, transactions, used_ids, record)
        if tx is None:
            return

        split_order = self._allocated_order(order, validation.bank_charges_sum)
        self._apply_splits(split_order, tx, categories, dry_run, record)

    def _claim_match(
        self,
        order: Order,
        transactions: list[BankTransaction],
        used_ids: set[str],
        record: ProcessingRecord,
    ) -> BankTransaction | None:
        """Match one transaction and mark it used; None when there is nothing to split."""
        match = self.matcher.find_match(order, transactions, used_ids)
        if match is None:
            logger.warning("No matching transaction for order %s (%s on %s)", order.id, order.total, order.date)
            record.status = ProcessingStatus.NO_MATCH
            record.message = "no matching transaction"
            return None

        tx = match.transaction
        used_ids.add(tx.id)
        record.transaction_id = tx.id
        record.matched_transaction_ids = [tx.id]
        record.confidence = match.confidence
        record.date_diff = match.date_diff

        if tx.has_splits:
            logger.warning("Order %s: transaction %s is already split, skipping", order.id, tx.id)
            record.status = ProcessingStatus.SKIPPED
            record.message = "transaction already has splits"
            return None

        return tx

    def _check_charges(self, order: Order, charges: list[Money], record: ProcessingRecord) -> ChargeValidation | None:
        """Validate bank charges against the order; records a skip when they don't reconcile."""
        validation = validate_charges(charges, order.total.abs(), order.non_bank_amount, self.charge_tolerance)
        if not validation.valid:
            logger.warning("Order %s skipped: %s", order.id, validation.reason)
            record.status = ProcessingStatus.SKIPPED
            record.message = validation.reason
            return None
        return validation

    def _allocated_order(self, order: Order, bank_total: Money) -> Order:
        """
        Copy of the order with item prices allocated to what the bank charged.

        Tax, tip and fees are absorbed by the allocation.
        """
        allocation = allocate(
            [AllocationItem.from_order_item(item) for item in order.items],
            bank_total,
            self.allocation_correction_limit,
        )
        allocated_items = tuple(
            replace(item, price=a.allocated_cost)
            for item, a in zip(order.items, allocation.allocations, strict=True)
        )
        return replace(
            order,
            items=allocated_items,
            subtotal=allocation.total_allocated,
            tax=Money.zero(),
            tip=Money.zero(),
            fees=Money.zero(),
        )

    def _process_multi_charge(
        self,
        order: Order,
        transactions: list[BankTransaction],
        categories: list[Category],
        used_ids: set[str],
        dry_run: bool,
        record: ProcessingRecord,
    ) -> None:
        charges = list(order.charges)

        if self._check_charges(order, charges, record) is None:
            return

        multi = self.matcher.find_multiple_matches(order, transactions, used_ids, charges)
        if not multi.all_found:
            logger.warning("Order %s: only %d of %d charges posted", order.id, multi.found_count, len(charges))
            record.status = ProcessingStatus.NO_MATCH
            record.message = f"only {multi.found_count} of {len(charges)} charges found"
            return

        matched = [m for m in multi.matches if m is not None]
        used_ids.update(multi.transaction_ids)
        record.matched_transaction_ids = multi.transaction_ids
        record.confidence = min(m.confidence for m in matched)
        record.date_diff = max(m.date_diff for m in matched)

        if any(tx.has_splits for tx in multi.transactions):
            logger.warning("Order %s: a charge is already split, skipping", order.id)
            record.status = ProcessingStatus.SKIPPED
            record.message = "transaction already has splits"
            return

        consolidated = self._consolidate(multi.transactions, order, dry_run)
        record.transaction_id = consolidated.id

        # Provider prices are list prices; the bank charged the allocated ones
        split_order = self._allocated_order(order, multi.matched_sum)
        self._apply_splits(split_order, consolidated, categories, dry_run, record)

    def _consolidate(self, transactions: list[BankTransaction], order: Order, dry_run: bool) -> BankTransaction:
        """Merge the charges of one order into one transaction."""
        if dry_run or self.ledger is None:
            first = transactions[0]
            return BankTransaction(
                id=first.id,
                amount=sum_money([tx.amount for tx in transactions]),
                date=first.date,
                merchant=first.merchant,
            )
        return self.ledger.consolidate(transactions, order)

    def _apply_splits(
        self,
        order: Order,
        transaction: BankTransaction,
        categories: list[Category],
        dry_run: bool,
        record: ProcessingRecord,
    ) -> None:
        splits = self.splitter.create_splits(order, transaction, categories)

        if splits is None:
            category_id, notes = self.splitter.get_single_category_info(order, categories)
            record.categories = [category_id]
            if not dry_run and self.ledger is not None:
                self.ledger.update_category(transaction.id, category_id, notes)
        else:
            record.splits = splits
            record.split_count = len(splits)
            record.categories = list(dict.fromkeys(s.category_id for s in splits))
            if not dry_run and self.ledger is not None:
                self.ledger.update_splits(transaction.id, splits)

        record.status = ProcessingStatus.DRY_RUN if dry_run else ProcessingStatus.SUCCESS
        logger.info(
            "Order %s -> %s: %s (%d splits)",
            order.id,
            transaction.id,
            record.status.value,
            record.split_count,
        )
