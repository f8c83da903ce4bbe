#!/usr/bin/env python3
"""
Order to Transaction Matcher

Pairs a provider order with the bank transaction that paid for it.

Matching rules:
1. Direction - a purchase (positive order total) matches money out
   (amount <= 0); a return (negative order total) matches money in (amount > 0)
2. Date - the transaction must post within date_tolerance days of the order
3. Amount - magnitudes must agree within amount_tolerance
4. Availability - transactions already claimed by the caller, and split
   children, are never candidates

Among survivors the closest date wins, then the lowest transaction id.
Nothing here mutates the caller's used-id set.
"""

import logging
from collections.abc import Iterable, Set

from ..core.currency import sign_for_direction
from ..core.models import BankTransaction, Order
from ..core.money import Money, sum_money
from .models import MatcherConfig, MatchResult, MatchValidationError, MultiMatchResult
from .scorer import MatchScorer

logger = logging.getLogger(__name__)


class Matcher:
    """Order to bank transaction matcher with amount and date tolerances"""

    def __init__(self, config: MatcherConfig | None = None):
        """
        Initialize the matcher.

        Args:
            config: Matching tolerances (defaults: 1 cent, 5 days)
        """
        self.config = config or MatcherConfig()

    def find_match(
        self,
        order: Order,
        candidates: Iterable[BankTransaction],
        used_ids: Set[str],
    ) -> MatchResult | None:
        """
        Find the bank transaction that paid for an order.

        Args:
            order: Provider order (negative total for a return)
            candidates: Bank transactions to search
            used_ids: Transaction ids already claimed; read only

        Returns:
            Best MatchResult, or None when no candidate qualifies
        """
        is_purchase = not order.is_return
        expected_sign = sign_for_direction(is_purchase)
        order_amount = order.total.abs()

        logger.debug(
            "Matching order %s: %s on %s (%s)",
            order.id,
            order_amount,
            order.date,
            "purchase" if is_purchase else "return",
        )

        best: MatchResult | None = None
        for tx in candidates:
            if tx.id in used_ids or tx.is_split_transaction:
                continue

            date_diff = order.date.days_between(tx.date)
            if date_diff > self.config.date_tolerance:
                continue

            if not _has_direction(tx, expected_sign):
                logger.debug("Skipping %s: wrong direction (%s)", tx.id, tx.amount)
                continue

            amount_diff = (order_amount - tx.amount.abs()).abs()
            if amount_diff > self.config.amount_tolerance:
                continue

            if best is None or _is_better(date_diff, tx.id, best):
                best = MatchResult(
                    transaction=tx,
                    date_diff=date_diff,
                    amount_diff=amount_diff,
                    confidence=MatchScorer.calculate_confidence(date_diff, amount_diff),
                )

        if best is None:
            logger.debug("No transaction found for order %s", order.id)
        else:
            logger.debug(
                "Order %s matched %s (date diff %d, amount diff %s)",
                order.id,
                best.transaction.id,
                best.date_diff,
                best.amount_diff,
            )

        return best

    def find_multiple_matches(
        self,
        order: Order,
        candidates: Iterable[BankTransaction],
        used_ids: Set[str],
        amounts: list[Money],
    ) -> MultiMatchResult:
        """
        Find one bank transaction per charge of a multi-charge order.

        Each amount is matched against purchases only. A transaction claimed
        for an earlier amount is not offered to a later one.

        Args:
            order: Provider order that was billed in several charges
            candidates: Bank transactions to search
            used_ids: Transaction ids already claimed; read only
            amounts: Positive charge amounts, in the order the provider lists them

        Returns:
            MultiMatchResult with matches index-aligned to amounts

        Raises:
            MatchValidationError: If amounts is empty, any amount is not positive,
                or all charges were found but they do not add up to the order total
        """
        if not amounts:
            raise MatchValidationError(f"No charge amounts given for order {order.id}")

        for i, amount in enumerate(amounts):
            if amount.to_cents() <= 0:
                raise MatchValidationError(f"invalid amount at index {i}: {amount} (must be positive)")

        candidates = list(candidates)
        purchase_sign = sign_for_direction(True)
        matched_this_round: set[str] = set()
        matches: list[MatchResult | None] = []

        for i, amount in enumerate(amounts):
            best: MatchResult | None = None
            for tx in candidates:
                if tx.id in used_ids or tx.id in matched_this_round or tx.is_split_transaction:
                    continue

                date_diff = order.date.days_between(tx.date)
                if date_diff > self.config.date_tolerance:
                    continue

                # Charges are always money out; a zero amount is never a charge
                if tx.amount.to_cents() * purchase_sign <= 0:
                    continue

                amount_diff = (amount - tx.amount.abs()).abs()
                if amount_diff > self.config.amount_tolerance:
                    continue

                if best is None or _is_better(date_diff, tx.id, best):
                    best = MatchResult(
                        transaction=tx,
                        date_diff=date_diff,
                        amount_diff=amount_diff,
                        confidence=MatchScorer.calculate_confidence(date_diff, amount_diff),
                    )

            if best is None:
                logger.debug("Order %s charge %d (%s): not posted yet", order.id, i, amount)
            else:
                matched_this_round.add(best.transaction.id)
                logger.debug("Order %s charge %d (%s) matched %s", order.id, i, amount, best.transaction.id)
            matches.append(best)

        all_found = all(m is not None for m in matches)
        result = MultiMatchResult(matches=matches, amounts=list(amounts), all_found=all_found)

        if all_found:
            self._validate_multi_match_sum(order, result)

        return result

    def _validate_multi_match_sum(self, order: Order, result: MultiMatchResult) -> None:
        """Check that the matched charges add up to the order total."""
        charge_sum = sum_money([tx.amount.abs() for tx in result.transactions])
        order_total = order.total.abs()
        diff = (charge_sum - order_total).abs()

        if diff > self.config.amount_tolerance:
            raise MatchValidationError(
                f"charge sum {charge_sum} does not match order total {order_total} "
                f"(diff: {diff}, tolerance: {self.config.amount_tolerance})"
            )


def _has_direction(tx: BankTransaction, expected_sign: int) -> bool:
    """Purchases accept zero amounts; refunds need strictly positive ones."""
    cents = tx.amount.to_cents()
    if expected_sign < 0:
        return cents <= 0
    return cents > 0


def _is_better(date_diff: int, tx_id: str, current: MatchResult) -> bool:
    """Closer date wins; equal dates fall back to the lower transaction id."""
    return (date_diff, tx_id) < (current.date_diff, current.transaction.id)
