#!/usr/bin/env python3
"""
Unit tests for single-charge order matching.

Covers the direction, amount and date rules, candidate exclusion and
deterministic selection.
"""

import pytest

from ordersync.core.money import Money
from ordersync.matching import Matcher, MatcherConfig
from tests.fixtures.synthetic_data import make_order, make_transaction


@pytest.fixture
def matcher():
    return Matcher()


class TestFindMatchBasics:
    """Test basic matching behavior."""

    @pytest.mark.matching
    def test_exact_match(self, matcher):
        """Same amount, same day is a perfect match."""
        order = make_order(total="45.99")
        tx = make_transaction("tx-1", "-45.99")

        result = matcher.find_match(order, [tx], set())

        assert result is not None
        assert result.transaction is tx
        assert result.date_diff == 0
        assert result.amount_diff == Money.zero()
        assert result.confidence == 1.0

    @pytest.mark.matching
    def test_no_candidates_returns_none(self, matcher):
        assert matcher.find_match(make_order(), [], set()) is None

    @pytest.mark.matching
    def test_default_config(self, matcher):
        assert matcher.config.amount_tolerance == Money.from_cents(1)
        assert matcher.config.date_tolerance == 5


class TestAmountTolerance:
    """Test the cent boundary."""

    @pytest.mark.matching
    def test_one_cent_difference_matches(self, matcher):
        order = make_order(total="45.99")
        result = matcher.find_match(order, [make_transaction("tx-1", "-46.00")], set())

        assert result is not None
        assert result.amount_diff == Money.from_cents(1)
        assert result.confidence < 1.0

    @pytest.mark.matching
    def test_two_cent_difference_does_not_match(self, matcher):
        order = make_order(total="45.99")
        assert matcher.find_match(order, [make_transaction("tx-1", "-46.01")], set()) is None
        assert matcher.find_match(order, [make_transaction("tx-1", "-45.97")], set()) is None

    @pytest.mark.matching
    def test_custom_amount_tolerance(self):
        matcher = Matcher(MatcherConfig(amount_tolerance=Money.from_cents(5)))
        order = make_order(total="45.99")
        assert matcher.find_match(order, [make_transaction("tx-1", "-46.04")], set()) is not None


class TestDateTolerance:
    """Test the date boundary."""

    @pytest.mark.matching
    @pytest.mark.parametrize("tx_date", ["2024-08-20", "2024-08-10"], ids=["after", "before"])
    def test_five_days_matches(self, matcher, tx_date):
        order = make_order(date="2024-08-15")
        result = matcher.find_match(order, [make_transaction("tx-1", "-45.99", tx_date)], set())

        assert result is not None
        assert result.date_diff == 5

    @pytest.mark.matching
    @pytest.mark.parametrize("tx_date", ["2024-08-21", "2024-08-09"], ids=["after", "before"])
    def test_six_days_does_not_match(self, matcher, tx_date):
        order = make_order(date="2024-08-15")
        assert matcher.find_match(order, [make_transaction("tx-1", "-45.99", tx_date)], set()) is None

    @pytest.mark.matching
    def test_provider_tolerance(self):
        matcher = Matcher(MatcherConfig.for_provider("walmart"))
        order = make_order(date="2024-08-15")

        assert matcher.find_match(order, [make_transaction("tx-1", "-45.99", "2024-08-18")], set()) is not None
        assert matcher.find_match(order, [make_transaction("tx-1", "-45.99", "2024-08-19")], set()) is None


class TestDirection:
    """Test purchase/return sign handling."""

    @pytest.mark.matching
    def test_purchase_ignores_refund_transactions(self, matcher):
        order = make_order(total="45.99")
        assert matcher.find_match(order, [make_transaction("tx-1", "45.99")], set()) is None

    @pytest.mark.matching
    def test_return_matches_positive_transaction(self, matcher):
        """A return flips the expected sign."""
        order = make_order(total="-19.99", items=[("Returned Lamp", "-19.99", None)])
        purchase = make_transaction("tx-purchase", "-19.99")
        refund = make_transaction("tx-refund", "19.99")

        result = matcher.find_match(order, [purchase, refund], set())

        assert result is not None
        assert result.transaction.id == "tx-refund"

    @pytest.mark.matching
    def test_return_ignores_negative_transactions(self, matcher):
        order = make_order(total="-19.99", items=[])
        assert matcher.find_match(order, [make_transaction("tx-1", "-19.99")], set()) is None

    @pytest.mark.matching
    def test_zero_amount_transaction_counts_as_purchase(self, matcher):
        """A fully discounted order can match a zero-amount posting."""
        order = make_order(total="0.00", items=[("Free Sample", "0.00", None)])
        result = matcher.find_match(order, [make_transaction("tx-zero", "0.00")], set())

        assert result is not None
        assert result.transaction.id == "tx-zero"


class TestCandidateSelection:
    """Test exclusion rules and tie-breaking."""

    @pytest.mark.matching
    def test_used_transactions_are_excluded(self, matcher):
        order = make_order()
        tx = make_transaction("tx-1")

        assert matcher.find_match(order, [tx], {"tx-1"}) is None

    @pytest.mark.matching
    def test_used_ids_are_not_mutated(self, matcher):
        used = {"tx-other"}
        matcher.find_match(make_order(), [make_transaction("tx-1")], used)

        assert used == {"tx-other"}

    @pytest.mark.matching
    def test_split_children_are_never_candidates(self, matcher):
        child = make_transaction("tx-child", is_split_transaction=True)
        assert matcher.find_match(make_order(), [child], set()) is None

    @pytest.mark.matching
    def test_closest_date_wins(self, matcher):
        order = make_order(date="2024-08-15")
        far = make_transaction("tx-a", "-45.99", "2024-08-19")
        near = make_transaction("tx-b", "-45.99", "2024-08-16")

        result = matcher.find_match(order, [far, near], set())

        assert result.transaction.id == "tx-b"
        assert result.date_diff == 1

    @pytest.mark.matching
    def test_equal_dates_prefer_lowest_id(self, matcher):
        """Ties are broken by transaction id, independent of input order."""
        order = make_order(date="2024-08-15")
        before = make_transaction("tx-2", "-45.99", "2024-08-14")
        after = make_transaction("tx-1", "-45.99", "2024-08-16")

        assert matcher.find_match(order, [before, after], set()).transaction.id == "tx-1"
        assert matcher.find_match(order, [after, before], set()).transaction.id == "tx-1"

    @pytest.mark.matching
    def test_closer_amount_does_not_beat_closer_date(self, matcher):
        """Amount only gates candidates; date decides among them."""
        order = make_order(total="45.99", date="2024-08-15")
        exact_late = make_transaction("tx-a", "-45.99", "2024-08-18")
        penny_early = make_transaction("tx-b", "-46.00", "2024-08-15")

        assert matcher.find_match(order, [exact_late, penny_early], set()).transaction.id == "tx-b"


class TestMatcherConfig:
    """Test matcher configuration presets."""

    @pytest.mark.matching
    @pytest.mark.parametrize(
        "provider,days",
        [("walmart", 3), ("Walmart", 3), ("amazon", 5), ("costco", 5), ("corner-store", 5)],
    )
    def test_for_provider(self, provider, days):
        config = MatcherConfig.for_provider(provider)
        assert config.date_tolerance == days
        assert config.amount_tolerance == Money.from_cents(1)

    @pytest.mark.matching
    def test_from_config(self):
        from ordersync.core.config import MatchingConfig

        config = MatcherConfig.from_config(MatchingConfig(amount_tolerance_cents=3, date_tolerance_days=2))
        assert config.amount_tolerance == Money.from_cents(3)
        assert config.date_tolerance == 2
