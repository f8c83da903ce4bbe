#!/usr/bin/env python3
"""Tests for match confidence scoring."""

import pytest

from ordersync.core.money import Money
from ordersync.matching import ConfidenceThresholds, MatchScorer


class TestMatchScorer:
    """Test confidence calculation."""

    @pytest.mark.matching
    @pytest.mark.parametrize(
        "date_diff,expected",
        [(0, 1.0), (1, 0.98), (2, 0.95), (3, 0.90), (5, 0.85), (7, 0.80), (9, 0.60), (20, 0.30)],
    )
    def test_exact_amount_date_alignment(self, date_diff, expected):
        assert MatchScorer.calculate_confidence(date_diff, Money.zero()) == expected

    @pytest.mark.matching
    def test_penny_difference_scores_lower(self):
        exact = MatchScorer.calculate_confidence(2, Money.zero())
        penny = MatchScorer.calculate_confidence(2, Money.from_cents(1))
        assert penny < exact
        assert 0.0 <= penny <= 1.0

    @pytest.mark.matching
    def test_confidence_labels(self):
        assert ConfidenceThresholds.label(0.95) == "high"
        assert ConfidenceThresholds.label(0.80) == "medium"
        assert ConfidenceThresholds.label(0.50) == "low"
