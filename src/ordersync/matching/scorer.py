#!/usr/bin/env python3
"""
Match Scoring

Confidence calculation for accepted matches. Scores are reported alongside
each match for review; candidate selection never looks at them.
"""

from ..core.money import Money


class MatchScorer:
    """Confidence scoring for order to transaction matches"""

    @staticmethod
    def calculate_confidence(date_diff: int, amount_diff: Money) -> float:
        """
        Calculate match confidence score (0.0 to 1.0).

        Args:
            date_diff: Days between order date and transaction date (absolute)
            amount_diff: Absolute difference between order and transaction amounts

        Returns:
            Confidence score between 0.0 and 1.0, rounded to 2 places
        """
        confidence = 1.0
        confidence *= MatchScorer._score_amount_accuracy(amount_diff)
        confidence *= MatchScorer._score_date_alignment(date_diff, amount_diff)

        confidence = max(0.0, min(1.0, confidence))

        return round(confidence, 2)

    @staticmethod
    def _score_amount_accuracy(amount_diff: Money) -> float:
        """Exact amounts score full marks; tolerated penny differences slightly less"""
        if amount_diff.is_zero():
            return 1.0
        return 0.97

    @staticmethod
    def _score_date_alignment(date_diff: int, amount_diff: Money) -> float:
        """Score based on date alignment"""
        # Exact amounts get more lenient date scoring
        is_exact_amount = amount_diff.is_zero()

        if date_diff == 0:
            return 1.0
        elif date_diff == 1:
            return 0.98
        elif date_diff == 2:
            return 0.95 if is_exact_amount else 0.90
        elif date_diff <= 3:
            return 0.90 if is_exact_amount else 0.85
        elif date_diff <= 5:
            return 0.85 if is_exact_amount else 0.75
        elif date_diff <= 7:
            return 0.80 if is_exact_amount else 0.65
        else:
            # Integer arithmetic: 0.8 - (date_diff - 7) * 0.1, floored at 0.3
            penalty_basis = 80 - (date_diff - 7) * 10
            return max(30, penalty_basis) / 100


class ConfidenceThresholds:
    """Confidence bands used when reporting matches"""

    HIGH_CONFIDENCE = 0.90
    MEDIUM_CONFIDENCE = 0.75

    @staticmethod
    def label(confidence: float) -> str:
        """Human readable band for a confidence score"""
        if confidence >= ConfidenceThresholds.HIGH_CONFIDENCE:
            return "high"
        if confidence >= ConfidenceThresholds.MEDIUM_CONFIDENCE:
            return "medium"
        return "low"
