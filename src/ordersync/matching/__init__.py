"""
Transaction Matching Package

Pairs provider orders with the bank transactions that paid for them.

Key Components:
- matcher: single and multi-charge matching under amount/date tolerance
- models: matcher configuration and match results
- scorer: informational match confidence
"""

from .matcher import Matcher
from .models import (
    PROVIDER_DATE_TOLERANCES,
    MatcherConfig,
    MatchResult,
    MatchValidationError,
    MultiMatchResult,
)
from .scorer import ConfidenceThresholds, MatchScorer

__all__ = [
    "PROVIDER_DATE_TOLERANCES",
    "ConfidenceThresholds",
    "MatchResult",
    "MatchScorer",
    "MatchValidationError",
    "Matcher",
    "MatcherConfig",
    "MultiMatchResult",
]
