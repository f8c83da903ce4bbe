#!/usr/bin/env python3
"""
Shared exception types.

A ValidationError aborts the current reconciliation attempt for one order.
"No match" and "charges don't add up yet" are not exceptions: the matcher
returns None and the charge validator returns an invalid result.
"""


class ValidationError(ValueError):
    """Raised when inputs or results fail a hard validation rule."""

    pass


class CategorizationError(Exception):
    """Raised when the item categorizer backend fails."""

    pass
