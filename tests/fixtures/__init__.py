"""
Test Fixtures and Utilities

Synthetic orders, bank transactions and categories for unit and
integration tests, plus helpers that write them out as reconciliation
inputs.
"""
