"""
Test Suite for Order Sync

Test Structure:
- fixtures/: Shared synthetic orders, transactions and categories
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI and configuration tests

Test Data:
All test data is synthetic. Real orders and bank records are never included in tests.
"""
