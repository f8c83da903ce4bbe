"""
Command Line Interface Package

Unified CLI for the order reconciliation engine.

Command Structure:
- ordersync: Main entry point with utility commands (version, config)
- ordersync reconcile run: Reconciliation pass over exported data
- ordersync tools: Allocation and charge validation helpers
"""
