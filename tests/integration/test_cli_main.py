#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with real command invocation.
"""

import pytest
from click.testing import CliRunner

from ordersync import __version__
from ordersync.cli.main import main


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        """Test ordersync --help shows all registered subcommands."""
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Order Sync" in result.output

        for command in ["reconcile", "tools", "config", "version"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert f"Order Sync v{__version__}" in result.output

    def test_config_command_shows_configuration(self):
        """Test ordersync config displays current configuration."""
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "Data Directory:" in result.output
        assert "Output Directory:" in result.output
        assert "Match Amount Tolerance: 1 cents" in result.output
        assert "Charge Tolerance: 2 cents" in result.output
        assert "Debug Mode:" in result.output
        assert "Log Level:" in result.output

    def test_verbose_flag_shows_environment(self):
        result = self.runner.invoke(main, ["--verbose", "version"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert "Data directory:" in result.output

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["nonexistent"])

        assert result.exit_code != 0
        assert "No such command" in result.output

    def test_subcommand_help(self):
        for args in (["reconcile", "run", "--help"], ["tools", "allocate", "--help"]):
            result = self.runner.invoke(main, args)
            assert result.exit_code == 0
            assert "Usage:" in result.output
