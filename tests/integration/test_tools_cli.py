#!/usr/bin/env python3
"""Integration tests for the standalone tools CLI."""

import pytest
from click.testing import CliRunner

from ordersync.cli.main import main


@pytest.mark.integration
class TestAllocateCommand:
    def setup_method(self):
        self.runner = CliRunner()

    def test_allocate(self):
        result = self.runner.invoke(
            main, ["tools", "allocate", "--total", "10.00", "--item", "Milk=12.50", "--item", "Bread=7.50"]
        )

        assert result.exit_code == 0, result.output
        assert "Multiplier: 0.5000" in result.output
        assert "Milk: $12.50 -> $6.25" in result.output
        assert "Bread: $7.50 -> $3.75" in result.output
        assert "Total allocated: $10.00" in result.output

    def test_item_names_may_contain_equals(self):
        result = self.runner.invoke(main, ["tools", "allocate", "--total", "2", "--item", "2+2=4 Mug=4.00"])

        assert result.exit_code == 0, result.output
        assert "2+2=4 Mug: $4.00 -> $2.00" in result.output

    def test_bad_item_format(self):
        result = self.runner.invoke(main, ["tools", "allocate", "--total", "10.00", "--item", "Milk"])

        assert result.exit_code == 2
        assert "NAME=PRICE" in result.output

    def test_bad_amount(self):
        result = self.runner.invoke(main, ["tools", "allocate", "--total", "ten", "--item", "Milk=1.00"])

        assert result.exit_code == 2
        assert "not a dollar amount" in result.output

    def test_negative_total(self):
        result = self.runner.invoke(main, ["tools", "allocate", "--total=-5.00", "--item", "Milk=1.00"])

        assert result.exit_code == 1
        assert "cannot be negative" in result.output


@pytest.mark.integration
class TestValidateChargesCommand:
    def setup_method(self):
        self.runner = CliRunner()

    def test_charges_reconcile(self):
        result = self.runner.invoke(
            main, ["tools", "validate-charges", "--total", "103.27", "--charge", "52.55", "--charge", "50.72"]
        )

        assert result.exit_code == 0, result.output
        assert "Bank charges: $103.27" in result.output
        assert "✅ Charges reconcile" in result.output

    def test_missing_charge_fails(self):
        result = self.runner.invoke(
            main, ["tools", "validate-charges", "--total", "103.27", "--charge", "52.55", "--charge", "40.00"]
        )

        assert result.exit_code == 1
        assert "Difference: -$10.72" in result.output
        assert "❌ bank charges ($92.55) are less than expected ($103.27)" in result.output

    def test_non_bank_amount(self):
        result = self.runner.invoke(
            main,
            ["tools", "validate-charges", "--total", "103.27", "--charge", "53.27", "--non-bank", "50.00"],
        )

        assert result.exit_code == 0, result.output
        assert "Expected: $53.27" in result.output
