#!/usr/bin/env python3
"""
Integration tests for configuration module.

Tests configuration loading, environment overrides and validation.
"""

from pathlib import Path

import pytest

from ordersync.core import config as config_module
from ordersync.core.config import (
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    is_test,
    reload_config,
)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the cached config so each test loads from the environment it sets up."""
    config_module._config = None
    yield
    config_module._config = None


@pytest.mark.integration
class TestConfigLoading:
    """Test configuration loading and structure."""

    def test_config_loads_in_test_environment(self):
        config = get_config()

        assert config.environment == Environment.TEST
        assert is_test()
        assert config.data_dir == Path("/tmp/test_ordersync_data")

    def test_directories_are_created(self):
        assert get_data_dir().is_dir()
        assert get_output_dir().is_dir()
        assert get_output_dir() == get_data_dir() / "reconciliation"

    def test_defaults(self):
        config = get_config()

        assert config.matching.amount_tolerance_cents == 1
        assert config.matching.date_tolerance_days == 5
        assert config.allocation.correction_limit_cents == 10
        assert config.splitting.rounding_warn_cents == 1
        assert config.splitting.require_two_splits is False
        assert config.splitting.tip_categories == ["Shopping", "Fees & Charges", "Services", "Other"]
        assert config.splitting.tip_fallback_category == "Groceries"
        assert config.validation.charge_tolerance_cents == 2
        assert config.validate() == []

    def test_config_is_cached(self):
        assert get_config() is get_config()


@pytest.mark.integration
class TestConfigOverrides:
    """Test environment variable overrides."""

    def test_tolerance_overrides(self, monkeypatch):
        monkeypatch.setenv("MATCH_AMOUNT_TOLERANCE_CENTS", "3")
        monkeypatch.setenv("MATCH_DATE_TOLERANCE_DAYS", "7")
        monkeypatch.setenv("CHARGE_TOLERANCE_CENTS", "5")

        config = reload_config()

        assert config.matching.amount_tolerance_cents == 3
        assert config.matching.date_tolerance_days == 7
        assert config.validation.charge_tolerance_cents == 5

    def test_splitting_overrides(self, monkeypatch):
        monkeypatch.setenv("SPLIT_REQUIRE_TWO_SPLITS", "TRUE")
        monkeypatch.setenv("TIP_CATEGORIES", " Tips , ,Services")

        config = reload_config()

        assert config.splitting.require_two_splits is True
        assert config.splitting.tip_categories == ["Tips", "Services"]

    def test_data_dir_override(self, monkeypatch, temp_dir):
        monkeypatch.setenv("ORDERSYNC_DATA_DIR", str(temp_dir / "data"))

        config = reload_config()

        assert config.data_dir == temp_dir / "data"
        assert (temp_dir / "data" / "reconciliation").is_dir()

    def test_negative_tolerance_fails_validation(self, monkeypatch):
        monkeypatch.setenv("MATCH_DATE_TOLERANCE_DAYS", "-1")

        with pytest.raises(ValueError, match="date tolerance must be non-negative"):
            reload_config()

    def test_unknown_log_level_fails_validation(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ValueError, match="Unknown log level: CHATTY"):
            reload_config()


@pytest.mark.integration
class TestConfigSerialization:
    def test_to_dict(self):
        data = get_config().to_dict()

        assert data["environment"] == "test"
        assert data["data_dir"] == "/tmp/test_ordersync_data"
        assert data["matching"] == {"amount_tolerance_cents": 1, "date_tolerance_days": 5}
        assert data["validation"]["charge_tolerance_cents"] == 2
        assert data["log_level"] == "INFO"
