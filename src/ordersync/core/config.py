#!/usr/bin/env python3
"""
Configuration Management for Order Sync

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).

The reconciliation thresholds that used to be literals in the matching and
splitting code live here as named settings, each overridable from the
environment.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


# Category names tried, in order, for a delivery tip split
DEFAULT_TIP_CATEGORIES = ("Shopping", "Fees & Charges", "Services", "Other")
DEFAULT_TIP_FALLBACK_CATEGORY = "Groceries"


@dataclass
class MatchingConfig:
    """Order to transaction matching tolerances."""

    amount_tolerance_cents: int = 1
    date_tolerance_days: int = 5


@dataclass
class AllocationConfig:
    """Pro-rata allocation settings."""

    # Rounding differences at or above this are left uncorrected
    correction_limit_cents: int = 10


@dataclass
class SplittingConfig:
    """Category split settings."""

    # Corrections larger than this are logged as suspicious
    rounding_warn_cents: int = 1
    # Some ledgers can't hold a one-line split
    require_two_splits: bool = False
    tip_categories: list = field(default_factory=lambda: list(DEFAULT_TIP_CATEGORIES))
    tip_fallback_category: str = DEFAULT_TIP_FALLBACK_CATEGORY


@dataclass
class ValidationConfig:
    """Charge validation settings."""

    # Two independently rounded charges can each be a cent off
    charge_tolerance_cents: int = 2


@dataclass
class Config:
    """
    Main configuration class for the order sync application.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    matching: MatchingConfig
    allocation: AllocationConfig
    splitting: SplittingConfig
    validation: ValidationConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("ORDERSYNC_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_ordersync"
            base_dir = Path(os.getenv("ORDERSYNC_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("ORDERSYNC_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "reconciliation"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        matching = MatchingConfig(
            amount_tolerance_cents=int(os.getenv("MATCH_AMOUNT_TOLERANCE_CENTS", "1")),
            date_tolerance_days=int(os.getenv("MATCH_DATE_TOLERANCE_DAYS", "5")),
        )

        allocation = AllocationConfig(
            correction_limit_cents=int(os.getenv("ALLOCATION_CORRECTION_LIMIT_CENTS", "10")),
        )

        splitting = SplittingConfig(
            rounding_warn_cents=int(os.getenv("SPLIT_ROUNDING_WARN_CENTS", "1")),
            require_two_splits=os.getenv("SPLIT_REQUIRE_TWO_SPLITS", "false").lower() == "true",
            tip_categories=_parse_list(os.getenv("TIP_CATEGORIES", ",".join(DEFAULT_TIP_CATEGORIES))),
            tip_fallback_category=os.getenv("TIP_FALLBACK_CATEGORY", DEFAULT_TIP_FALLBACK_CATEGORY),
        )

        validation = ValidationConfig(
            charge_tolerance_cents=int(os.getenv("CHARGE_TOLERANCE_CENTS", "2")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            matching=matching,
            allocation=allocation,
            splitting=splitting,
            validation=validation,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [("data_dir", self.data_dir), ("output_dir", self.output_dir)]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.matching.amount_tolerance_cents < 0:
            errors.append(
                f"Match amount tolerance must be non-negative, got {self.matching.amount_tolerance_cents}"
            )
        if self.matching.date_tolerance_days < 0:
            errors.append(f"Match date tolerance must be non-negative, got {self.matching.date_tolerance_days}")
        if self.allocation.correction_limit_cents < 0:
            errors.append(
                f"Allocation correction limit must be non-negative, got {self.allocation.correction_limit_cents}"
            )
        if self.splitting.rounding_warn_cents < 0:
            errors.append(f"Split rounding threshold must be non-negative, got {self.splitting.rounding_warn_cents}")
        if self.validation.charge_tolerance_cents < 0:
            errors.append(
                f"Charge tolerance must be non-negative, got {self.validation.charge_tolerance_cents}"
            )
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dataclass_fields__"):
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_output_dir() -> Path:
    """Get the output directory path."""
    return get_config().output_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
