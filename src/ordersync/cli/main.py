#!/usr/bin/env python3
"""
Main CLI Entry Point for Order Sync

Provides a unified command-line interface for the reconciliation engine.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Order Sync - Provider Order Reconciliation

    Matches retail provider orders to bank-feed transactions and splits
    each transaction across spending categories.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["ORDERSYNC_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("ordersync").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from ordersync import __version__

    click.echo(f"Order Sync v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Match Amount Tolerance: {config_obj.matching.amount_tolerance_cents} cents")
    click.echo(f"  Match Date Tolerance: {config_obj.matching.date_tolerance_days} days")
    click.echo(f"  Allocation Correction Limit: {config_obj.allocation.correction_limit_cents} cents")
    click.echo(f"  Split Rounding Warning: {config_obj.splitting.rounding_warn_cents} cents")
    click.echo(f"  Require Two Splits: {config_obj.splitting.require_two_splits}")
    click.echo(f"  Tip Categories: {', '.join(config_obj.splitting.tip_categories)}")
    click.echo(f"  Charge Tolerance: {config_obj.validation.charge_tolerance_cents} cents")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .reconcile import reconcile  # noqa: E402
from .tools import tools  # noqa: E402

main.add_command(reconcile)
main.add_command(tools)


if __name__ == "__main__":
    main()
