#!/usr/bin/env python3
"""
Reconcile CLI - Order Reconciliation Commands

Runs a reconciliation pass over exported orders and bank transactions and
saves the outcome as a timestamped JSON report.
"""

from dataclasses import replace
from datetime import datetime
from pathlib import Path

import click

from ..core.config import get_config
from ..core.json_utils import write_json
from ..core.money import Money
from ..matching import Matcher, MatcherConfig
from ..reconcile import Reconciler, load_categories, load_orders, load_transactions
from ..splitting import CachingCategorizer, ProviderCategoryCategorizer, Splitter, SplitterConfig


@click.group()
def reconcile() -> None:
    """Order to bank transaction reconciliation commands."""
    pass


@reconcile.command()
@click.option("--orders", "orders_file", required=True, type=click.Path(exists=True), help="Orders JSON file")
@click.option(
    "--transactions", "transactions_file", required=True, type=click.Path(exists=True), help="Bank feed CSV or JSON"
)
@click.option(
    "--categories", "categories_file", required=True, type=click.Path(exists=True), help="Categories YAML file"
)
@click.option("--dry-run/--apply", default=True, help="Preview only (default) or write to the ledger")
@click.option("--provider", help="Only reconcile this provider's orders, with its date tolerance")
@click.option("--date-tolerance", type=int, help="Override matching date tolerance (days)")
@click.option("--default-category", default="Shopping", help="Category for items without a known provider category")
@click.option("--output-dir", help="Override output directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def run(
    ctx: click.Context,
    orders_file: str,
    transactions_file: str,
    categories_file: str,
    dry_run: bool,
    provider: str | None,
    date_tolerance: int | None,
    default_category: str,
    output_dir: str | None,
    verbose: bool,
) -> None:
    """
    Match orders to bank transactions and compute category splits.

    No ledger write API is configured, so only dry runs are possible.

    Examples:
      ordersync reconcile run --orders orders.json --transactions bank.csv --categories categories.yaml
      ordersync reconcile run --orders orders.json --transactions bank.csv --categories categories.yaml
        --provider walmart --date-tolerance 4
    """
    if not dry_run:
        raise click.UsageError("--apply needs a ledger writer and none is configured; use --dry-run")

    config = get_config()
    verbose = verbose or (ctx.obj or {}).get("verbose", False)

    output_path = Path(output_dir) if output_dir else config.output_dir
    output_path.mkdir(parents=True, exist_ok=True)

    matcher_config = MatcherConfig.for_provider(provider) if provider else MatcherConfig.from_config(config.matching)
    matcher_config = replace(matcher_config, amount_tolerance=Money.from_cents(config.matching.amount_tolerance_cents))
    if date_tolerance is not None:
        matcher_config = replace(matcher_config, date_tolerance=date_tolerance)

    if verbose:
        click.echo("Order Reconciliation")
        click.echo(f"Orders: {orders_file}")
        click.echo(f"Transactions: {transactions_file}")
        click.echo(f"Categories: {categories_file}")
        click.echo(f"Provider: {provider or 'all'}")
        click.echo(f"Amount tolerance: {matcher_config.amount_tolerance}")
        click.echo(f"Date tolerance: {matcher_config.date_tolerance} days")
        click.echo(f"Output: {output_path}")
        click.echo()

    try:
        orders = load_orders(orders_file)
        transactions = load_transactions(transactions_file)
        categories = load_categories(categories_file)

        if provider:
            orders = [o for o in orders if o.provider.lower() == provider.lower()]

        if verbose:
            click.echo(f"Loaded {len(orders)} orders, {len(transactions)} transactions, {len(categories)} categories")

        categorizer = CachingCategorizer(ProviderCategoryCategorizer(default_category))
        splitter = Splitter(categorizer, config=SplitterConfig.from_config(config.splitting))
        reconciler = Reconciler(
            Matcher(matcher_config),
            splitter,
            charge_tolerance=Money.from_cents(config.validation.charge_tolerance_cents),
            allocation_correction_limit=Money.from_cents(config.allocation.correction_limit_cents),
        )

        click.echo("Reconciling orders...")
        result_run = reconciler.reconcile(orders, transactions, categories, dry_run=True)

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        output_file = output_path / f"{timestamp}_reconciliation_results.json"

        result = {
            "metadata": {
                "orders_file": str(orders_file),
                "transactions_file": str(transactions_file),
                "categories_file": str(categories_file),
                "provider": provider or "all",
                "amount_tolerance": matcher_config.amount_tolerance.to_float(),
                "date_tolerance": matcher_config.date_tolerance,
                "timestamp": timestamp,
            },
            **result_run.to_dict(),
        }
        write_json(output_file, result)

        click.echo(
            f"✅ Processed {result_run.processed} of {result_run.total} orders "
            f"({result_run.match_rate:.1f}% matched)"
        )
        click.echo(
            f"   Skipped: {result_run.skipped}  No match: {result_run.no_match}  Failed: {result_run.failed}"
        )
        if verbose:
            for record in result_run.records:
                suffix = f" - {record.message}" if record.message else ""
                click.echo(f"   {record.order_id}: {record.status.value}{suffix}")
        click.echo(f"   Results saved to: {output_file}")

    except (FileNotFoundError, ValueError) as e:
        click.echo(f"❌ Error during reconciliation: {e}", err=True)
        raise click.ClickException(str(e)) from e
