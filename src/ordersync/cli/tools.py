#!/usr/bin/env python3
"""
Tools CLI - Standalone Calculation Commands

Exposes the allocator and charge validator for ad-hoc checks.
"""

import click

from ..allocation import AllocationError, AllocationItem, allocate
from ..core.config import get_config
from ..core.money import Money
from ..validation import validate_charges


@click.group()
def tools() -> None:
    """Standalone allocation and validation tools."""
    pass


def _parse_dollars(value: str, param_hint: str) -> Money:
    try:
        return Money.from_dollars(value)
    except ValueError as e:
        raise click.BadParameter(f"not a dollar amount: '{value}'", param_hint=param_hint) from e


def _parse_item(value: str) -> AllocationItem:
    """Parse "Name=12.50" into an AllocationItem."""
    name, sep, price = value.rpartition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=PRICE, got '{value}'", param_hint="--item")
    return AllocationItem(name=name.strip(), list_price=_parse_dollars(price.strip(), "--item"))


@tools.command(name="allocate")
@click.option("--total", required=True, help="Amount actually paid, in dollars")
@click.option("--item", "items", multiple=True, required=True, help="Item as NAME=LIST_PRICE (repeatable)")
def allocate_cmd(total: str, items: tuple) -> None:
    """
    Distribute a paid total across items by list price.

    Example:
      ordersync tools allocate --total 10.00 --item "Milk=4.00" --item "Bread=8.50"
    """
    config = get_config()
    allocation_items = [_parse_item(item) for item in items]

    try:
        result = allocate(
            allocation_items,
            _parse_dollars(total, "--total"),
            Money.from_cents(config.allocation.correction_limit_cents),
        )
    except AllocationError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Multiplier: {result.multiplier:.4f}")
    for allocation in result.allocations:
        click.echo(f"  {allocation.name}: {allocation.list_price} -> {allocation.allocated_cost}")
    click.echo(f"Total allocated: {result.total_allocated}")


@tools.command(name="validate-charges")
@click.option("--total", required=True, help="Order total, in dollars")
@click.option("--charge", "charges", multiple=True, required=True, help="Bank charge in dollars (repeatable)")
@click.option("--non-bank", default="0", help="Amount paid by gift cards or points, in dollars")
@click.pass_context
def validate_charges_cmd(ctx: click.Context, total: str, charges: tuple, non_bank: str) -> None:
    """
    Check that bank charges cover an order total.

    Exits with status 1 when they don't.

    Example:
      ordersync tools validate-charges --total 103.27 --charge 52.55 --charge 50.72
    """
    config = get_config()

    validation = validate_charges(
        [_parse_dollars(c, "--charge") for c in charges],
        _parse_dollars(total, "--total"),
        _parse_dollars(non_bank, "--non-bank"),
        Money.from_cents(config.validation.charge_tolerance_cents),
    )

    click.echo(f"Bank charges: {validation.bank_charges_sum}")
    click.echo(f"Expected: {validation.expected_sum}")
    click.echo(f"Difference: {validation.difference}")

    if validation.valid:
        click.echo("✅ Charges reconcile")
    else:
        click.echo(f"❌ {validation.reason}")
        ctx.exit(1)
