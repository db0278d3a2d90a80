"""CLI commands for stock management and the admission scan."""

from __future__ import annotations

import click

from armory.application.adjust_stock import AdjustStockHandler, SetStockHandler
from armory.application.produce_ammo import (
    ProduceAmmoHandler,
    ReceiveRouteMaterialsHandler,
)
from armory.application.run_admission_scan import RunAdmissionScanHandler
from armory.application.show_stock import ConsolidateStockHandler, ShowStockHandler
from armory.application.withdraw_stock import (
    ListWithdrawalsHandler,
    WithdrawStockHandler,
)
from armory.domain.exceptions import DomainException
from armory.infrastructure.bootstrap import (
    order_repository,
    stock_repository,
    withdrawal_repository,
    writer,
)

_CATEGORIES = click.Choice(["material", "ammo"])


@click.command("show")
@click.option("--category", type=_CATEGORIES, default=None, help="Only one category.")
def stock_show(category: str | None) -> None:
    """Show current stock levels."""
    lines = ShowStockHandler(stock_repo=stock_repository()).handle(category)

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Category':<10} {'Item':<16} {'Quantity':>10} {'Price':>10}")
    click.echo("-" * 49)
    for line in lines:
        click.echo(f"{line.category:<10} {line.name:<16} {line.quantity:>10} {line.unit_price:>10}")


@click.command("set")
@click.option("--category", type=_CATEGORIES, required=True)
@click.option("--name", required=True, help="Item name (e.g. 'Iron', '9mm').")
@click.option("--quantity", required=True, type=int, help="New on-hand quantity.")
def stock_set(category: str, name: str, quantity: int) -> None:
    """Overwrite the on-hand quantity of an item."""
    handler = SetStockHandler(
        stock_repo=stock_repository(),
        order_repo=order_repository(),
        writer=writer(),
    )

    try:
        line = handler.handle(category, name, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock of '{line.name}' set to {line.quantity}")


@click.command("add")
@click.option("--category", type=_CATEGORIES, required=True)
@click.option("--name", required=True, help="Item name (e.g. 'Iron', '9mm').")
@click.option("--quantity", required=True, type=int, help="Units to add (negative removes).")
@click.option(
    "--consume-materials",
    is_flag=True,
    default=False,
    help="For ammunition: also debit the materials needed to make it.",
)
def stock_add(category: str, name: str, quantity: int, consume_materials: bool) -> None:
    """Add to (or remove from) an item's stock."""
    handler = AdjustStockHandler(
        stock_repo=stock_repository(),
        order_repo=order_repository(),
        writer=writer(),
    )

    try:
        line = handler.handle(category, name, quantity, consume_materials=consume_materials)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock of '{line.name}' is now {line.quantity}")


@click.command("withdraw")
@click.option("--category", type=_CATEGORIES, required=True)
@click.option("--name", required=True, help="Item name (e.g. 'Iron', '9mm').")
@click.option("--quantity", required=True, type=int, help="Units to remove.")
@click.option("--to", "destinations", default=None, help="Destination(s), comma-separated.")
@click.option("--user", default=None, help="Who is withdrawing.")
def stock_withdraw(
    category: str, name: str, quantity: int, destinations: str | None, user: str | None
) -> None:
    """Remove stock outside of any order (refused if not enough on hand)."""
    handler = WithdrawStockHandler(
        stock_repo=stock_repository(),
        order_repo=order_repository(),
        withdrawal_repo=withdrawal_repository(),
        writer=writer(),
    )

    try:
        dto = handler.handle(category, name, quantity, destinations=destinations, user=user)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Withdrew {dto.quantity} x {dto.name} to {dto.destination}")


@click.command("withdrawals")
def stock_withdrawals() -> None:
    """List past ad-hoc withdrawals, newest first."""
    rows = ListWithdrawalsHandler(withdrawal_repo=withdrawal_repository()).handle()

    if not rows:
        click.echo("No withdrawals recorded.")
        return

    click.echo(f"{'ID':<5} {'Item':<16} {'Qty':>6} {'Destination':<24} {'User':<12} {'When':<20}")
    click.echo("-" * 88)
    for w in rows:
        click.echo(
            f"{w.id:<5} {w.name:<16} {w.quantity:>6} {w.destination:<24} {w.user or '-':<12} {w.created_at:<20}"
        )


@click.command("produce")
@click.option("--kind", required=True, help="Ammunition kind (5mm, 9mm, 762mm, 12cbc).")
@click.option("--batches", required=True, type=int, help="Batches of 50 rounds.")
def stock_produce(kind: str, batches: int) -> None:
    """Turn raw materials into ammunition."""
    handler = ProduceAmmoHandler(
        stock_repo=stock_repository(),
        order_repo=order_repository(),
        writer=writer(),
    )

    try:
        dto = handler.handle(kind, batches)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Produced {dto.rounds_produced} rounds of {dto.ammo_kind}.")
    for name, qty in dto.materials_consumed.items():
        click.echo(f"  - {name}: {qty}")


@click.command("route")
@click.option("--count", required=True, type=int, help="Completed supply routes.")
def stock_route(count: int) -> None:
    """Book the materials delivered by completed supply routes."""
    handler = ReceiveRouteMaterialsHandler(
        stock_repo=stock_repository(),
        order_repo=order_repository(),
        writer=writer(),
    )

    try:
        delivered = handler.handle(count)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for name, qty in delivered.items():
        click.echo(f"  + {name}: {qty}")


@click.command("dedupe")
def stock_dedupe() -> None:
    """Merge duplicate stock rows."""
    try:
        removed = ConsolidateStockHandler(stock_repo=stock_repository(), writer=writer()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{removed} duplicate row(s) merged.")


@click.command("scan")
def scan() -> None:
    """Re-check pending orders against stock (oldest first)."""
    handler = RunAdmissionScanHandler(
        order_repo=order_repository(),
        stock_repo=stock_repository(),
        writer=writer(),
    )

    try:
        report = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if report.promoted:
        click.echo(f"Ready: {', '.join(f'#{i}' for i in report.promoted)}")
    else:
        click.echo("No orders became ready.")
    if report.halted_at is not None:
        click.echo(f"Waiting on order #{report.halted_at} (not enough stock).")
