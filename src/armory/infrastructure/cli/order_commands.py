"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from armory.application.create_order import CreateOrderHandler
from armory.application.delete_order import DeleteOrderHandler
from armory.application.dto import OrderDTO
from armory.application.show_order import ListOrdersHandler, ShowOrderHandler
from armory.application.update_order import UpdateOrderHandler
from armory.domain.exceptions import DomainException
from armory.infrastructure.bootstrap import (
    commission_rate,
    order_repository,
    stock_repository,
    writer,
)


def _parse_items(raw: str) -> dict[str, int]:
    """Parse '9mm:50,5mm:10' into {kind: qty}."""
    result: dict[str, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Kind:Quantity'."
            )
        kind, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for '{kind}'."
            )
        result[kind.strip()] = qty
    return result


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  [{dto.family}]  {dto.phone}".rstrip())
    click.echo(f"Created:  {dto.created_at}" + (f" by {dto.created_by}" if dto.created_by else ""))
    click.echo()
    click.echo(f"  {'Kind':<10} {'Rounds':>8}")
    click.echo(f"  {'-'*19}")
    for kind, qty in dto.required.items():
        if qty:
            click.echo(f"  {kind:<10} {qty:>8}")
    click.echo(f"  {'-'*19}")
    click.echo(f"  {'Total':<10} {dto.total:>20}")
    click.echo(f"  {'Commission':<10} {dto.commission:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--family", required=True, help="Family the customer belongs to.")
@click.option("--phone", default="", help="Customer phone.")
@click.option("--user", default=None, help="Who is registering the order.")
@click.option("--items", required=True, help="Rounds as 'Kind:Qty,Kind:Qty' (e.g. '9mm:50').")
def order_create(customer: str, family: str, phone: str, user: str | None, items: str) -> None:
    """Create a new order (pending until stock covers it)."""
    required = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        stock_repo=stock_repository(),
        commission_rate=commission_rate(),
        writer=writer(),
    )

    try:
        dto = handler.handle(
            customer_name=customer,
            family=family,
            required=required,
            phone=phone,
            created_by=user,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--items", default=None, help="New rounds as 'Kind:Qty,...' (omitted kinds become 0).")
@click.option(
    "--status",
    type=click.Choice(["pending", "ready", "delivered", "cancelled"]),
    default=None,
    help="New status.",
)
@click.option("--customer", default=None, help="New customer name.")
@click.option("--family", default=None, help="New family.")
@click.option("--phone", default=None, help="New phone.")
def order_update(
    order_id: int,
    items: str | None,
    status: str | None,
    customer: str | None,
    family: str | None,
    phone: str | None,
) -> None:
    """Change an order's quantities, status or contact details."""
    handler = UpdateOrderHandler(
        order_repo=order_repository(),
        stock_repo=stock_repository(),
        writer=writer(),
    )

    try:
        result = handler.handle(
            order_id,
            required=_parse_items(items) if items else None,
            status=status,
            customer_name=customer,
            family=family,
            phone=phone,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.stock_adjusted:
        click.echo(f"Order #{order_id} updated ({result.previous_status} -> {result.order.status}).")
    else:
        click.echo(
            f"Order #{order_id} updated ({result.previous_status} -> {result.order.status}), "
            "but some stock adjustments failed; see the log."
        )


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Delete an order (returns reserved stock)."""
    handler = DeleteOrderHandler(
        order_repo=order_repository(),
        stock_repo=stock_repository(),
        writer=writer(),
    )

    try:
        stock_ok = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if stock_ok:
        click.echo(f"Order #{order_id} deleted.")
    else:
        click.echo(f"Order #{order_id} deleted, but its stock was only partly returned; see the log.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    type=click.Choice(["pending", "ready", "delivered", "cancelled"]),
    default=None,
    help="Only orders in this status.",
)
def order_list(status: str | None) -> None:
    """List orders, newest first."""
    orders = ListOrdersHandler(order_repo=order_repository()).handle(status)

    if not orders:
        click.echo("No orders found.")
        return

    kinds = ["5mm", "9mm", "762mm", "12cbc"]
    header = " ".join(f"{k:>6}" for k in kinds)
    click.echo(f"{'ID':<5} {'Customer':<16} {'Status':<10} {header} {'Total':>12}")
    click.echo("-" * (47 + 7 * len(kinds)))
    for dto in orders:
        qtys = " ".join(f"{dto.required.get(k, 0):>6}" for k in kinds)
        click.echo(f"{dto.id:<5} {dto.customer_name:<16} {dto.status:<10} {qtys} {dto.total:>12}")
