import logging

import click

from armory.infrastructure.bootstrap import settings
from armory.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)
from armory.infrastructure.cli.stock_commands import (
    scan,
    stock_add,
    stock_dedupe,
    stock_produce,
    stock_route,
    stock_set,
    stock_show,
    stock_withdraw,
    stock_withdrawals,
)
from armory.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Armory — stock reservation and order admission"""
    cfg = settings()
    configure_logging(logging.DEBUG if verbose else cfg.log_level, cfg.log_path)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def stock() -> None:
    """Manage stock."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
stock.add_command(stock_add)
stock.add_command(stock_dedupe)
stock.add_command(stock_produce)
stock.add_command(stock_route)
stock.add_command(stock_set)
stock.add_command(stock_show)
stock.add_command(stock_withdraw)
stock.add_command(stock_withdrawals)
cli.add_command(scan)
