import logging

import click

from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_confirm,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)
from storefront.infrastructure.cli.order_line_commands import (
    line_add,
    line_adjust,
    line_list,
    line_remove,
    line_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_update,
)
from storefront.infrastructure.config import load_settings
from storefront.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at INFO level.")
def cli(verbose: bool) -> None:
    """Storefront — orders, order lines and product stock"""
    level = load_settings().log_level
    configure_logging(min(level, logging.INFO) if verbose else level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def line() -> None:
    """Manage order lines."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
line.add_command(line_add)
line.add_command(line_adjust)
line.add_command(line_list)
line.add_command(line_remove)
line.add_command(line_show)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
