"""CLI commands for order lines."""

from __future__ import annotations

import click

from storefront.application.add_order_line import AddOrderLineHandler
from storefront.application.adjust_order_line import AdjustOrderLineHandler
from storefront.application.remove_order_line import RemoveOrderLineHandler
from storefront.application.show_order_line import (
    ListOrderLinesHandler,
    ShowOrderLineHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    order_line_repository,
    order_repository,
    product_repository,
)


@click.command("show")
@click.option("--id", "line_id", required=True, type=int, help="Line ID to display.")
def line_show(line_id: int) -> None:
    """Show a single order line."""
    handler = ShowOrderLineHandler(line_repo=order_line_repository())

    try:
        dto = handler.handle(line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Line #{dto.id} of order #{dto.order_id}: product {dto.product_id} "
        f"x{dto.amount} at {dto.unit_price} = {dto.subtotal}"
    )


@click.command("list")
@click.option("--order", "order_id", type=int, default=None, help="Only lines of this order.")
def line_list(order_id: int | None) -> None:
    """List order lines."""
    lines = ListOrderLinesHandler(line_repo=order_line_repository()).handle(order_id)

    if not lines:
        click.echo("No order lines found.")
        return

    click.echo(f"{'ID':<6} {'Order':<6} {'Product':<10} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo("-" * 54)
    for dto in lines:
        click.echo(
            f"{dto.id:<6} {dto.order_id:<6} {dto.product_id:<10} {dto.amount:>5} "
            f"{dto.unit_price:>10} {dto.subtotal:>12}"
        )


@click.command("add")
@click.option("--order", "order_id", required=True, type=int, help="Order to add the line to.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--amount", required=True, type=int, help="Units to order.")
def line_add(order_id: int, product_id: str, amount: int) -> None:
    """Add a product to an existing order (reserves stock if confirmed)."""
    handler = AddOrderLineHandler(
        line_repo=order_line_repository(),
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(order_id, product_id, amount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Line #{dto.id} added to order #{dto.order_id}: product {dto.product_id} "
        f"x{dto.amount}, subtotal {dto.subtotal}"
    )


@click.command("adjust")
@click.option("--id", "line_id", required=True, type=int, help="Line ID to adjust.")
@click.option("--amount", required=True, type=int, help="New amount for the line.")
def line_adjust(line_id: int, amount: int) -> None:
    """Change the amount of an order line (moves stock, updates totals)."""
    handler = AdjustOrderLineHandler(
        line_repo=order_line_repository(),
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(line_id, amount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Line #{dto.id} now x{dto.amount}, subtotal {dto.subtotal}")


@click.command("remove")
@click.option("--id", "line_id", required=True, type=int, help="Line ID to remove.")
def line_remove(line_id: int) -> None:
    """Remove an order line (returns its stock if the order is confirmed)."""
    handler = RemoveOrderLineHandler(
        line_repo=order_line_repository(),
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Line #{line_id} removed.")
