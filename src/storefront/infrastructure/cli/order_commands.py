"""CLI commands for orders."""

from __future__ import annotations

import json

import click

from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import CreateOrderRequest, OrderDTO, OrderUpdate
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order import (
    CancelOrderHandler,
    ConfirmOrderHandler,
    UpdateOrderHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    order_line_repository,
    order_repository,
    product_repository,
)

_STATUS_CHOICES = click.Choice(["confirmed", "cancelled"], case_sensitive=False)


def _parse_lines(raw: str) -> list[dict]:
    """Parse '1:3,2:5' into line payloads (product ID : amount)."""
    lines: list[dict] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid line format '{pair}'. Expected 'ProductId:Amount'."
            )
        product_id, amount_str = pair.rsplit(":", 1)
        try:
            amount = int(amount_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid amount '{amount_str}' for product '{product_id}'."
            )
        lines.append({"productId": product_id.strip(), "amount": amount})
    return lines


def _update_handler() -> UpdateOrderHandler:
    return UpdateOrderHandler(
        order_repo=order_repository(),
        line_repo=order_line_repository(),
        product_repo=product_repository(),
    )


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Line':<6} {'Product':<10} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.id:<6} {line.product_id:<10} {line.amount:>5} "
            f"{line.unit_price:>10} {line.subtotal:>12}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--user", "user_id", default=None, help="ID of the ordering user.")
@click.option("--status", type=_STATUS_CHOICES, default="confirmed", show_default=True)
@click.option("--lines", default=None, help="Lines as 'ProductId:Amount,ProductId:Amount'.")
@click.option("--payload", default=None, help="Full request as JSON instead of --user/--lines.")
def order_create(
    user_id: str | None,
    status: str,
    lines: str | None,
    payload: str | None,
) -> None:
    """Create a new order (reserves stock for confirmed orders)."""
    if payload is not None:
        try:
            raw = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Invalid JSON payload: {exc}")
    else:
        if not user_id or not lines:
            raise click.UsageError("Either --payload or both --user and --lines are required")
        raw = {
            "userId": user_id,
            "status": status.lower() == "confirmed",
            "details": _parse_lines(lines),
        }

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        line_repo=order_line_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(CreateOrderRequest.from_payload(raw))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show an order with its lines."""
    handler = ShowOrderHandler(
        order_repo=order_repository(),
        line_repo=order_line_repository(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List all orders."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        line_repo=order_line_repository(),
    )
    orders = handler.handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'User':<12} {'Status':<10} {'Lines':>5} {'Total':>12}")
    click.echo("-" * 49)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.user_id:<12} {dto.status:<10} {len(dto.lines):>5} {dto.total:>12}"
        )


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", type=_STATUS_CHOICES, default=None, help="New status.")
@click.option("--user", "user_id", default=None, help="New owning user ID.")
def order_update(order_id: int, status: str | None, user_id: str | None) -> None:
    """Update an order's status and/or user (moves stock on status flips)."""
    update = OrderUpdate(
        status=None if status is None else status.lower() == "confirmed",
        user_id=user_id,
    )

    try:
        dto = _update_handler().handle(order_id, update)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} updated (status={dto.status})")


@click.command("confirm")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to confirm.")
def order_confirm(order_id: int) -> None:
    """Confirm a cancelled order (consumes stock again)."""
    handler = ConfirmOrderHandler(_update_handler())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} confirmed.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (returns its stock)."""
    handler = CancelOrderHandler(_update_handler())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Delete an order header (lines and stock are left as they are)."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")
