"""Data Transfer Objects — plain containers that cross layer boundaries.

Request objects are parsed from untyped payloads (``from_payload``) at
the boundary, so malformed input is rejected before any stock is
touched. Output DTOs carry display-ready values without exposing
domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product


def _require_int(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"'{name}' must be an integer, got {value!r}")
    return value


def _require_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"'{name}' must be a boolean, got {value!r}")
    return value


def _require_str(value: Any, name: str) -> str:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"'{name}' is required")
    text = str(value).strip()
    if not text:
        raise ValidationError(f"'{name}' is required")
    return text


# --- Requests -----------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: one requested line (product + amount). Prices are never taken
    from the caller."""

    product_id: str
    amount: int

    @staticmethod
    def from_payload(raw: Any) -> OrderLineSpec:
        if not isinstance(raw, dict):
            raise ValidationError(f"Order line must be an object, got {raw!r}")
        amount = _require_int(raw.get("amount"), "amount")
        if amount <= 0:
            raise ValidationError("'amount' must be positive")
        return OrderLineSpec(
            product_id=_require_str(raw.get("productId"), "productId"),
            amount=amount,
        )


@dataclass(frozen=True)
class CreateOrderRequest:
    user_id: str
    status: bool
    lines: list[OrderLineSpec]

    @staticmethod
    def from_payload(raw: Any) -> CreateOrderRequest:
        """Parse ``{"userId", "status", "details": [{"productId", "amount"}]}``.

        ``lines`` is accepted as an alias of ``details``. Any client
        supplied ``total``, ``unitPrice`` or ``subtotal`` is ignored.
        """
        if not isinstance(raw, dict):
            raise ValidationError("Order payload must be an object")
        lines_raw = raw.get("details", raw.get("lines"))
        if not isinstance(lines_raw, list) or not lines_raw:
            raise ValidationError("Order must contain at least one line")
        return CreateOrderRequest(
            user_id=_require_str(raw.get("userId"), "userId"),
            status=_require_bool(raw.get("status"), "status"),
            lines=[OrderLineSpec.from_payload(item) for item in lines_raw],
        )


@dataclass(frozen=True)
class OrderUpdate:
    """Requested changes to an order header. ``None`` means unchanged."""

    status: bool | None = None
    user_id: str | None = None

    @staticmethod
    def from_payload(raw: Any) -> OrderUpdate:
        if not isinstance(raw, dict):
            raise ValidationError("Order update must be an object")
        if "total" in raw:
            raise ValidationError("Order total is computed and cannot be set")
        status = raw.get("status")
        user_id = raw.get("userId")
        return OrderUpdate(
            status=None if status is None else _require_bool(status, "status"),
            user_id=None if user_id is None else _require_str(user_id, "userId"),
        )


# --- Responses ----------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineDTO:
    id: int
    order_id: int
    product_id: str
    amount: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str

    @staticmethod
    def from_line(line: OrderLine) -> OrderLineDTO:
        return OrderLineDTO(
            id=line.id,  # type: ignore[arg-type]
            order_id=line.order_id,  # type: ignore[arg-type]
            product_id=line.product_id,
            amount=line.amount.value,
            unit_price=str(line.unit_price),
            subtotal=str(line.subtotal),
        )


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: str
    status: str
    total: str
    created_at: str
    lines: list[OrderLineDTO]

    @staticmethod
    def from_order(order: Order, lines: list[OrderLine]) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            lines=[OrderLineDTO.from_line(line) for line in lines],
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    price: str
    stock: int
    description: str | None

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            category=product.category,
            price=str(product.price),
            stock=product.stock,
            description=product.description,
        )
