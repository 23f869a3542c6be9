"""Order and OrderLine entities.

Orders and their lines are stored as separate documents, so the order
keeps a stored ``total`` that must always equal the sum of its lines'
subtotals. Every operation that changes a line's subtotal applies the
same delta to the order total.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

    @staticmethod
    def from_flag(confirmed: bool) -> OrderStatus:
        """Map the boolean status used at the boundary (true = confirmed)."""
        if not isinstance(confirmed, bool):
            raise ValidationError(f"Order status must be a boolean, got {confirmed!r}")
        return OrderStatus.CONFIRMED if confirmed else OrderStatus.CANCELLED

    @property
    def flag(self) -> bool:
        return self is OrderStatus.CONFIRMED


class StatusTransition(Enum):
    """What a status change means for stock."""

    CANCELLATION = "CANCELLATION"
    REACTIVATION = "REACTIVATION"
    UNCHANGED = "UNCHANGED"

    @staticmethod
    def classify(current: OrderStatus, requested: OrderStatus) -> StatusTransition:
        if current is OrderStatus.CONFIRMED and requested is OrderStatus.CANCELLED:
            return StatusTransition.CANCELLATION
        if current is OrderStatus.CANCELLED and requested is OrderStatus.CONFIRMED:
            return StatusTransition.REACTIVATION
        return StatusTransition.UNCHANGED

    @property
    def stock_sign(self) -> int:
        """+1 returns stock to the pool, -1 consumes it, 0 leaves it."""
        if self is StatusTransition.CANCELLATION:
            return 1
        if self is StatusTransition.REACTIVATION:
            return -1
        return 0


@dataclass(frozen=True)
class LineAdjustment:
    """Deltas produced by changing a line's amount."""

    quantity_delta: int
    subtotal_delta: Decimal

    @property
    def stock_delta(self) -> int:
        # ordering more consumes stock, ordering less returns it
        return -self.quantity_delta

    @property
    def is_noop(self) -> bool:
        return self.quantity_delta == 0


@dataclass
class OrderLine:
    """One product/quantity/price entry within an order.

    ``unit_price`` is the product price at purchase time and never
    changes afterwards, so ``subtotal`` is always ``amount * unit_price``.
    """

    id: int | None
    order_id: int | None
    product_id: str
    amount: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.amount.value

    def change_amount(self, new_amount: Quantity) -> LineAdjustment:
        """Set a new amount and report the stock and subtotal deltas."""
        old_subtotal = self.subtotal
        quantity_delta = new_amount.value - self.amount.value
        self.amount = new_amount
        return LineAdjustment(
            quantity_delta=quantity_delta,
            subtotal_delta=old_subtotal.delta_to(self.subtotal),
        )


@dataclass
class Order:
    """An order header: owner, status and the aggregate total."""

    id: int | None
    user_id: str
    total: Money
    status: OrderStatus = OrderStatus.CONFIRMED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(user_id: str, status: OrderStatus, lines: list[OrderLine]) -> Order:
        """Create a new order whose total is computed from *lines*."""
        if not user_id or not str(user_id).strip():
            raise ValidationError("User ID is required")
        if not lines:
            raise ValidationError("Order must contain at least one line")

        total = Money.zero()
        for line in lines:
            total = total + line.subtotal
        return Order(id=None, user_id=str(user_id).strip(), total=total, status=status)

    @property
    def is_confirmed(self) -> bool:
        return self.status is OrderStatus.CONFIRMED

    def change_status(self, requested: OrderStatus) -> StatusTransition:
        transition = StatusTransition.classify(self.status, requested)
        self.status = requested
        return transition

    def reassign(self, user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        self.user_id = user_id.strip()
