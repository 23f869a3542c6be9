"""Application service: Update Order use case.

Applies header changes to an order. Flipping the status moves stock:

- confirmed -> cancelled returns every line's amount to stock;
- cancelled -> confirmed consumes it again, after checking that every
  line can still be served (the same pre-validation order creation
  does, so a reactivation never drives stock negative);
- any other combination leaves stock untouched.

The per-line stock walk compensates already-applied adjustments if a
later one fails, and again if the order itself cannot be saved. A
cancellation skips lines whose product has been deleted since.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, OrderUpdate
from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.model.order import OrderStatus, StatusTransition
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockAdjustment,
    StockReservationService,
)

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_repo: OrderLineRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._line_repo = line_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, update: OrderUpdate) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if update.user_id is not None:
            order.reassign(update.user_id)

        lines = self._line_repo.list_by_order_id(order_id)
        transition = StatusTransition.UNCHANGED
        if update.status is not None:
            transition = order.change_status(OrderStatus.from_flag(update.status))

        svc = StockReservationService(self._product_repo)
        applied: list[StockAdjustment] = []
        if transition is not StatusTransition.UNCHANGED and lines:
            if transition is StatusTransition.REACTIVATION:
                svc.check_availability(
                    (line.product_id, line.amount.value) for line in lines
                )
            # returning stock must not be blocked by a product deleted meanwhile
            applied = svc.apply(
                (
                    StockAdjustment(line.product_id, transition.stock_sign * line.amount.value)
                    for line in lines
                ),
                skip_missing=transition is StatusTransition.CANCELLATION,
            )
            logger.info(
                "Order #%s %s: adjusted stock for %d line(s)",
                order_id, transition.value.lower(), len(applied),
            )

        try:
            self._order_repo.save(order)
        except Exception:
            logger.warning("Saving order #%s failed; reverting stock adjustments", order_id)
            svc.revert(applied)
            raise
        return OrderDTO.from_order(order, lines)


class ConfirmOrderHandler:
    """Shortcut: set an order's status to confirmed."""

    def __init__(self, update_handler: UpdateOrderHandler) -> None:
        self._update_handler = update_handler

    def handle(self, order_id: int) -> OrderDTO:
        return self._update_handler.handle(order_id, OrderUpdate(status=True))


class CancelOrderHandler:
    """Shortcut: set an order's status to cancelled."""

    def __init__(self, update_handler: UpdateOrderHandler) -> None:
        self._update_handler = update_handler

    def handle(self, order_id: int) -> OrderDTO:
        return self._update_handler.handle(order_id, OrderUpdate(status=False))
