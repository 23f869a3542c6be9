"""Application service: Create Order use case.

Coordinates Product lookup, stock reservation and the persistence of
the order header and its lines. Prices always come from the catalog,
never from the request.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CreateOrderRequest, OrderDTO
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockAdjustment,
    StockReservationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_repo: OrderLineRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._line_repo = line_repo
        self._product_repo = product_repo

    def handle(self, request: CreateOrderRequest) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Validate every line against current stock (nothing mutated).
           Orders created as cancelled skip the check and the reservation.
        2. Build OrderLines with the *current* catalog prices (snapshot).
        3. Reserve stock for all lines.
        4. Persist the order, then its lines with the new order ID.

        If step 4 fails the reservation is released again.
        """
        status = OrderStatus.from_flag(request.status)
        quantities = [Quantity(spec.amount) for spec in request.lines]

        svc = StockReservationService(self._product_repo)
        if status is OrderStatus.CONFIRMED:
            products = svc.check_availability(
                (spec.product_id, qty.value)
                for spec, qty in zip(request.lines, quantities)
            )
        else:
            # a cancelled order holds no stock until it is reactivated
            products = svc.load_products(spec.product_id for spec in request.lines)

        lines = [
            OrderLine(
                id=None,
                order_id=None,
                product_id=spec.product_id,
                amount=qty,
                unit_price=products[spec.product_id].price,  # <-- price snapshot
            )
            for spec, qty in zip(request.lines, quantities)
        ]
        order = Order.create(user_id=request.user_id, status=status, lines=lines)

        reservation: list[StockAdjustment] = []
        if order.is_confirmed:
            reservation = [
                StockAdjustment(line.product_id, -line.amount.value) for line in lines
            ]
        svc.apply(reservation)
        try:
            order = self._order_repo.add(order)
            for line in lines:
                line.order_id = order.id
            lines = self._line_repo.add_many(lines)
        except Exception:
            logger.warning("Persisting new order failed; releasing reserved stock")
            svc.revert(reservation)
            if order.id is not None:
                self._order_repo.delete(order.id)
            raise

        logger.info(
            "Created order #%s for user %s with %d line(s), total %s",
            order.id, order.user_id, len(lines), order.total,
        )
        return OrderDTO.from_order(order, lines)
