"""Application service: Add Order Line use case.

Appends a product to an existing order. The unit price is taken from
the catalog at this moment, the subtotal is added to the order total as
a relative increment, and a confirmed order reserves the stock.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderLineDTO
from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.model.order import OrderLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockAdjustment,
    StockReservationService,
)

logger = logging.getLogger(__name__)


class AddOrderLineHandler:

    def __init__(
        self,
        line_repo: OrderLineRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._line_repo = line_repo
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, product_id: str, amount: int) -> OrderLineDTO:
        quantity = Quantity(amount)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        svc = StockReservationService(self._product_repo)
        if order.is_confirmed:
            products = svc.check_availability([(product_id, quantity.value)])
        else:
            products = svc.load_products([product_id])

        line = OrderLine(
            id=None,
            order_id=order_id,
            product_id=product_id,
            amount=quantity,
            unit_price=products[product_id].price,
        )

        reservation: list[StockAdjustment] = []
        if order.is_confirmed:
            reservation = svc.apply([StockAdjustment(product_id, -quantity.value)])
        try:
            [line] = self._line_repo.add_many([line])
            if self._order_repo.increment_total(order_id, line.subtotal.amount) is None:
                raise OrderNotFoundError(order_id)
        except Exception:
            logger.warning("Adding a line to order #%s failed; releasing reserved stock", order_id)
            svc.revert(reservation)
            if line.id is not None:
                self._line_repo.delete(line.id)
            raise

        logger.info(
            "Added line #%s to order #%s: product %s x%d, subtotal %s",
            line.id, order_id, product_id, quantity.value, line.subtotal,
        )
        return OrderLineDTO.from_line(line)
