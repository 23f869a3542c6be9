"""Application service: Adjust Order Line use case.

Changes the amount of a single line. Stock moves by the opposite of the
quantity change, the line keeps its original unit price, and the
subtotal delta is applied to the parent order total as a relative
increment so concurrent adjustments of sibling lines compose. A failed
write after the stock moved hands the stock back.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderLineDTO
from storefront.domain.exceptions import (
    OrderLineNotFoundError,
    OrderNotFoundError,
)
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockAdjustment,
    StockReservationService,
)

logger = logging.getLogger(__name__)


class AdjustOrderLineHandler:

    def __init__(
        self,
        line_repo: OrderLineRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._line_repo = line_repo
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, line_id: int, new_amount: int) -> OrderLineDTO:
        """Set a line's amount to *new_amount*.

        Only increases are checked against available stock; decreases
        always succeed and hand the difference back to stock. If the line
        or the order total cannot be written, the stock change and the
        line amount are rolled back before the error propagates.
        """
        quantity = Quantity(new_amount)

        line = self._line_repo.get_by_id(line_id)
        if line is None:
            raise OrderLineNotFoundError(line_id)
        order = self._order_repo.get_by_id(line.order_id)  # type: ignore[arg-type]
        if order is None:
            raise OrderNotFoundError(line.order_id)  # type: ignore[arg-type]

        previous_amount = line.amount
        adjustment = line.change_amount(quantity)
        if adjustment.is_noop:
            return OrderLineDTO.from_line(line)

        svc = StockReservationService(self._product_repo)
        moved: list[StockAdjustment] = []
        # a cancelled order holds no stock, so only its figures change
        if order.is_confirmed:
            if adjustment.quantity_delta > 0:
                svc.check_availability([(line.product_id, adjustment.quantity_delta)])
            moved = svc.apply([StockAdjustment(line.product_id, adjustment.stock_delta)])

        line_saved = False
        try:
            self._line_repo.save(line)
            line_saved = True
            if self._order_repo.increment_total(line.order_id, adjustment.subtotal_delta) is None:  # type: ignore[arg-type]
                raise OrderNotFoundError(line.order_id)  # type: ignore[arg-type]
        except Exception:
            logger.warning("Updating line #%s failed; reverting its stock change", line_id)
            svc.revert(moved)
            if line_saved:
                line.amount = previous_amount
                self._line_repo.save(line)
            raise

        logger.info(
            "Order line #%s amount changed by %+d (stock %+d, order #%s total %+.2f)",
            line_id, adjustment.quantity_delta, adjustment.stock_delta,
            line.order_id, adjustment.subtotal_delta,
        )
        return OrderLineDTO.from_line(line)
