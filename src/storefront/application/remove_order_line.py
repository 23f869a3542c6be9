"""Application service: Remove Order Line use case.

Deleting a line takes its subtotal off the parent order total. If the
order is confirmed, the line's amount goes back to stock as well.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import OrderLineNotFoundError
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class RemoveOrderLineHandler:

    def __init__(
        self,
        line_repo: OrderLineRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._line_repo = line_repo
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, line_id: int) -> None:
        line = self._line_repo.get_by_id(line_id)
        if line is None:
            raise OrderLineNotFoundError(line_id)

        order = self._order_repo.get_by_id(line.order_id)  # type: ignore[arg-type]
        if order is not None and order.is_confirmed:
            if self._product_repo.adjust_stock(line.product_id, line.amount.value) is None:
                logger.warning(
                    "Product %s no longer exists; %d unit(s) from line #%s not restocked",
                    line.product_id, line.amount.value, line_id,
                )

        if not self._line_repo.delete(line_id):
            raise OrderLineNotFoundError(line_id)
        if order is not None:
            self._order_repo.increment_total(order.id, -line.subtotal.amount)  # type: ignore[arg-type]

        logger.info("Removed line #%s from order #%s", line_id, line.order_id)
