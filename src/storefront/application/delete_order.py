"""Application service: Delete Order use case.

Removes the order header only. Lines are not cascaded and stock is not
touched.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        if not self._order_repo.delete(order_id):
            raise OrderNotFoundError(order_id)
        logger.info("Deleted order #%s", order_id)
