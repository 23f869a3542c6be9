"""Application service: Restock Product use case.

Receives or writes off stock with a relative adjustment. There is no
absolute "set stock" operation, so concurrent order activity on the
same product is never overwritten.
"""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import StockReservationService

logger = logging.getLogger(__name__)


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, delta: int) -> ProductDTO:
        """Add *delta* units to stock (negative to write units off)."""
        if delta == 0:
            raise ValidationError("Restock quantity must not be zero")
        if delta < 0:
            StockReservationService(self._product_repo).check_availability(
                [(product_id, -delta)]
            )

        product = self._product_repo.adjust_stock(product_id, delta)
        if product is None:
            raise ProductNotFoundError(product_id)

        logger.info("Stock of product %s adjusted by %+d to %d", product_id, delta, product.stock)
        return ProductDTO.from_product(product)
