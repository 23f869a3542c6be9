"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int,
        category: str,
        description: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog with its initial stock."""
        product = Product.create(
            name=name,
            price=Money.of(price),
            stock=stock,
            category=category,
            description=description,
        )
        product = self._product_repo.add(product)
        logger.info("Added product %s '%s' with stock %d", product.id, product.name, product.stock)
        return ProductDTO.from_product(product)
