"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        category: str | None = None,
        description: str | None = None,
    ) -> ProductDTO:
        """Update a product's descriptive fields and price.

        Stock is deliberately not settable here; use the restock use case.
        A new price does NOT affect existing order lines, which keep the
        price they were bought at.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if name is not None:
            product.rename(name)
        if price is not None:
            product.update_price(Money.of(price))
        if category is not None:
            product.recategorize(category)
        if description is not None:
            product.description = description.strip() or None

        self._product_repo.save(product)
        return ProductDTO.from_product(product)
