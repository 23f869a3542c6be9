"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def add(self, product: Product) -> Product:
        with self._file.transaction() as records:
            product.id = str(JsonFile.next_id(records))
            records.append(self._to_raw(product))
        return product

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, product: Product) -> None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product.id:
                    stock = raw["stock"]
                    raw.update(self._to_raw(product))
                    raw["stock"] = stock
                    return

    def delete(self, product_id: str) -> bool:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    del records[i]
                    return True
        return False

    def adjust_stock(self, product_id: str, delta: int) -> Product | None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    if raw["stock"] + delta < 0:
                        raise InsufficientStockError(product_id, raw["stock"], -delta)
                    raw["stock"] += delta
                    return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "stock": product.stock,
            "category": product.category,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description"),
            price=Money(Decimal(raw["price"])),
            stock=raw["stock"],
            category=raw["category"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
