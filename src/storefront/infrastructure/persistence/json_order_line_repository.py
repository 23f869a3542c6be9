"""JSON-file-backed implementation of OrderLineRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import OrderLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderLineRepository(OrderLineRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderLineRepository interface ----------------------------------------

    def add_many(self, lines: list[OrderLine]) -> list[OrderLine]:
        with self._file.transaction() as records:
            next_id = JsonFile.next_id(records)
            for offset, line in enumerate(lines):
                line.id = next_id + offset
                records.append(self._to_raw(line))
        return lines

    def get_by_id(self, line_id: int) -> OrderLine | None:
        for raw in self._file.read():
            if raw["id"] == line_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[OrderLine]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def list_by_order_id(self, order_id: int) -> list[OrderLine]:
        return [
            self._to_domain(raw)
            for raw in self._file.read()
            if raw["order_id"] == order_id
        ]

    def save(self, line: OrderLine) -> None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == line.id:
                    # unit_price is a purchase-time snapshot and is never rewritten
                    raw["amount"] = line.amount.value
                    raw["subtotal"] = str(line.subtotal.amount)
                    return

    def delete(self, line_id: int) -> bool:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == line_id:
                    del records[i]
                    return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: OrderLine) -> dict:
        return {
            "id": line.id,
            "order_id": line.order_id,
            "product_id": line.product_id,
            "amount": line.amount.value,
            "unit_price": str(line.unit_price.amount),
            "subtotal": str(line.subtotal.amount),
        }

    @staticmethod
    def _to_domain(raw: dict) -> OrderLine:
        return OrderLine(
            id=raw["id"],
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            amount=Quantity(raw["amount"]),
            unit_price=Money(Decimal(raw["unit_price"])),
        )
