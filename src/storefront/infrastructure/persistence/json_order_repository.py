"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        with self._file.transaction() as records:
            order.id = JsonFile.next_id(records)
            records.append(self._to_raw(order))
        return order

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, order: Order) -> None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == order.id:
                    raw["user_id"] = order.user_id
                    raw["status"] = order.status.flag
                    return

    def delete(self, order_id: int) -> bool:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == order_id:
                    del records[i]
                    return True
        return False

    def increment_total(self, order_id: int, delta: Decimal) -> Order | None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == order_id:
                    total = Money(Decimal(raw["total"])).shifted(delta)
                    raw["total"] = str(total.amount)
                    return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "total": str(order.total.amount),
            "status": order.status.flag,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            total=Money(Decimal(raw["total"])),
            status=OrderStatus.from_flag(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
