"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.repository.order_line_repository import OrderLineRepository
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_repo: OrderLineRepository,
    ) -> None:
        self._order_repo = order_repo
        self._line_repo = line_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderDTO.from_order(order, self._line_repo.list_by_order_id(order_id))


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_repo: OrderLineRepository,
    ) -> None:
        self._order_repo = order_repo
        self._line_repo = line_repo

    def handle(self) -> list[OrderDTO]:
        return [
            OrderDTO.from_order(order, self._line_repo.list_by_order_id(order.id))  # type: ignore[arg-type]
            for order in self._order_repo.list_all()
        ]
