"""Application service: Show / List Order Lines use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderLineDTO
from storefront.domain.exceptions import OrderLineNotFoundError
from storefront.domain.repository.order_line_repository import OrderLineRepository


class ShowOrderLineHandler:

    def __init__(self, line_repo: OrderLineRepository) -> None:
        self._line_repo = line_repo

    def handle(self, line_id: int) -> OrderLineDTO:
        line = self._line_repo.get_by_id(line_id)
        if line is None:
            raise OrderLineNotFoundError(line_id)
        return OrderLineDTO.from_line(line)


class ListOrderLinesHandler:

    def __init__(self, line_repo: OrderLineRepository) -> None:
        self._line_repo = line_repo

    def handle(self, order_id: int | None = None) -> list[OrderLineDTO]:
        """List every line, or only those of *order_id*."""
        if order_id is None:
            lines = self._line_repo.list_all()
        else:
            lines = self._line_repo.list_by_order_id(order_id)
        return [OrderLineDTO.from_line(line) for line in lines]
