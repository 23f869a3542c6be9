"""Abstract repository for OrderLine documents."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import OrderLine


class OrderLineRepository(ABC):

    @abstractmethod
    def add_many(self, lines: list[OrderLine]) -> list[OrderLine]:
        """Persist a batch of new lines, assigning their IDs."""

    @abstractmethod
    def get_by_id(self, line_id: int) -> OrderLine | None:
        """Return a line by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[OrderLine]:
        """Return every line of every order."""

    @abstractmethod
    def list_by_order_id(self, order_id: int) -> list[OrderLine]:
        """Return the lines belonging to one order."""

    @abstractmethod
    def save(self, line: OrderLine) -> None:
        """Persist an existing line (amount and subtotal)."""

    @abstractmethod
    def delete(self, line_id: int) -> bool:
        """Remove a line. Returns False if it did not exist."""
