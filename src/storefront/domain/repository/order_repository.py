"""Abstract repository for Order documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Persist a new order, assigning its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist the user and status of an existing order.

        The stored total is left as is; it only moves through
        ``increment_total``.
        """

    @abstractmethod
    def delete(self, order_id: int) -> bool:
        """Remove an order. Returns False if it did not exist."""

    @abstractmethod
    def increment_total(self, order_id: int, delta: Decimal) -> Order | None:
        """Atomically apply ``total += delta`` and return the new state.

        Returns None if the order does not exist.
        """
