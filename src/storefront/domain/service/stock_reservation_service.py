"""Domain service: Stock Reservation.

Coordinates stock changes that span several products (order creation,
order cancellation/reactivation). It lives in the domain layer because
the rules are core business rules, not just orchestration.

The two-phase approach (validate-then-mutate) ensures a rejected
request never leaves stock partially reserved:

  Phase 1 — ``check_availability``: load every product and validate the
            requested quantities, counting earlier demands on the same
            product within the request. No stock is touched.
  Phase 2 — ``apply``: issue one relative adjustment per entry. If one
            fails, the adjustments already applied are reversed before
            the error is re-raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ProductNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockAdjustment:
    """A relative stock change for one product (negative consumes stock)."""

    product_id: str
    delta: int

    def reversed(self) -> StockAdjustment:
        return StockAdjustment(self.product_id, -self.delta)


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_availability(
        self, demands: Iterable[tuple[str, int]]
    ) -> dict[str, Product]:
        """Validate that every ``(product_id, quantity)`` demand can be met.

        Demands are checked in order. A product requested twice must have
        enough stock for both, so over-subscription fails on the demand
        that crosses the limit. Returns the loaded products by ID.
        """
        products: dict[str, Product] = {}
        pending: dict[str, int] = {}

        for product_id, quantity in demands:
            product = products.get(product_id)
            if product is None:
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)
                products[product_id] = product

            available = product.stock - pending.get(product_id, 0)
            if available < quantity:
                raise InsufficientStockError(product_id, available, quantity)
            pending[product_id] = pending.get(product_id, 0) + quantity

        return products

    def load_products(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Load products by ID without any stock check."""
        products: dict[str, Product] = {}
        for product_id in product_ids:
            if product_id in products:
                continue
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            products[product_id] = product
        return products

    def apply(
        self,
        adjustments: Iterable[StockAdjustment],
        skip_missing: bool = False,
    ) -> list[StockAdjustment]:
        """Apply every adjustment, compensating on the first failure.

        With ``skip_missing`` a product that no longer exists is logged
        and passed over instead of failing the walk. Returns the
        adjustments that were actually applied.
        """
        applied: list[StockAdjustment] = []
        try:
            for adj in adjustments:
                if adj.delta == 0:
                    continue
                if self._product_repo.adjust_stock(adj.product_id, adj.delta) is None:
                    if not skip_missing:
                        raise ProductNotFoundError(adj.product_id)
                    logger.warning(
                        "Product %s no longer exists; stock adjustment of %+d skipped",
                        adj.product_id, adj.delta,
                    )
                    continue
                applied.append(adj)
        except Exception:
            self.revert(applied)
            raise
        return applied

    def revert(self, applied: list[StockAdjustment]) -> None:
        """Reverse adjustments that were already applied, newest first."""
        for adj in reversed(applied):
            undo = adj.reversed()
            logger.warning(
                "Reverting stock adjustment of %+d for product %s",
                adj.delta, adj.product_id,
            )
            try:
                self._product_repo.adjust_stock(undo.product_id, undo.delta)
            except Exception:
                # keep undoing the rest; the caller re-raises the original error
                logger.exception(
                    "Could not revert stock adjustment for product %s",
                    adj.product_id,
                )
