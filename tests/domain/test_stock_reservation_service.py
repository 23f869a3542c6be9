"""Unit tests for the StockReservationService domain service."""

import pytest

from storefront.domain.exceptions import InsufficientStockError, ProductNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_reservation_service import (
    StockAdjustment,
    StockReservationService,
)
from tests.fakes import FakeProductRepository


def _setup() -> tuple[StockReservationService, FakeProductRepository]:
    repo = FakeProductRepository([
        Product(id="A", name="Widget", price=Money.of("10"), stock=5, category="tools"),
        Product(id="B", name="Gadget", price=Money.of("25"), stock=2, category="tools"),
    ])
    return StockReservationService(repo), repo


class TestCheckAvailability:

    def test_returns_loaded_products(self):
        svc, _ = _setup()
        products = svc.check_availability([("A", 3), ("B", 2)])
        assert set(products) == {"A", "B"}

    def test_unknown_product(self):
        svc, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="'Z' not found"):
            svc.check_availability([("Z", 1)])

    def test_insufficient_stock_reports_numbers(self):
        svc, _ = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            svc.check_availability([("B", 3)])
        assert exc_info.value.available == 2
        assert exc_info.value.requested == 3
        assert "2 available, 3 requested" in str(exc_info.value)

    def test_repeated_product_counts_earlier_demands(self):
        svc, _ = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            svc.check_availability([("A", 3), ("A", 3)])
        assert exc_info.value.available == 2

    def test_does_not_touch_stock(self):
        svc, repo = _setup()
        svc.check_availability([("A", 5)])
        assert repo.stock_of("A") == 5
        assert repo.adjustments == []


class TestApply:

    def test_applies_relative_adjustments(self):
        svc, repo = _setup()
        svc.apply([StockAdjustment("A", -3), StockAdjustment("B", 4)])
        assert repo.stock_of("A") == 2
        assert repo.stock_of("B") == 6

    def test_zero_delta_skipped(self):
        svc, repo = _setup()
        svc.apply([StockAdjustment("A", 0)])
        assert repo.adjustments == []

    def test_failure_reverts_applied_adjustments(self):
        svc, repo = _setup()
        repo.fail_adjust_for.add("B")
        with pytest.raises(RuntimeError):
            svc.apply([StockAdjustment("A", -3), StockAdjustment("B", -1)])
        assert repo.stock_of("A") == 5
        assert repo.stock_of("B") == 2

    def test_missing_product_reverts_and_raises(self):
        svc, repo = _setup()
        with pytest.raises(ProductNotFoundError):
            svc.apply([StockAdjustment("A", -1), StockAdjustment("Z", -1)])
        assert repo.stock_of("A") == 5

    def test_skip_missing_passes_over_deleted_products(self):
        svc, repo = _setup()
        applied = svc.apply(
            [StockAdjustment("Z", 1), StockAdjustment("A", 2)], skip_missing=True
        )
        assert applied == [StockAdjustment("A", 2)]
        assert repo.stock_of("A") == 7
