"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import CreateOrderRequest, OrderLineSpec
from storefront.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeOrderLineRepository, FakeOrderRepository, FakeProductRepository


def _setup(products: list[Product] | None = None):
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [
            Product(id="A", name="Widget", price=Money.of("10"), stock=5, category="tools"),
            Product(id="B", name="Gadget", price=Money.of("25"), stock=10, category="tools"),
        ]
    order_repo = FakeOrderRepository()
    line_repo = FakeOrderLineRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, line_repo, product_repo)
    return handler, order_repo, line_repo, product_repo


def _request(*lines: tuple[str, int], status: bool = True) -> CreateOrderRequest:
    return CreateOrderRequest(
        user_id="u1",
        status=status,
        lines=[OrderLineSpec(product_id, amount) for product_id, amount in lines],
    )


class TestCreateOrderHappyPath:

    def test_reserves_stock_and_computes_totals(self):
        handler, order_repo, line_repo, product_repo = _setup()
        dto = handler.handle(_request(("A", 3)))

        assert product_repo.stock_of("A") == 2
        assert dto.total == "$30.00"
        assert dto.status == "CONFIRMED"
        assert len(dto.lines) == 1
        assert dto.lines[0].subtotal == "$30.00"

        saved = order_repo.get_by_id(dto.id)
        assert saved.total == Money.of("30")
        lines = line_repo.list_by_order_id(dto.id)
        assert [line.amount.value for line in lines] == [3]

    def test_total_equals_sum_of_line_subtotals(self):
        handler, order_repo, line_repo, _ = _setup()
        dto = handler.handle(_request(("A", 2), ("B", 3)))

        order = order_repo.get_by_id(dto.id)
        lines = line_repo.list_by_order_id(dto.id)
        total = Money.zero()
        for line in lines:
            total = total + line.subtotal
        assert order.total == total == Money.of("95")

    def test_lines_carry_new_order_id(self):
        handler, _, line_repo, _ = _setup()
        dto = handler.handle(_request(("A", 1), ("B", 1)))
        assert {line.order_id for line in line_repo.list_all()} == {dto.id}

    def test_same_product_on_two_lines_within_stock(self):
        handler, _, _, product_repo = _setup()
        handler.handle(_request(("A", 2), ("A", 3)))
        assert product_repo.stock_of("A") == 0

    def test_cancelled_order_does_not_reserve_stock(self):
        handler, order_repo, _, product_repo = _setup()
        dto = handler.handle(_request(("A", 3), status=False))
        assert product_repo.stock_of("A") == 5
        assert order_repo.get_by_id(dto.id).status is OrderStatus.CANCELLED
        assert dto.total == "$30.00"


class TestCreateOrderPriceLock:

    def test_price_comes_from_catalog_snapshot(self):
        handler, _, line_repo, product_repo = _setup()
        dto = handler.handle(_request(("A", 1)))

        widget = product_repo.get_by_id("A")
        widget.update_price(Money.of("99.99"))
        product_repo.save(widget)

        line = line_repo.get_by_id(dto.lines[0].id)
        assert line.unit_price == Money.of("10")

    def test_client_supplied_prices_are_ignored(self):
        handler, _, _, _ = _setup()
        request = CreateOrderRequest.from_payload({
            "userId": "u1",
            "status": True,
            "total": 1,
            "details": [{"productId": "B", "amount": 2, "unitPrice": 0.01, "subtotal": 0.02}],
        })
        dto = handler.handle(request)
        assert dto.total == "$50.00"
        assert dto.lines[0].unit_price == "$25.00"


class TestCreateOrderValidation:

    def test_unknown_product_rejected(self):
        handler, order_repo, _, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="'Z' not found"):
            handler.handle(_request(("Z", 1)))
        assert order_repo.list_all() == []

    def test_insufficient_stock_leaves_everything_untouched(self):
        handler, order_repo, line_repo, product_repo = _setup()
        with pytest.raises(InsufficientStockError, match="5 available, 6 requested"):
            handler.handle(_request(("B", 1), ("A", 6)))

        assert product_repo.stock_of("A") == 5
        assert product_repo.stock_of("B") == 10
        assert order_repo.list_all() == []
        assert line_repo.list_all() == []

    def test_over_subscription_across_lines_fails_on_second_line(self):
        handler, order_repo, _, product_repo = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle(_request(("A", 3), ("A", 3)))
        assert exc_info.value.available == 2
        assert exc_info.value.requested == 3
        assert product_repo.stock_of("A") == 5
        assert order_repo.list_all() == []

    def test_non_positive_amount_rejected(self):
        handler, _, _, product_repo = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle(_request(("A", 0)))
        assert product_repo.stock_of("A") == 5


class TestCreateOrderPersistenceFailure:

    def test_stock_released_when_lines_cannot_be_saved(self):
        handler, order_repo, line_repo, product_repo = _setup()
        line_repo.fail_on_add = True

        with pytest.raises(RuntimeError):
            handler.handle(_request(("A", 3), ("B", 1)))

        assert product_repo.stock_of("A") == 5
        assert product_repo.stock_of("B") == 10
        assert order_repo.list_all() == []

    def test_stock_released_when_order_cannot_be_saved(self):
        handler, order_repo, _, product_repo = _setup()
        order_repo.fail_on_add = True

        with pytest.raises(RuntimeError):
            handler.handle(_request(("A", 3)))

        assert product_repo.stock_of("A") == 5
