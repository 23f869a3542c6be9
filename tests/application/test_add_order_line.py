"""Integration tests for the AddOrderLine use case."""

import pytest

from storefront.application.add_order_line import AddOrderLineHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import CreateOrderRequest, OrderLineSpec
from storefront.domain.exceptions import (
    InsufficientStockError,
    OrderNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeOrderLineRepository, FakeOrderRepository, FakeProductRepository


def _setup():
    products = [
        Product(id="A", name="Widget", price=Money.of("10"), stock=10, category="tools"),
        Product(id="B", name="Gadget", price=Money.of("25"), stock=4, category="tools"),
    ]
    order_repo = FakeOrderRepository()
    line_repo = FakeOrderLineRepository()
    product_repo = FakeProductRepository(products)
    create = CreateOrderHandler(order_repo, line_repo, product_repo)
    add = AddOrderLineHandler(line_repo, order_repo, product_repo)
    return create, add, order_repo, line_repo, product_repo


def _order(create, status: bool = True) -> int:
    return create.handle(CreateOrderRequest(
        user_id="u1",
        status=status,
        lines=[OrderLineSpec("A", 2)],
    )).id


class TestConfirmedOrder:

    def test_add_reserves_stock_and_raises_total(self):
        create, add, order_repo, line_repo, product_repo = _setup()
        order_id = _order(create)

        dto = add.handle(order_id, "B", 3)

        assert dto.order_id == order_id
        assert dto.unit_price == "$25.00"
        assert dto.subtotal == "$75.00"
        assert product_repo.stock_of("B") == 1
        assert order_repo.get_by_id(order_id).total == Money.of("95")
        assert len(line_repo.list_by_order_id(order_id)) == 2

    def test_price_is_taken_from_catalog_now(self):
        create, add, order_repo, _, product_repo = _setup()
        order_id = _order(create)

        widget = product_repo.get_by_id("A")
        widget.update_price(Money.of("12"))
        product_repo.save(widget)

        dto = add.handle(order_id, "A", 1)

        assert dto.unit_price == "$12.00"
        assert order_repo.get_by_id(order_id).total == Money.of("32")

    def test_insufficient_stock_changes_nothing(self):
        create, add, order_repo, line_repo, product_repo = _setup()
        order_id = _order(create)

        with pytest.raises(InsufficientStockError, match="4 available, 5 requested"):
            add.handle(order_id, "B", 5)

        assert product_repo.stock_of("B") == 4
        assert order_repo.get_by_id(order_id).total == Money.of("20")
        assert len(line_repo.list_by_order_id(order_id)) == 1


class TestCancelledOrder:

    def test_add_skips_stock(self):
        create, add, order_repo, _, product_repo = _setup()
        order_id = _order(create, status=False)

        add.handle(order_id, "B", 6)

        assert product_repo.stock_of("B") == 4
        assert order_repo.get_by_id(order_id).total == Money.of("170")

    def test_unknown_product_still_rejected(self):
        create, add, _, _, _ = _setup()
        order_id = _order(create, status=False)

        with pytest.raises(ProductNotFoundError):
            add.handle(order_id, "Z", 1)


class TestFailuresAndErrors:

    def test_failed_line_insert_releases_stock(self):
        create, add, order_repo, line_repo, product_repo = _setup()
        order_id = _order(create)
        line_repo.fail_on_add = True

        with pytest.raises(RuntimeError):
            add.handle(order_id, "B", 2)

        assert product_repo.stock_of("B") == 4
        assert order_repo.get_by_id(order_id).total == Money.of("20")

    def test_failed_total_update_drops_line(self):
        create, add, order_repo, line_repo, product_repo = _setup()
        order_id = _order(create)
        order_repo.fail_on_increment = True

        with pytest.raises(RuntimeError):
            add.handle(order_id, "B", 2)

        assert product_repo.stock_of("B") == 4
        assert [line.product_id for line in line_repo.list_by_order_id(order_id)] == ["A"]

    def test_unknown_order(self):
        _, add, _, _, product_repo = _setup()
        with pytest.raises(OrderNotFoundError, match="#5 not found"):
            add.handle(5, "A", 1)
        assert product_repo.stock_of("A") == 10

    def test_zero_amount_rejected(self):
        create, add, _, _, _ = _setup()
        order_id = _order(create)
        with pytest.raises(ValidationError, match="must be positive"):
            add.handle(order_id, "A", 0)
