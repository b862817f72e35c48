"""Unit tests for OrderService against in-memory repositories.

Covers:
- Customer validation (missing customer short-circuits everything).
- Product validation (missing ids detected by absence).
- Stock enforcement, including repeated product ids in one request.
- Price snapshot and stock decrement.
- No writes on any rejection.
- Collaborator call sequence (one batched read, one create, one batch write).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.services import OrderService
from tests.fakes import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def customers():
    return InMemoryCustomerRepository()


@pytest.fixture()
def products():
    return InMemoryProductRepository()


@pytest.fixture()
def orders():
    return InMemoryOrderRepository()


@pytest.fixture()
def service(orders, customers, products):
    return OrderService(
        order_repository=orders,
        customer_repository=customers,
        product_repository=products,
    )


def _dto(customer_id, *items) -> PlaceOrderDTO:
    return PlaceOrderDTO(
        customer_id=customer_id,
        items=[PlaceOrderItemDTO(product_id=pid, quantity=qty) for pid, qty in items],
    )


# ===========================================================================
# Customer validation
# ===========================================================================


class TestMissingCustomer:
    def test_unknown_customer_is_rejected(self, service, products, orders):
        product = products.add(quantity=5)

        result = service.place_order(_dto(uuid4(), (product.id, 1)))

        assert not result.ok
        assert isinstance(result.error, CustomerNotFound)
        assert result.error.code == "customer_not_found"
        assert orders.created == []

    def test_unknown_customer_rejected_even_with_invalid_products(
        self, service, products
    ):
        customer_id = uuid4()

        result = service.place_order(_dto(customer_id, (uuid4(), 999)))

        assert isinstance(result.error, CustomerNotFound)
        assert result.error.customer_id == customer_id
        # Products are never read when the customer is missing.
        assert products.lookups == []

    def test_unwrap_raises_customer_not_found(self, service):
        result = service.place_order(_dto(uuid4(), (uuid4(), 1)))

        with pytest.raises(CustomerNotFound):
            result.unwrap()


# ===========================================================================
# Product validation
# ===========================================================================


class TestMissingProduct:
    def test_unknown_product_is_rejected(self, service, customers, orders):
        customer = customers.add()
        missing_id = uuid4()

        result = service.place_order(_dto(customer.id, (missing_id, 1)))

        assert isinstance(result.error, ProductNotFound)
        assert result.error.product_id == missing_id
        assert str(missing_id) in str(result.error)
        assert orders.created == []

    def test_missing_product_after_valid_item_writes_nothing(
        self, service, customers, products, orders
    ):
        customer = customers.add()
        product = products.add(quantity=10)

        result = service.place_order(
            _dto(customer.id, (product.id, 2), (uuid4(), 1))
        )

        assert isinstance(result.error, ProductNotFound)
        assert orders.created == []
        assert products.updates == []
        assert products.quantity_of(product.id) == 10


# ===========================================================================
# Stock enforcement
# ===========================================================================


class TestStockEnforcement:
    def test_requesting_more_than_stock_fails(self, service, customers, products):
        customer = customers.add()
        product = products.add(quantity=5)

        result = service.place_order(_dto(customer.id, (product.id, 6)))

        assert isinstance(result.error, InsufficientStock)
        assert result.error.product_id == product.id
        assert result.error.available == 5
        assert result.error.requested == 6
        assert products.quantity_of(product.id) == 5

    def test_requesting_exact_stock_succeeds(self, service, customers, products):
        customer = customers.add()
        product = products.add(quantity=5)

        result = service.place_order(_dto(customer.id, (product.id, 5)))

        assert result.ok
        assert products.quantity_of(product.id) == 0

    def test_later_failure_keeps_earlier_items_unwritten(
        self, service, customers, products, orders
    ):
        customer = customers.add()
        plenty = products.add(name="Plenty", quantity=100)
        scarce = products.add(name="Scarce", quantity=2)

        result = service.place_order(
            _dto(customer.id, (plenty.id, 5), (scarce.id, 10))
        )

        assert isinstance(result.error, InsufficientStock)
        assert result.error.product_id == scarce.id
        assert orders.created == []
        assert products.updates == []
        assert products.quantity_of(plenty.id) == 100
        assert products.quantity_of(scarce.id) == 2


class TestRepeatedProductIds:
    def test_quantities_are_checked_cumulatively(self, service, customers, products):
        customer = customers.add()
        product = products.add(quantity=5)

        result = service.place_order(
            _dto(customer.id, (product.id, 3), (product.id, 3))
        )

        assert isinstance(result.error, InsufficientStock)
        assert result.error.available == 2
        assert result.error.requested == 3
        assert products.quantity_of(product.id) == 5

    def test_each_entry_becomes_its_own_line(
        self, service, customers, products, orders
    ):
        customer = customers.add()
        product = products.add(price=Decimal("4.50"), quantity=5)

        result = service.place_order(
            _dto(customer.id, (product.id, 2), (product.id, 3))
        )

        assert result.ok
        assert [item.quantity for item in result.order.items] == [2, 3]
        assert [line.quantity_left for line in orders.created[0].items] == [3, 0]
        assert products.quantity_of(product.id) == 0
        # A single write per product, carrying the final remaining stock.
        assert len(products.updates[0]) == 1
        assert products.updates[0][0].quantity == 0


# ===========================================================================
# Successful placement
# ===========================================================================


class TestPlaceOrderSuccess:
    def test_end_to_end(self, service, customers, products):
        customer = customers.add()
        product = products.add(price=Decimal("10.00"), quantity=20)

        order = service.place_order(_dto(customer.id, (product.id, 4))).unwrap()

        assert order.customer_id == customer.id
        assert len(order.items) == 1
        item = order.items[0]
        assert item.product_id == product.id
        assert item.price == Decimal("10.00")
        assert item.quantity == 4
        assert products.quantity_of(product.id) == 16

    def test_decrements_stock(self, service, customers, products):
        customer = customers.add()
        product = products.add(quantity=10)

        service.place_order(_dto(customer.id, (product.id, 3)))

        assert products.quantity_of(product.id) == 7

    def test_line_items_follow_request_order(self, service, customers, products):
        customer = customers.add()
        a = products.add(name="A", price=Decimal("1.00"))
        b = products.add(name="B", price=Decimal("2.00"))
        c = products.add(name="C", price=Decimal("3.00"))

        order = service.place_order(
            _dto(customer.id, (c.id, 1), (a.id, 1), (b.id, 1))
        ).unwrap()

        assert [item.product_id for item in order.items] == [c.id, a.id, b.id]
        assert order.total == Decimal("6.00")

    def test_price_is_snapshotted(self, service, customers, products, orders):
        customer = customers.add()
        product = products.add(price=Decimal("10.00"), quantity=10)

        order = service.place_order(_dto(customer.id, (product.id, 1))).unwrap()
        products.set_price(product.id, Decimal("99.99"))

        stored = service.get_order(order.id)
        assert stored.items[0].price == Decimal("10.00")

    def test_collaborator_sequence(self, service, customers, products, orders):
        customer = customers.add()
        a = products.add(name="A", quantity=3)
        b = products.add(name="B", quantity=3)

        service.place_order(_dto(customer.id, (a.id, 1), (b.id, 2)))

        assert customers.lookups == [customer.id]
        assert products.lookups == [{a.id, b.id}]
        assert products.lock_requests == [True]
        assert len(orders.created) == 1
        assert len(products.updates) == 1
        assert {u.product_id: u.quantity for u in products.updates[0]} == {
            a.id: 2,
            b.id: 1,
        }


# ===========================================================================
# Storage failures
# ===========================================================================


class TestStorageFailures:
    def test_stock_write_error_propagates(self, customers, products, orders):
        class BrokenProducts(InMemoryProductRepository):
            def update_quantities(self, updates):
                raise RuntimeError("connection lost")

        broken = BrokenProducts()
        product = broken.add(quantity=5)
        customer = customers.add()
        service = OrderService(orders, customers, broken)

        with pytest.raises(RuntimeError, match="connection lost"):
            service.place_order(_dto(customer.id, (product.id, 1)))


# ===========================================================================
# Queries
# ===========================================================================


class TestGetOrder:
    def test_returns_order(self, service, customers, products):
        customer = customers.add()
        product = products.add()
        created = service.place_order(_dto(customer.id, (product.id, 1))).unwrap()

        assert service.get_order(str(created.id)).id == created.id

    def test_not_found_raises(self, service):
        with pytest.raises(OrderNotFound):
            service.get_order(uuid4())
