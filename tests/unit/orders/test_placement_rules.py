"""Unit tests for the pure placement helpers and the result type."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from django.utils import timezone

from modules.orders.dtos import OrderLineDTO, OrderOutputDTO, PlaceOrderItemDTO
from modules.orders.exceptions import InsufficientStock, ProductNotFound
from modules.orders.results import PlaceOrderResult
from modules.orders.services import build_order_lines, stock_updates
from modules.products.dtos import ProductOutputDTO

pytestmark = pytest.mark.unit


def _product(quantity: int, price: str = "10.00") -> ProductOutputDTO:
    now = timezone.now()
    return ProductOutputDTO(
        id=uuid4(),
        name=f"Product {uuid4().hex[:6]}",
        price=Decimal(price),
        quantity=quantity,
        created_at=now,
        updated_at=now,
    )


def _order() -> OrderOutputDTO:
    now = timezone.now()
    return OrderOutputDTO(
        id=uuid4(), customer_id=uuid4(), items=[], created_at=now, updated_at=now
    )


class TestBuildOrderLines:
    def test_prices_each_item_from_snapshot(self):
        a = _product(5, "1.99")
        b = _product(7, "3.50")

        lines, error = build_order_lines(
            [
                PlaceOrderItemDTO(product_id=a.id, quantity=2),
                PlaceOrderItemDTO(product_id=b.id, quantity=7),
            ],
            {a.id: a, b.id: b},
        )

        assert error is None
        assert lines == [
            OrderLineDTO(product_id=a.id, price=Decimal("1.99"), quantity=2, quantity_left=3),
            OrderLineDTO(product_id=b.id, price=Decimal("3.50"), quantity=7, quantity_left=0),
        ]

    def test_first_failure_wins(self):
        a = _product(1)
        missing = uuid4()

        lines, error = build_order_lines(
            [
                PlaceOrderItemDTO(product_id=a.id, quantity=2),
                PlaceOrderItemDTO(product_id=missing, quantity=1),
            ],
            {a.id: a},
        )

        assert lines == []
        assert isinstance(error, InsufficientStock)
        assert error.available == 1

    def test_missing_product(self):
        missing = uuid4()

        lines, error = build_order_lines(
            [PlaceOrderItemDTO(product_id=missing, quantity=1)], {}
        )

        assert lines == []
        assert isinstance(error, ProductNotFound)
        assert error.product_id == missing


class TestStockUpdates:
    def test_last_line_per_product_sets_final_quantity(self):
        pid = uuid4()
        other = uuid4()
        lines = [
            OrderLineDTO(product_id=pid, price=Decimal("1"), quantity=1, quantity_left=4),
            OrderLineDTO(product_id=other, price=Decimal("1"), quantity=1, quantity_left=9),
            OrderLineDTO(product_id=pid, price=Decimal("1"), quantity=2, quantity_left=2),
        ]

        updates = stock_updates(lines)

        assert {u.product_id: u.quantity for u in updates} == {pid: 2, other: 9}


class TestPlaceOrderResult:
    def test_requires_exactly_one_outcome(self):
        with pytest.raises(ValueError):
            PlaceOrderResult()

    def test_failure_is_not_ok(self):
        error = ProductNotFound(uuid4())
        result = PlaceOrderResult.failure(error)

        assert not result.ok
        assert result.error is error
        with pytest.raises(ProductNotFound):
            result.unwrap()

    def test_rejects_both_outcomes(self):
        with pytest.raises(ValueError):
            PlaceOrderResult(order=_order(), error=ProductNotFound(uuid4()))

    def test_success_unwraps_to_order(self):
        order = _order()
        result = PlaceOrderResult.success(order)

        assert result.ok
        assert result.error is None
        assert result.unwrap() is order
