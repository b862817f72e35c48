"""Order domain errors.

``OrderPlacementError`` subclasses form the closed set of reasons a
placement can be rejected.  ``OrderService.place_order`` returns them
inside a ``PlaceOrderResult`` instead of raising; ``unwrap()`` raises
them for callers that prefer exceptions.  Every instance exposes a
stable ``code`` plus the identifiers involved.
"""

from __future__ import annotations

from typing import ClassVar
from uuid import UUID


class OrderPlacementError(Exception):
    """Base class for business-rule rejections of an order placement."""

    code: ClassVar[str] = "order_placement_error"


class CustomerNotFound(OrderPlacementError):
    """The customer referenced by the order does not exist."""

    code = "customer_not_found"

    def __init__(self, customer_id: UUID) -> None:
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found.")


class ProductNotFound(OrderPlacementError):
    """A product referenced by a requested item does not exist."""

    code = "product_not_found"

    def __init__(self, product_id: UUID) -> None:
        self.product_id = product_id
        super().__init__(f"Could not find product with id {product_id}.")


class InsufficientStock(OrderPlacementError):
    """A requested quantity exceeds the stock still available."""

    code = "insufficient_stock"

    def __init__(self, product_id: UUID, available: int, requested: int) -> None:
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"There is only {available} units of {product_id} available "
            f"(requested {requested})."
        )


class OrderNotFound(Exception):
    """The requested order does not exist."""
