"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``PlaceOrderItemDTO``: one requested (product, quantity) pair.
- ``PlaceOrderDTO``: input for order placement (nested items).
- ``OrderLineDTO``: a validated, priced line item (internal to placement).
- ``NewOrderDTO``: payload handed to ``IOrderRepository.create``.
- ``OrderedProductOutputDTO``: output for a single stored line item.
- ``OrderOutputDTO``: output with line items.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.orders.models import Order


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class PlaceOrderItemDTO(BaseModel):
    """Immutable DTO for a single requested item.

    Only ``product_id`` and ``quantity`` come from the caller; the price
    is resolved from the product catalog during placement.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for order placement requests.

    ``items`` must contain at least one entry.  The same product may
    appear more than once; quantities are checked cumulatively.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    items: List[PlaceOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[PlaceOrderItemDTO]
    ) -> List[PlaceOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @property
    def product_ids(self) -> set[UUID]:
        return {item.product_id for item in self.items}


# ---------------------------------------------------------------------------
# Placement internals
# ---------------------------------------------------------------------------


class OrderLineDTO(BaseModel):
    """A validated line item, priced from the snapshot."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    price: Decimal
    quantity: int
    quantity_left: int


class NewOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    items: List[OrderLineDTO]


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderedProductOutputDTO(BaseModel):
    """Immutable DTO for a stored line item."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    product_id: UUID
    price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class OrderOutputDTO(BaseModel):
    """Immutable DTO for a stored order."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    customer_id: UUID
    items: List[OrderedProductOutputDTO]
    created_at: datetime
    updated_at: datetime

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0.00"))

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Build an output DTO from an Order model instance.

        Assumes ``products`` is prefetched.
        """
        items = [
            OrderedProductOutputDTO(
                id=item.id,
                product_id=item.product_id,
                price=item.price,
                quantity=item.quantity,
            )
            for item in order.products.all()
        ]
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            items=items,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
