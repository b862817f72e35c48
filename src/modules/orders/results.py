"""Explicit outcome of an order placement.

Business-rule rejections travel back to the caller as values rather
than exceptions, so a rejected request is an ordinary return path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, cast

if TYPE_CHECKING:
    from modules.orders.dtos import OrderOutputDTO
    from modules.orders.exceptions import OrderPlacementError


@dataclass(frozen=True)
class PlaceOrderResult:
    """Either the created ``order`` or the ``error`` that rejected it."""

    order: Optional[OrderOutputDTO] = None
    error: Optional[OrderPlacementError] = None

    def __post_init__(self) -> None:
        if (self.order is None) == (self.error is None):
            raise ValueError("PlaceOrderResult needs exactly one of order or error.")

    @classmethod
    def success(cls, order: OrderOutputDTO) -> PlaceOrderResult:
        return cls(order=order)

    @classmethod
    def failure(cls, error: OrderPlacementError) -> PlaceOrderResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> OrderOutputDTO:
        """Return the order, or raise the rejection."""
        if self.error is not None:
            raise self.error
        return cast("OrderOutputDTO", self.order)
