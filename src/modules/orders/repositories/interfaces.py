"""Order repository interface and the capabilities consumed by placement.

``OrderService`` depends on four narrow capabilities rather than on
concrete repositories:

- ``CustomerLookup``: ``get_by_id`` for customers.
- ``ProductLookup``: batched ``get_all_by_ids`` for products.
- ``ProductUpdate``: batched ``update_quantities`` for products.
- ``OrderCreate``: ``create`` for orders.

They are structural (``Protocol``), so the Django repositories satisfy
them without inheritance and in-memory fakes can stand in for tests.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol, Sequence
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerOutputDTO
    from modules.orders.dtos import NewOrderDTO, OrderOutputDTO
    from modules.products.dtos import ProductOutputDTO, StockUpdateDTO


class CustomerLookup(Protocol):
    def get_by_id(self, id: UUID | str) -> Optional[CustomerOutputDTO]: ...


class ProductLookup(Protocol):
    def get_all_by_ids(
        self, ids: Iterable[UUID], *, for_update: bool = False
    ) -> List[ProductOutputDTO]: ...


class ProductUpdate(Protocol):
    def update_quantities(self, updates: Sequence[StockUpdateDTO]) -> None: ...


class ProductInventory(ProductLookup, ProductUpdate, Protocol):
    """Product store offering both the batched look-up and the batched write."""


class OrderCreate(Protocol):
    def create(self, data: NewOrderDTO) -> OrderOutputDTO: ...


class IOrderRepository(IRepository["OrderOutputDTO"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderedProduct children; creation
    must persist both atomically and assign ids and timestamps.
    """

    @abstractmethod
    def create(self, data: NewOrderDTO) -> OrderOutputDTO:
        """Create an order with its line items, preserving item order."""
