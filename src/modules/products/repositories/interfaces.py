"""Product repository interface.

Extends ``IRepository[ProductOutputDTO]`` with catalog management
(create / update / name look-up) and the two stock capabilities
consumed by order placement: a batched look-up by ids and a batched
quantity write.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductOutputDTO,
        StockUpdateDTO,
        UpdateProductDTO,
    )


class IProductRepository(IRepository["ProductOutputDTO"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[ProductOutputDTO]:
        """Retrieve a product by its unique name."""

    @abstractmethod
    def create(self, data: CreateProductDTO) -> ProductOutputDTO:
        """Persist a new product."""

    @abstractmethod
    def update(self, id: UUID | str, data: UpdateProductDTO) -> Optional[ProductOutputDTO]:
        """Apply the supplied fields; ``None`` if the product does not exist."""

    @abstractmethod
    def get_all_by_ids(
        self, ids: Iterable[UUID], *, for_update: bool = False
    ) -> List[ProductOutputDTO]:
        """Return the products among ``ids`` that exist.

        Missing ids are simply absent from the result (no error); order
        is not guaranteed.  ``for_update`` requests row-level locks for
        the rest of the surrounding transaction.
        """

    @abstractmethod
    def update_quantities(self, updates: Sequence[StockUpdateDTO]) -> None:
        """Overwrite stored stock for every entry, as a single batch."""
