"""Product service layer (Use Cases).

Catalog management for the Product aggregate, delegating persistence
to the injected ``IProductRepository``.

Business rules enforced here:
- Product name must be unique.
- Price must be greater than zero (validated by DTO).
- Stock cannot be negative (validated by DTO and database constraint).

Price updates never touch existing orders: line items carry their own
price snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductOutputDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> ProductOutputDTO:
        """Create a new product after enforcing name uniqueness.

        Raises:
            ProductAlreadyExists: if the name is already taken.
        """
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists("There is already one product with this name.")

        product = self._repo.create(dto)
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: UUID | str, dto: UpdateProductDTO) -> ProductOutputDTO:
        """Update an existing product with the supplied fields.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new name belongs to another product.
        """
        log = logger.bind(product_id=str(id))

        if dto.name is not None:
            existing = self._repo.get_by_name(dto.name)
            if existing and str(existing.id) != str(id):
                log.warning("product.duplicate_name")
                raise ProductAlreadyExists(
                    "There is already one product with this name."
                )

        product = self._repo.update(id, dto)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        log.info("product.updated")
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[ProductOutputDTO]:
        """Return a list of products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: UUID | str) -> ProductOutputDTO:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
