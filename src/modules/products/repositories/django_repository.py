"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
(or omit rows) instead of raising.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence
from uuid import UUID

import structlog

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from modules.products.dtos import (
    CreateProductDTO,
    ProductOutputDTO,
    StockUpdateDTO,
    UpdateProductDTO,
)
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: UUID | str) -> Optional[ProductOutputDTO]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            product = Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        return ProductOutputDTO.from_entity(product) if product else None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[ProductOutputDTO]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"quantity__gt": 0}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return [ProductOutputDTO.from_entity(p) for p in queryset]

    def get_by_name(self, name: str) -> Optional[ProductOutputDTO]:
        product = Product.objects.filter(name__iexact=name.strip()).first()
        return ProductOutputDTO.from_entity(product) if product else None

    @transaction.atomic
    def create(self, data: CreateProductDTO) -> ProductOutputDTO:
        product = Product(name=data.name, price=data.price, quantity=data.quantity)
        product.save()
        logger.info("product.saved", product_id=str(product.id))
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def update(self, id: UUID | str, data: UpdateProductDTO) -> Optional[ProductOutputDTO]:
        try:
            product = Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        if not product:
            return None

        changed = []
        for field in ("name", "price", "quantity"):
            value = getattr(data, field)
            if value is not None:
                setattr(product, field, value)
                changed.append(field)

        if changed:
            product.save(update_fields=changed)
        logger.info("product.updated", product_id=str(id), fields=changed)
        return ProductOutputDTO.from_entity(product)

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def get_all_by_ids(
        self, ids: Iterable[UUID], *, for_update: bool = False
    ) -> List[ProductOutputDTO]:
        """Batch look-up; rows are locked in primary-key order to avoid deadlocks."""
        queryset = Product.objects.filter(id__in=list(ids)).order_by("id")
        if for_update and settings.ORDERS_LOCK_PRODUCTS:
            queryset = queryset.select_for_update()
        return [ProductOutputDTO.from_entity(p) for p in queryset]

    @transaction.atomic
    def update_quantities(self, updates: Sequence[StockUpdateDTO]) -> None:
        if not updates:
            return
        now = timezone.now()
        # Later entries for the same product win.
        latest = {u.product_id: u.quantity for u in updates}
        rows = [
            Product(id=product_id, quantity=quantity, updated_at=now)
            for product_id, quantity in latest.items()
        ]
        Product.objects.bulk_update(rows, ["quantity", "updated_at"])
        for product_id, quantity in latest.items():
            logger.info(
                "product.stock_updated",
                product_id=str(product_id),
                quantity=quantity,
            )
