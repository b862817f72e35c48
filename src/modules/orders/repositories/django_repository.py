"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
``create`` is wrapped in ``transaction.atomic()`` so the Order
aggregate (Order + OrderedProducts) is persisted as one unit.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.orders.dtos import NewOrderDTO, OrderOutputDTO
from modules.orders.models import Order, OrderedProduct
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: NewOrderDTO) -> OrderOutputDTO:
        """Create an order with its line items atomically."""
        order = Order(customer_id=data.customer_id)
        order.save()

        OrderedProduct.objects.bulk_create(
            [
                OrderedProduct(
                    order=order,
                    product_id=line.product_id,
                    price=line.price,
                    quantity=line.quantity,
                    position=position,
                )
                for position, line in enumerate(data.items)
            ]
        )

        logger.info(
            "order.created",
            order_id=str(order.id),
            item_count=len(data.items),
        )
        return self.get_by_id(order.id)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: UUID | str) -> Optional[OrderOutputDTO]:
        """Retrieve an order with its line items prefetched.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            order = Order.objects.prefetch_related("products").filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        return OrderOutputDTO.from_entity(order) if order else None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderOutputDTO]:
        """List orders with optional filters and prefetched line items.

        Supported filter keys include ``customer_id`` and
        ``created_at__range``.
        """
        queryset = Order.objects.prefetch_related("products")
        if filters:
            queryset = queryset.filter(**filters)
        return [OrderOutputDTO.from_entity(o) for o in queryset]
