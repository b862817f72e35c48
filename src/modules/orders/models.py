"""Order and OrderedProduct models.

Business rules implemented:
- Customer FK uses PROTECT to preserve purchase history.
- OrderedProduct snapshots the product price at creation time (``price``);
  later catalog price changes never reach existing orders.
- OrderedProduct quantity is at least 1 (database check constraint).
- Line items keep the order of the placement request via ``position``.
"""

from __future__ import annotations

from decimal import Decimal

import uuid6
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Order(BaseModel):
    """Order aggregate root: one customer, N line items."""

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order {self.id}"


class OrderedProduct(models.Model):
    """Line item linking an Order to a Product.

    ``price`` is a **snapshot** of the product price at the time of
    purchase; it never changes even if the product price is updated later.
    Owned by its order: CASCADE removes items with the parent row.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="products",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "orders_products"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="orders_products_quantity_positive",
            ),
            models.UniqueConstraint(
                fields=["order", "position"],
                name="orders_products_order_position_uniq",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} (${self.price})"
