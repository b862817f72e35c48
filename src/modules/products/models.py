"""Product model with name uniqueness and stock control.

Business rules implemented:
- Product name must be unique in the system, ignoring case.
- Price must be greater than zero (two fractional digits).
- Stock quantity cannot be negative: ``PositiveIntegerField`` plus a
  database ``CheckConstraint`` so no committed write can break it.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower

from modules.core.models import BaseModel


class Product(BaseModel):
    """Catalog item with price and available stock."""

    name = models.CharField(max_length=255, unique=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    quantity = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(Lower("name"), name="products_name_ci_uniq"),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="products_quantity_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity} in stock)"
