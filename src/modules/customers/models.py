"""Customer model.

Business rules implemented:
- E-mail must be unique in the system (case-insensitive: normalised to
  lower case on save, unique index at the storage boundary).
- Customers are never deleted by the order workflow; ``PROTECT`` on the
  order FK preserves purchase history.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    """Purchaser identity and contact data."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Sanitisation
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_email(value: str) -> str:
        return value.strip().lower()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.normalize_email(self.email)
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self.name
