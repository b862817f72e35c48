"""Product domain exceptions.

Raised by the Service Layer when catalog rules are violated.
"""

from __future__ import annotations


class ProductAlreadyExists(Exception):
    """A product with the same name already exists."""


class ProductNotFound(Exception):
    """The requested product does not exist."""
