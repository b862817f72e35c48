"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
Callers (management commands, future API layer) translate them into
user-facing responses.
"""

from __future__ import annotations


class CustomerAlreadyExists(Exception):
    """A customer with the same e-mail (case-insensitive) already exists."""


class CustomerNotFound(Exception):
    """The requested customer does not exist."""
