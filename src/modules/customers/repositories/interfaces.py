"""Customer repository interface.

Extends ``IRepository[CustomerOutputDTO]`` with the e-mail look-up
needed for the uniqueness rule and the creation call used by
registration.  ``get_by_id`` doubles as the customer-lookup capability
consumed by order placement.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, CustomerOutputDTO


class ICustomerRepository(IRepository["CustomerOutputDTO"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[CustomerOutputDTO]:
        """Retrieve a customer by e-mail address (case-insensitive)."""

    @abstractmethod
    def create(self, data: CreateCustomerDTO) -> CustomerOutputDTO:
        """Persist a new customer and return its stored representation."""
