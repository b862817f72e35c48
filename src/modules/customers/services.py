"""Customer service layer (Use Cases).

Orchestrates customer registration and look-ups, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- E-mail must be unique (case-insensitive).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, CustomerOutputDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> CustomerOutputDTO:
        """Register a new customer after enforcing e-mail uniqueness.

        Raises:
            CustomerAlreadyExists: if the e-mail is already taken.
        """
        log = logger.bind(email=dto.email)

        if self._repo.get_by_email(dto.email):
            log.warning("customer.duplicate_email")
            raise CustomerAlreadyExists("This e-mail is already assigned.")

        customer = self._repo.create(dto)
        log.info("customer.created", customer_id=str(customer.id))
        return customer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[CustomerOutputDTO]:
        """Return a list of customers, optionally filtered."""
        return self._repo.list(filters)

    def get_customer(self, id: UUID | str) -> CustomerOutputDTO:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
