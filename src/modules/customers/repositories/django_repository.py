"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.customers.dtos import CreateCustomerDTO, CustomerOutputDTO
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: UUID | str) -> Optional[CustomerOutputDTO]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            customer = Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        return CustomerOutputDTO.from_entity(customer) if customer else None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[CustomerOutputDTO]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"name__icontains": "acme"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return [CustomerOutputDTO.from_entity(c) for c in queryset]

    def get_by_email(self, email: str) -> Optional[CustomerOutputDTO]:
        customer = Customer.objects.filter(
            email=Customer.normalize_email(email)
        ).first()
        return CustomerOutputDTO.from_entity(customer) if customer else None

    @transaction.atomic
    def create(self, data: CreateCustomerDTO) -> CustomerOutputDTO:
        """Insert a customer row.  ``IntegrityError`` propagates on e-mail collision."""
        customer = Customer(name=data.name, email=data.email)
        customer.save()
        logger.info("customer.saved", customer_id=str(customer.id))
        return CustomerOutputDTO.from_entity(customer)
