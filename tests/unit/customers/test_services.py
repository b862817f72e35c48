"""Unit tests for CustomerService."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.customers.dtos import CreateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CustomerService(CustomerDjangoRepository())


class TestCreateCustomer:
    def test_creates_customer(self, service):
        customer = service.create_customer(
            CreateCustomerDTO(name="Maria", email="maria@example.com")
        )
        assert customer.id is not None
        assert customer.email == "maria@example.com"

    def test_duplicate_email_raises(self, service):
        service.create_customer(CreateCustomerDTO(name="A", email="same@example.com"))
        with pytest.raises(CustomerAlreadyExists, match="already assigned"):
            service.create_customer(
                CreateCustomerDTO(name="B", email="SAME@example.com")
            )


class TestQueries:
    def test_get_customer(self, service):
        created = service.create_customer(
            CreateCustomerDTO(name="Get", email="get@example.com")
        )
        assert service.get_customer(created.id).id == created.id

    def test_get_customer_not_found(self, service):
        with pytest.raises(CustomerNotFound):
            service.get_customer(uuid4())

    def test_list_customers(self, service):
        service.create_customer(CreateCustomerDTO(name="A", email="a@example.com"))
        service.create_customer(CreateCustomerDTO(name="B", email="b@example.com"))
        assert len(service.list_customers()) == 2
