from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.customers.dtos import CreateCustomerDTO, CustomerOutputDTO
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.dtos import CreateProductDTO, ProductOutputDTO
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

SEED_CUSTOMERS = [
    ("Ana Souza", "ana@example.com"),
    ("Bruno Lima", "bruno@example.com"),
    ("Carla Mendes", "carla@example.com"),
    ("Daniel Costa", "daniel@example.com"),
    ("Eduardo Alves", "eduardo@example.com"),
]

SEED_PRODUCTS = [
    ("Monitor 27\"", Decimal("1299.90")),
    ("Mechanical Keyboard", Decimal("399.90")),
    ("Gaming Mouse", Decimal("249.90")),
    ("Notebook 14\"", Decimal("3999.00")),
    ("Headset", Decimal("299.90")),
    ("Office Desk", Decimal("899.00")),
    ("Ergonomic Chair", Decimal("1499.00")),
    ("A4 Paper", Decimal("29.90")),
    ("Blue Pen", Decimal("4.90")),
    ("Notebook Stand", Decimal("149.90")),
]


class Command(BaseCommand):
    help = "Seed database with development customers, products and orders."

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "--orders",
            type=int,
            default=10,
            help="Number of orders to place (default: 10).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        customers = self._seed_customers()
        products = self._seed_products()
        placed, rejected = self._seed_orders(customers, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={placed}, "
                f"rejected={rejected}"
            )
        )

    def _seed_customers(self) -> list[CustomerOutputDTO]:
        self.stdout.write("Creating customers...")
        repo = CustomerDjangoRepository()
        service = CustomerService(repo)
        customers: list[CustomerOutputDTO] = []
        for name, email in SEED_CUSTOMERS:
            customer = repo.get_by_email(email)
            if customer is None:
                customer = service.create_customer(
                    CreateCustomerDTO(name=name, email=email)
                )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_products(self) -> list[ProductOutputDTO]:
        self.stdout.write("Creating products...")
        repo = ProductDjangoRepository()
        service = ProductService(repo)
        products: list[ProductOutputDTO] = []
        for name, price in SEED_PRODUCTS:
            product = repo.get_by_name(name)
            if product is None:
                product = service.create_product(
                    CreateProductDTO(
                        name=name, price=price, quantity=random.randint(10, 200)
                    )
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(
        self,
        customers: list[CustomerOutputDTO],
        products: list[ProductOutputDTO],
        count: int,
    ) -> tuple[int, int]:
        self.stdout.write("Placing orders...")
        if not customers or not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no customers/products)."))
            return 0, 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        placed = rejected = 0
        for _ in range(count):
            chosen = random.sample(products, k=min(random.randint(1, 4), len(products)))
            dto = PlaceOrderDTO(
                customer_id=random.choice(customers).id,
                items=[
                    PlaceOrderItemDTO(product_id=p.id, quantity=random.randint(1, 3))
                    for p in chosen
                ],
            )
            result = service.place_order(dto)
            if result.ok:
                placed += 1
            else:
                rejected += 1
                self.stdout.write(self.style.WARNING(str(result.error)))

        self.stdout.write(self.style.SUCCESS("Placing orders... Done!"))
        return placed, rejected
