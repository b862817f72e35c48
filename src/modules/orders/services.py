"""Order service layer (Use Cases).

Orchestrates order placement: customer look-up, one batched product
look-up, per-item validation and pricing, then a single order creation
followed by a single batch stock write.  All reads precede all writes
and the whole use case runs in one transaction, so a rejected or failed
placement leaves no order and no stock change behind.

Business rules enforced:
- The customer must exist.
- Every requested product must exist.
- Requested quantities (summed per product) cannot exceed stock.
- Line-item price is the product price at placement time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Tuple
from uuid import UUID

import structlog

from django.db import transaction

from modules.orders.dtos import NewOrderDTO, OrderLineDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.results import PlaceOrderResult
from modules.products.dtos import StockUpdateDTO

if TYPE_CHECKING:
    from modules.orders.dtos import OrderOutputDTO, PlaceOrderDTO, PlaceOrderItemDTO
    from modules.orders.exceptions import OrderPlacementError
    from modules.orders.repositories.interfaces import (
        CustomerLookup,
        IOrderRepository,
        OrderCreate,
        ProductInventory,
    )
    from modules.products.dtos import ProductOutputDTO

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives its collaborators via constructor injection (DIP).  Only
    the capabilities it uses are required: any object with the right
    methods works, including in-memory fakes.
    """

    def __init__(
        self,
        order_repository: OrderCreate | IOrderRepository,
        customer_repository: CustomerLookup,
        product_repository: ProductInventory,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def place_order(self, dto: PlaceOrderDTO) -> PlaceOrderResult:
        """Validate and create an order, decrementing product stock.

        Steps:
        1. Look up the customer.
        2. Look up every requested product in one batch (locked for update).
        3. Validate and price each item in request order.
        4. Create the order with all line items.
        5. Write the remaining stock of every touched product in one batch.

        Returns a failed ``PlaceOrderResult`` carrying ``CustomerNotFound``,
        ``ProductNotFound`` or ``InsufficientStock`` when a rule is broken;
        nothing is written in that case.  Storage errors propagate.
        """
        log = logger.bind(customer_id=str(dto.customer_id), item_count=len(dto.items))
        log.info("order.placement_started")

        # 1. Customer
        customer = self._customer_repo.get_by_id(dto.customer_id)
        if customer is None:
            return self._reject(log, CustomerNotFound(dto.customer_id))

        # 2. Product snapshot
        snapshot = {
            product.id: product
            for product in self._product_repo.get_all_by_ids(
                dto.product_ids, for_update=True
            )
        }

        # 3. Validate + price
        lines, error = build_order_lines(dto.items, snapshot)
        if error is not None:
            return self._reject(log, error)

        # 4. Persist order
        order = self._order_repo.create(NewOrderDTO(customer_id=customer.id, items=lines))

        # 5. Stock write
        self._product_repo.update_quantities(stock_updates(lines))

        log.info("order.placed", order_id=str(order.id), total=str(order.total))
        return PlaceOrderResult.success(order)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: UUID | str) -> OrderOutputDTO:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)  # type: ignore[union-attr]
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _reject(log, error: OrderPlacementError) -> PlaceOrderResult:
        log.warning("order.rejected", reason=error.code, detail=str(error))
        return PlaceOrderResult.failure(error)


def build_order_lines(
    items: List[PlaceOrderItemDTO],
    snapshot: Dict[UUID, ProductOutputDTO],
) -> Tuple[List[OrderLineDTO], OrderPlacementError | None]:
    """Validate and price requested items against a product snapshot.

    Items are processed in request order and the first failure stops
    processing.  Repeated product ids draw from the same remaining stock,
    so ``quantity_left`` of the last line for a product is its final stock.
    """
    remaining = {product_id: product.quantity for product_id, product in snapshot.items()}
    lines: List[OrderLineDTO] = []

    for item in items:
        product = snapshot.get(item.product_id)
        if product is None:
            return [], ProductNotFound(item.product_id)

        available = remaining[item.product_id]
        if item.quantity > available:
            return [], InsufficientStock(item.product_id, available, item.quantity)

        remaining[item.product_id] = available - item.quantity
        lines.append(
            OrderLineDTO(
                product_id=product.id,
                price=product.price,
                quantity=item.quantity,
                quantity_left=remaining[item.product_id],
            )
        )

    return lines, None


def stock_updates(lines: List[OrderLineDTO]) -> List[StockUpdateDTO]:
    """One stock write per product, carrying its final remaining quantity."""
    final: Dict[UUID, int] = {}
    for line in lines:
        final[line.product_id] = line.quantity_left
    return [
        StockUpdateDTO(product_id=product_id, quantity=quantity)
        for product_id, quantity in final.items()
    ]
