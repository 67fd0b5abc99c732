from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Union
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.api.errors import ConsistencyError, EmptyCartError, NotFoundError
from apps.carts.pricing import ZERO, calculate_total
from apps.carts.protocols import CartRepositoryProtocol
from apps.common import get_logger
from .dtos import OrderDTO
from .mappers import OrderLineMapper
from .models import OrderStatus
from .protocols import OrderRepositoryProtocol

logger = get_logger(__name__).bind(component="orders", layer="service")


class OrderService:
    """Checkout and order history.

    ``create_order`` reads the cart row-locked, inserts the order and resets
    the cart in a single transaction; a failed cart save rolls the order back.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        orders: OrderRepositoryProtocol,
        clock: Callable[[], datetime] = timezone.now,
        line_mapper: OrderLineMapper | None = None,
    ):
        self.carts = carts
        self.orders = orders
        self.clock = clock
        self.line_mapper = line_mapper or OrderLineMapper()
        self.logger = logger.bind(service="OrderService")

    def create_order(self, user_id: int) -> OrderDTO:
        with transaction.atomic():
            cart = self.carts.get_for_user(user_id, for_update=True)
            if cart is None or not cart.items:
                self.logger.info("Checkout rejected: cart is empty", user_id=user_id)
                raise EmptyCartError(details={"userId": str(user_id)})
            expected = calculate_total(cart.items)
            if cart.total != expected:
                self.logger.error(
                    "Cart total does not match its lines",
                    user_id=user_id,
                    cart_id=cart.id,
                    stored=cart.total,
                    expected=expected,
                )
                raise ConsistencyError(
                    "Cart total does not match its lines",
                    details={"cartId": str(cart.id)},
                )
            order = self.orders.create(
                user_id=user_id,
                items=self.line_mapper.many_from_cart(cart.items),
                total=expected,
                status=OrderStatus.PENDING.value,
                created_at=self.clock(),
            )
            cart.items = []
            cart.total = ZERO
            self.carts.save(cart)
        self.logger.info(
            "Order created",
            user_id=user_id,
            order_id=order.id,
            lines=len(order.items),
            total=order.total,
        )
        return order

    def get_my_orders(self, user_id: int) -> List[OrderDTO]:
        orders = list(self.orders.list_for_user(user_id))
        self.logger.debug("Listed orders", user_id=user_id, count=len(orders))
        return orders

    def get_order_by_id(self, user_id: int, order_id: Union[str, UUID]) -> OrderDTO:
        order = self.orders.get_for_user(order_id, user_id)
        if order is None:
            # Same error for missing, malformed and foreign ids
            raise NotFoundError("Order not found", details={"orderId": str(order_id)})
        return order
