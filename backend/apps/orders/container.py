from __future__ import annotations

from apps.carts.repositories import CartRepository

from .repositories import OrderRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(carts=CartRepository(), orders=OrderRepository())
