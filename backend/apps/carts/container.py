from __future__ import annotations

from apps.catalog.container import build_catalog_service

from .repositories import CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    return CartService(carts=CartRepository(), catalog=build_catalog_service())
