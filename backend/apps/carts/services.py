from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.db import transaction

from apps.api.errors import InvalidInputError, NotFoundError
from apps.common import get_logger
from .dtos import CartDTO, CartLineDTO
from .pricing import MAX_QUANTITY, MAX_TOTAL, ZERO, calculate_total
from .protocols import CartRepositoryProtocol, CatalogProtocol
from .repositories import CartAlreadyExistsError

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    """Business rules over the per-user cart.

    Every mutation runs read-modify-write inside ``transaction.atomic()``
    with the cart row locked, and persists through the repository's
    compare-and-swap ``save``.
    """

    def __init__(self, carts: CartRepositoryProtocol, catalog: CatalogProtocol):
        self.carts = carts
        self.catalog = catalog
        self.logger = logger.bind(service="CartService")

    @staticmethod
    def calculate_total(cart: CartDTO) -> Decimal:
        return calculate_total(cart.items)

    @staticmethod
    def validate_quantity(quantity: Any) -> int:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidInputError(
                "Quantity must be a whole number", details={"quantity": str(quantity)}
            )
        if quantity <= 0:
            raise InvalidInputError(
                "Quantity must be at least 1", details={"quantity": str(quantity)}
            )
        if quantity > MAX_QUANTITY:
            raise InvalidInputError(
                f"Quantity must not exceed {MAX_QUANTITY}",
                details={"quantity": str(quantity)},
            )
        return quantity

    def get_or_create_cart(self, user_id: int) -> CartDTO:
        existing = self.carts.get_for_user(user_id)
        if existing:
            self.logger.debug("Cart already present", user_id=user_id, cart_id=existing.id)
            return existing
        return self._create_cart(user_id)

    def add_or_update_item(self, user_id: int, product_id: int, quantity: Any) -> CartDTO:
        quantity = self.validate_quantity(quantity)
        product = self.catalog.lookup(product_id)
        with transaction.atomic():
            cart = self._load_for_update(user_id)
            line = cart.find_line(product.id)
            if line is not None:
                # Name and price stay as captured on first addition
                line.quantity += quantity
                if line.quantity > MAX_QUANTITY:
                    raise InvalidInputError(
                        f"Quantity must not exceed {MAX_QUANTITY}",
                        details={"productId": str(product.id), "quantity": str(line.quantity)},
                    )
            else:
                cart.items.append(
                    CartLineDTO(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=quantity,
                        unit_price=product.unit_price,
                    )
                )
            cart.total = self.calculate_total(cart)
            if cart.total > MAX_TOTAL:
                raise InvalidInputError(
                    f"Cart total must not exceed {MAX_TOTAL}",
                    details={"total": str(cart.total)},
                )
            saved = self.carts.save(cart)
        self.logger.info(
            "Cart item added",
            user_id=user_id,
            cart_id=saved.id,
            product_id=product.id,
            quantity=quantity,
            total=saved.total,
        )
        return saved

    def remove_item(self, user_id: int, product_id: int) -> CartDTO:
        with transaction.atomic():
            cart = self._load_for_update(user_id)
            if not cart.items:
                self.logger.info("Remove rejected: cart is empty", user_id=user_id)
                raise NotFoundError("Cart is empty", details={"productId": str(product_id)})
            if cart.find_line(product_id) is None:
                self.logger.info(
                    "Remove rejected: product not in cart",
                    user_id=user_id,
                    product_id=product_id,
                )
                raise NotFoundError(
                    "Product not found in cart", details={"productId": str(product_id)}
                )
            cart.items = [line for line in cart.items if line.product_id != product_id]
            cart.total = self.calculate_total(cart)
            saved = self.carts.save(cart)
        self.logger.info(
            "Cart item removed",
            user_id=user_id,
            cart_id=saved.id,
            product_id=product_id,
            total=saved.total,
        )
        return saved

    def clear_cart(self, user_id: int) -> CartDTO:
        with transaction.atomic():
            cart = self._load_for_update(user_id)
            cart.items = []
            cart.total = ZERO
            saved = self.carts.save(cart)
        self.logger.info("Cart cleared", user_id=user_id, cart_id=saved.id)
        return saved

    def _load_for_update(self, user_id: int) -> CartDTO:
        cart = self.carts.get_for_user(user_id, for_update=True)
        if cart is None:
            cart = self._create_cart(user_id, for_update=True)
        return cart

    def _create_cart(self, user_id: int, *, for_update: bool = False) -> CartDTO:
        try:
            cart = self.carts.create_for_user(user_id)
        except CartAlreadyExistsError:
            # A concurrent request may have created the cart after our initial check.
            existing = self.carts.get_for_user(user_id, for_update=for_update)
            if existing:
                self.logger.debug(
                    "Cart created by concurrent request",
                    user_id=user_id,
                    cart_id=existing.id,
                )
                return existing
            raise
        self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        return cart
