from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.api.errors import ConflictError
from apps.common.repository import GenericRepository
from .dtos import CartDTO
from .mappers import CartMapper
from .models import Cart, CartLine
from .pricing import ZERO


class CartAlreadyExistsError(Exception):
    """Raised when a second cart is inserted for the same user."""


class CartRepository(GenericRepository[Cart]):
    def __init__(self, mapper: Optional[CartMapper] = None):
        super().__init__(Cart)
        self.mapper = mapper or CartMapper()

    def _base_queryset(self):
        return self.model.objects.prefetch_related("lines")

    def get_for_user(self, user_id: int, *, for_update: bool = False) -> Optional[CartDTO]:
        """Return the user's cart with its lines, optionally row-locked.

        ``for_update`` must only be used inside ``transaction.atomic()``.
        """
        qs = self._base_queryset()
        if for_update:
            qs = qs.select_for_update()
        cart = qs.filter(user_id=user_id).first()
        return self.mapper.to_dto(cart) if cart else None

    def create_for_user(self, user_id: int) -> CartDTO:
        try:
            # Savepoint keeps an enclosing transaction usable after a unique violation
            with transaction.atomic():
                cart = self.model.objects.create(user_id=user_id, total=ZERO, version=0)
        except IntegrityError as exc:
            # Only the one-cart-per-user constraint means "already exists"
            if not self.model.objects.filter(user_id=user_id).exists():
                raise
            raise CartAlreadyExistsError(f"User {user_id} already has a cart") from exc
        return CartDTO(
            id=cart.id,
            user_id=user_id,
            items=[],
            total=ZERO,
            version=cart.version,
            updated_at=cart.updated_at,
        )

    def save(self, cart: CartDTO) -> CartDTO:
        """Compare-and-swap write of the whole aggregate.

        Succeeds only if the stored version still equals ``cart.version``;
        otherwise raises ``ConflictError`` and writes nothing.
        """
        with transaction.atomic():
            updated = self.model.objects.filter(id=cart.id, version=cart.version).update(
                total=cart.total,
                version=F("version") + 1,
                updated_at=timezone.now(),
            )
            if not updated:
                raise ConflictError(
                    "Cart was modified concurrently; retry the operation",
                    details={"cartId": str(cart.id), "version": cart.version},
                )
            CartLine.objects.filter(cart_id=cart.id).delete()
            CartLine.objects.bulk_create(
                [
                    CartLine(
                        cart_id=cart.id,
                        position=position,
                        product_id=line.product_id,
                        product_name=line.product_name,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                    )
                    for position, line in enumerate(cart.items)
                ]
            )
        return self.get_for_user(cart.user_id)
