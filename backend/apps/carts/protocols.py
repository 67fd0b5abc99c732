from __future__ import annotations

from typing import Optional, Protocol, TYPE_CHECKING

from .dtos import CartDTO

if TYPE_CHECKING:
    from apps.catalog.dtos import ProductSnapshotDTO


class CartRepositoryProtocol(Protocol):
    def get_for_user(self, user_id: int, *, for_update: bool = False) -> Optional[CartDTO]:
        ...

    def create_for_user(self, user_id: int) -> CartDTO:
        ...

    def save(self, cart: CartDTO) -> CartDTO:
        ...


class CatalogProtocol(Protocol):
    def lookup(self, product_id: int) -> "ProductSnapshotDTO":
        ...
