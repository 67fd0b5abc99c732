from __future__ import annotations

from typing import Optional, Protocol

from .models import Product


class ProductRepositoryProtocol(Protocol):
    def get_by_id(self, product_id: int) -> Optional[Product]:
        ...
