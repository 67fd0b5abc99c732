from typing import Optional

from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def _base_queryset(self):
        return self.model.objects.only("id", "title", "price")

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.get(id=product_id)
