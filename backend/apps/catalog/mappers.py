from decimal import Decimal, ROUND_HALF_UP

from .dtos import ProductSnapshotDTO
from .models import Product

CENT = Decimal("0.01")


class ProductSnapshotMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductSnapshotDTO:
        # str() first so a float price never leaks binary rounding into money
        price = Decimal(str(product.price)).quantize(CENT, rounding=ROUND_HALF_UP)
        return ProductSnapshotDTO(id=product.id, name=product.title, unit_price=price)
