from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass
class CartLineDTO:
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal


@dataclass
class CartDTO:
    id: int
    user_id: int
    items: List[CartLineDTO] = field(default_factory=list)
    total: Decimal = Decimal("0.00")
    version: int = 0
    updated_at: Optional[datetime] = None

    def find_line(self, product_id: int) -> Optional[CartLineDTO]:
        for line in self.items:
            if line.product_id == product_id:
                return line
        return None


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
