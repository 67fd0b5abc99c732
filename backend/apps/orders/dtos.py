from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Tuple
from uuid import UUID


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: UUID
    user_id: int
    items: Tuple[OrderLineDTO, ...]
    total: Decimal
    status: str
    created_at: datetime
