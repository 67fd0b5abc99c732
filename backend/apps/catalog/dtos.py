from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductSnapshotDTO:
    id: int
    name: str
    unit_price: Decimal


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
