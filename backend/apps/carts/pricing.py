from decimal import Decimal
from typing import Iterable, Protocol

ZERO = Decimal("0.00")
# Column limits: PositiveIntegerField and DecimalField(max_digits=12, decimal_places=2)
MAX_QUANTITY = 2**31 - 1
MAX_TOTAL = Decimal("9999999999.99")


class PricedLine(Protocol):
    quantity: int
    unit_price: Decimal


def line_subtotal(line: PricedLine) -> Decimal:
    return line.unit_price * line.quantity


def calculate_total(lines: Iterable[PricedLine]) -> Decimal:
    """Exact sum of ``unit_price * quantity``; ``0.00`` when there are no lines."""
    return sum((line_subtotal(line) for line in lines), ZERO)
