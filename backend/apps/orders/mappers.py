from typing import Iterable, Optional, Tuple

from apps.carts.dtos import CartLineDTO
from .dtos import OrderDTO, OrderLineDTO
from .models import Order, OrderLine


class OrderLineMapper:
    @staticmethod
    def to_dto(line: OrderLine) -> OrderLineDTO:
        return OrderLineDTO(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
        )

    @staticmethod
    def from_cart_line(line: CartLineDTO) -> OrderLineDTO:
        return OrderLineDTO(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
        )

    def many_from_cart(self, lines: Iterable[CartLineDTO]) -> Tuple[OrderLineDTO, ...]:
        return tuple(self.from_cart_line(line) for line in lines)


class OrderMapper:
    def __init__(self, line_mapper: Optional[OrderLineMapper] = None) -> None:
        self.line_mapper = line_mapper or OrderLineMapper()

    def to_dto(self, order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            items=tuple(self.line_mapper.to_dto(line) for line in order.lines.all()),
            total=order.total,
            status=order.status,
            created_at=order.created_at,
        )
