from typing import Iterable, List, Optional

from .dtos import CartDTO, CartLineDTO
from .models import Cart, CartLine


class CartLineMapper:
    @staticmethod
    def to_dto(line: CartLine) -> CartLineDTO:
        return CartLineDTO(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
        )

    def many_to_dto(self, lines: Iterable[CartLine]) -> List[CartLineDTO]:
        return [self.to_dto(line) for line in lines]


class CartMapper:
    def __init__(self, line_mapper: Optional[CartLineMapper] = None) -> None:
        self.line_mapper = line_mapper or CartLineMapper()

    def to_dto(self, cart: Cart) -> CartDTO:
        # lines are prefetched by the repository
        items = self.line_mapper.many_to_dto(cart.lines.all())
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            items=items,
            total=cart.total,
            version=cart.version,
            updated_at=cart.updated_at,
        )
