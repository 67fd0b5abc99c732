import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from apps.common.repository import GenericRepository
from .dtos import OrderDTO, OrderLineDTO
from .mappers import OrderMapper
from .models import Order, OrderLine


class OrderRepository(GenericRepository[Order]):
    def __init__(self, mapper: Optional[OrderMapper] = None):
        super().__init__(Order)
        self.mapper = mapper or OrderMapper()

    def _base_queryset(self):
        return self.model.objects.prefetch_related("lines")

    def create(
        self,
        user_id: int,
        items: Sequence[OrderLineDTO],
        total: Decimal,
        status: str,
        created_at: datetime,
    ) -> OrderDTO:
        order = self.model.objects.create(
            user_id=user_id, total=total, status=status, created_at=created_at
        )
        OrderLine.objects.bulk_create(
            [
                OrderLine(
                    order=order,
                    position=position,
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
                for position, line in enumerate(items)
            ]
        )
        return OrderDTO(
            id=order.id,
            user_id=user_id,
            items=tuple(items),
            total=total,
            status=order.status,
            created_at=order.created_at,
        )

    def list_for_user(self, user_id: int) -> List[OrderDTO]:
        qs = self._base_queryset().filter(user_id=user_id).order_by("-created_at")
        return [self.mapper.to_dto(order) for order in qs]

    def get_for_user(self, order_id: Union[str, uuid.UUID], user_id: int) -> Optional[OrderDTO]:
        """Scoped lookup; ``None`` for unknown, malformed or foreign ids alike."""
        try:
            key = order_id if isinstance(order_id, uuid.UUID) else uuid.UUID(str(order_id))
        except ValueError:
            return None
        order = self._base_queryset().filter(id=key, user_id=user_id).first()
        return self.mapper.to_dto(order) if order else None
