from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Protocol, Sequence, Union
from uuid import UUID

from .dtos import OrderDTO, OrderLineDTO


class OrderRepositoryProtocol(Protocol):
    def create(
        self,
        user_id: int,
        items: Sequence[OrderLineDTO],
        total: Decimal,
        status: str,
        created_at: datetime,
    ) -> OrderDTO:
        ...

    def list_for_user(self, user_id: int) -> List[OrderDTO]:
        ...

    def get_for_user(self, order_id: Union[str, UUID], user_id: int) -> Optional[OrderDTO]:
        ...
