from __future__ import annotations

from typing import Optional

from apps.api.errors import NotFoundError
from apps.common import get_logger
from .dtos import ProductSnapshotDTO
from .mappers import ProductSnapshotMapper
from .protocols import ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class CatalogService:
    """Resolve product ids to priced snapshots.

    Lookups always hit the repository; callers rely on seeing the price as it
    is at the moment of the call.
    """

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        mapper: Optional[ProductSnapshotMapper] = None,
    ):
        self.products = products
        self.mapper = mapper or ProductSnapshotMapper()
        self.logger = logger.bind(service="CatalogService")

    def lookup(self, product_id: int) -> ProductSnapshotDTO:
        product = self.products.get_by_id(product_id)
        if product is None:
            self.logger.info("Product lookup missed", product_id=product_id)
            raise NotFoundError(
                "Product not found", details={"productId": str(product_id)}
            )
        snapshot = self.mapper.to_dto(product)
        self.logger.debug(
            "Product resolved", product_id=snapshot.id, unit_price=snapshot.unit_price
        )
        return snapshot
