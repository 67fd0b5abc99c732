import copy
from decimal import Decimal

from apps.api.errors import ConflictError, NotFoundError
from apps.carts.dtos import CartDTO
from apps.carts.repositories import CartAlreadyExistsError
from apps.catalog.dtos import ProductSnapshotDTO


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeCartRepository:
    """In-memory CartStore with the same compare-and-swap save."""

    def __init__(self):
        self._storage = {}
        self._pk = 1
        self.saves = 0
        self.locked_reads = 0

    def get_for_user(self, user_id, *, for_update=False):
        if for_update:
            self.locked_reads += 1
        cart = self._storage.get(user_id)
        return copy.deepcopy(cart) if cart else None

    def create_for_user(self, user_id):
        if user_id in self._storage:
            raise CartAlreadyExistsError(user_id)
        cart = CartDTO(id=self._pk, user_id=user_id)
        self._pk += 1
        self._storage[user_id] = cart
        return copy.deepcopy(cart)

    def save(self, cart):
        stored = self._storage.get(cart.user_id)
        if stored is None or stored.version != cart.version:
            raise ConflictError(details={"cartId": str(cart.id), "version": cart.version})
        saved = copy.deepcopy(cart)
        saved.version = stored.version + 1
        self._storage[cart.user_id] = saved
        self.saves += 1
        return copy.deepcopy(saved)

    def bump_version(self, user_id):
        self._storage[user_id].version += 1

    def stored(self, user_id):
        return self._storage.get(user_id)


class FakeCatalog:
    def __init__(self, products=None):
        self.products = {p.id: p for p in (products or [])}
        self.lookups = []

    def add(self, product_id, name, price):
        self.products[product_id] = ProductSnapshotDTO(product_id, name, Decimal(price))

    def lookup(self, product_id):
        self.lookups.append(product_id)
        product = self.products.get(product_id)
        if product is None:
            raise NotFoundError("Product not found", details={"productId": str(product_id)})
        return product
