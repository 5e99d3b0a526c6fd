"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in dicts. No file I/O, no locking, no side effects.

A ``FakeDatabase`` holds the committed state; each ``FakeUnitOfWork``
works on a deep copy of it and only writes back on ``commit()``.
"""

from __future__ import annotations

import copy

from eshop.domain.exceptions import EntityNotFoundError, PersistenceFailure
from eshop.domain.model.cart import Cart
from eshop.domain.model.order import Order
from eshop.domain.model.product import Product
from eshop.domain.repository.cart_repository import CartRepository
from eshop.domain.repository.order_repository import OrderRepository
from eshop.domain.repository.product_repository import ProductRepository
from eshop.domain.repository.unit_of_work import UnitOfWork


class FakeProductRepository(ProductRepository):

    def __init__(self, products: dict[str, Product]) -> None:
        self._store = products
        self.locked: list[str] = []

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_for_update(self, product_id: str) -> Product | None:
        self.locked.append(product_id)
        return self._store.get(product_id)

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: dict[int, Order]) -> None:
        self._store = orders
        self.pending: list[Order] = []

    def add(self, order: Order) -> None:
        self.pending.append(order)

    def list_for_user(self, user_id: str) -> list[Order]:
        return [o for o in self._store.values() if o.user_id == user_id]


class FakeCartRepository(CartRepository):

    def __init__(self, carts: dict[int, Cart]) -> None:
        self._store = carts

    def current_cart(self, user_id: str) -> Cart | None:
        for cart in self._store.values():
            if cart.user_id == user_id:
                return cart
        return None

    def clear(self, cart_id: int) -> None:
        if cart_id not in self._store:
            raise EntityNotFoundError(f"Cart #{cart_id} not found")
        self._store[cart_id].clear()

    def save(self, cart: Cart) -> None:
        self._store[cart.id] = cart


class FakeDatabase:

    def __init__(
        self,
        products: list[Product] | None = None,
        carts: list[Cart] | None = None,
    ) -> None:
        self.products: dict[str, Product] = {p.id: p for p in products or []}
        self.orders: dict[int, Order] = {}
        self.carts: dict[int, Cart] = {c.id: c for c in carts or []}
        self.fail_on_commit = False
        self.commits = 0
        self.rollbacks = 0

    def unit_of_work(self) -> FakeUnitOfWork:
        return FakeUnitOfWork(self)


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db
        self._committed = False
        self.products = FakeProductRepository(copy.deepcopy(db.products))
        self.orders = FakeOrderRepository(copy.deepcopy(db.orders))
        self.carts = FakeCartRepository(copy.deepcopy(db.carts))

    def commit(self) -> None:
        if self._db.fail_on_commit:
            raise PersistenceFailure("Simulated storage failure")
        next_id = max(self._db.orders, default=0) + 1
        for order in self.orders.pending:
            order.id = next_id
            self.orders._store[next_id] = order
            next_id += 1
        self.orders.pending.clear()
        self._db.products = self.products._store
        self._db.orders = self.orders._store
        self._db.carts = self.carts._store
        self._db.commits += 1
        self._committed = True

    def rollback(self) -> None:
        if not self._committed:
            self._db.rollbacks += 1
