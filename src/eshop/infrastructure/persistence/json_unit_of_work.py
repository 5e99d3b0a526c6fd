"""JSON-file-backed implementation of UnitOfWork."""

from __future__ import annotations

import structlog

from eshop.domain.repository.unit_of_work import UnitOfWork
from eshop.infrastructure.persistence.json_cart_repository import JsonCartRepository
from eshop.infrastructure.persistence.json_order_repository import JsonOrderRepository
from eshop.infrastructure.persistence.json_product_repository import JsonProductRepository
from eshop.infrastructure.persistence.json_store import JsonStore
from eshop.infrastructure.persistence.locking import HeldLocks

logger = structlog.get_logger(__name__)


class JsonUnitOfWork(UnitOfWork):
    """Stages changes in memory and writes them on commit.

    Row locks are per-process: every unit of work sharing a ``JsonStore``
    instance is serialized on the rows it locks.
    """

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._locks = HeldLocks(store.row_locks)
        self.products = JsonProductRepository(store, self._locks)
        self.orders = JsonOrderRepository(store)
        self.carts = JsonCartRepository(store)

    def commit(self) -> None:
        with self._store.commit_lock:
            collections: dict[str, list[dict]] = {}
            try:
                if self.products.has_changes:
                    collections["products"] = self.products.apply(self._store.read("products"))
                if self.orders.has_changes:
                    collections["orders"] = self.orders.apply(self._store.read("orders"))
                if self.carts.has_changes:
                    collections["carts"] = self.carts.apply(self._store.read("carts"))
                self._store.write(collections)
            except Exception:
                logger.error("Commit failed", collections=sorted(collections), exc_info=True)
                self.orders.discard(unassign=True)
                raise

        self._discard()

    def rollback(self) -> None:
        self._discard()

    def close(self) -> None:
        self._locks.release_all()

    def _discard(self) -> None:
        self.products.discard()
        self.orders.discard()
        self.carts.discard()
