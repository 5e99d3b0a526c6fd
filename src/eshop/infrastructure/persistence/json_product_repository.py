"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from eshop.domain.model.product import Product
from eshop.domain.model.value_objects import Money
from eshop.domain.repository.product_repository import ProductRepository
from eshop.infrastructure.persistence.json_store import JsonStore
from eshop.infrastructure.persistence.locking import HeldLocks


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonStore, locks: HeldLocks) -> None:
        self._store = store
        self._locks = locks
        self._staged: dict[str, Product] = {}

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        if product_id in self._staged:
            return self._staged[product_id]
        for raw in self._store.read("products"):
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_for_update(self, product_id: str) -> Product | None:
        # Read only once the lock is ours, so the stock seen is the latest
        # committed value.
        self._locks.acquire(("product", product_id))
        return self.get_by_id(product_id)

    def save(self, product: Product) -> None:
        self._staged[product.id] = product

    # --- Unit of work hooks ---------------------------------------------------

    @property
    def has_changes(self) -> bool:
        return bool(self._staged)

    def apply(self, records: list[dict]) -> list[dict]:
        """Merge the staged products into the committed records (upsert)."""
        pending = dict(self._staged)
        merged = []
        for raw in records:
            product = pending.pop(raw["id"], None)
            merged.append(self._to_raw(product) if product is not None else raw)
        merged.extend(self._to_raw(product) for product in pending.values())
        return merged

    def discard(self) -> None:
        self._staged.clear()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "price": str(product.price.amount),
            "stock": product.stock,
            "description": product.description,
            "thumbnail": product.thumbnail,
            "tags": list(product.tags),
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        product = Product(
            id=raw["id"],
            title=raw["title"],
            price=Money(Decimal(raw["price"])),
            stock=raw["stock"],
            description=raw.get("description", ""),
            thumbnail=raw.get("thumbnail"),
            tags=list(raw.get("tags", [])),
        )
        if "created_at" in raw:
            product.created_at = datetime.fromisoformat(raw["created_at"])
        return product
