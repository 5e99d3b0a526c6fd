"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from eshop.domain.exceptions import EntityNotFoundError
from eshop.domain.model.cart import Cart, CartItem
from eshop.domain.repository.cart_repository import CartRepository
from eshop.infrastructure.persistence.json_store import JsonStore


class JsonCartRepository(CartRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._staged: dict[int, Cart] = {}

    # --- CartRepository interface ---------------------------------------------

    def current_cart(self, user_id: str) -> Cart | None:
        for cart in self._staged.values():
            if cart.user_id == user_id:
                return cart
        for raw in self._store.read("carts"):
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def clear(self, cart_id: int) -> None:
        cart = self._get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart #{cart_id} not found")
        cart.clear()
        self._staged[cart.id] = cart

    def save(self, cart: Cart) -> None:
        self._staged[cart.id] = cart

    # --- Unit of work hooks ---------------------------------------------------

    @property
    def has_changes(self) -> bool:
        return bool(self._staged)

    def apply(self, records: list[dict]) -> list[dict]:
        pending = dict(self._staged)
        merged = []
        for raw in records:
            cart = pending.pop(raw["id"], None)
            merged.append(self._to_raw(cart) if cart is not None else raw)
        merged.extend(self._to_raw(cart) for cart in pending.values())
        return merged

    def discard(self) -> None:
        self._staged.clear()

    # --- Internal helpers -----------------------------------------------------

    def _get_by_id(self, cart_id: int) -> Cart | None:
        if cart_id in self._staged:
            return self._staged[cart_id]
        for raw in self._store.read("carts"):
            if raw["id"] == cart_id:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {"product_id": item.product_id, "quantity": item.quantity}
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            id=raw["id"],
            user_id=raw["user_id"],
            items=[CartItem(i["product_id"], i.get("quantity", 1)) for i in raw["items"]],
        )
