"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def current_cart(self, user_id: str) -> Cart | None:
        """Return the user's cart, or None if they have none."""

    @abstractmethod
    def clear(self, cart_id: int) -> None:
        """Stage the removal of every item in the cart."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Stage a new or updated cart."""
