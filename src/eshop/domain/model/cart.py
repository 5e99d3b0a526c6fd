"""Cart aggregate — a user's pre-order state.

Carts are filled elsewhere; the order workflow only reads the current
cart and clears it once an order has been placed.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CartItem:
    product_id: str
    quantity: int = 1


@dataclass
class Cart:

    id: int
    user_id: str
    items: list[CartItem] = field(default_factory=list)

    def clear(self) -> None:
        self.items = []
