"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is restocked outside this system and drawn down
only by the inventory ledger when an order is placed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from eshop.domain.exceptions import InsufficientStock, ValidationError
from eshop.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is never negative (enforced by ``Money``)
    """

    id: str
    title: str
    price: Money
    stock: int
    description: str = ""
    thumbnail: str | None = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(
                f"Stock for product '{self.title}' cannot be negative, got {self.stock}"
            )

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock.

        Only the inventory ledger calls this, while it holds the
        product's row lock.
        """
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if not self.has_stock_for(quantity):
            raise InsufficientStock(self.id, self.title, self.stock, quantity)
        self.stock -= quantity

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because order items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
