"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, product_id: str) -> Product | None:
        """Lock the product's row for the rest of the unit of work, then
        return its current state (or None if it does not exist).

        Other units of work asking for the same row block until this one
        commits or rolls back.
        """

    @abstractmethod
    def save(self, product: Product) -> None:
        """Stage a new or updated product for the next commit."""
