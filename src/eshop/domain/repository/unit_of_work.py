"""Abstract unit of work — the transaction scope of the domain.

Everything staged through the repositories of one unit of work is
published together by ``commit()``, or discarded together when the
``with`` block ends without a commit::

    with uow_factory() as uow:
        product = uow.products.get_for_update("p-1")
        ...
        uow.commit()

Row locks taken with ``products.get_for_update`` are held until the
block ends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.repository.cart_repository import CartRepository
from eshop.domain.repository.order_repository import OrderRepository
from eshop.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    carts: CartRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self.close()

    @abstractmethod
    def commit(self) -> None:
        """Publish every staged change atomically.

        Raises PersistenceFailure if the storage layer fails; nothing is
        published in that case.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard staged changes. A no-op after a successful commit."""

    def close(self) -> None:
        """Release any resources (row locks) held by this unit of work."""
