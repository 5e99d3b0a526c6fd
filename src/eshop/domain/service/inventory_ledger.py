"""Domain service: Inventory Ledger.

The single source of truth for per-product stock while an order is being
placed. Reserving is all-or-nothing across every requested product.

The three-phase approach (lock, validate, mutate) ensures we never
leave stock partially reserved if one product fails validation, and that
two concurrent reservations for the last units of a product cannot both
see enough stock.
"""

from __future__ import annotations

import structlog

from eshop.domain.exceptions import InsufficientStock, ProductNotFound
from eshop.domain.model.product import Product
from eshop.domain.model.value_objects import Money
from eshop.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, requests: dict[str, int]) -> dict[str, Money]:
        """Decrement stock for every ``product_id -> quantity`` request.

        Returns the unit price of each product as read while its row was
        locked, keyed like ``requests``.

          Phase 1 — lock: take the row lock of every product, in sorted id
                    order so concurrent reservations cannot deadlock.
          Phase 2 — validate: walk the requests in their own order and
                    fail fast on the first missing or short product.
          Phase 3 — mutate: decrement and stage every product.

        The decrements only become visible when the surrounding unit of
        work commits.
        """
        # Phase 1: lock
        locked: dict[str, Product | None] = {}
        for product_id in sorted(requests):
            locked[product_id] = self._product_repo.get_for_update(product_id)

        # Phase 2: validate
        for product_id, quantity in requests.items():
            product = locked[product_id]
            if product is None:
                logger.info("Reservation rejected", product_id=product_id, reason="not_found")
                raise ProductNotFound(product_id)
            if not product.has_stock_for(quantity):
                logger.info(
                    "Reservation rejected",
                    product_id=product_id,
                    reason="insufficient_stock",
                    available=product.stock,
                    requested=quantity,
                )
                raise InsufficientStock(product_id, product.title, product.stock, quantity)

        # Phase 3: mutate
        prices: dict[str, Money] = {}
        for product_id, quantity in requests.items():
            product = locked[product_id]
            product.decrement_stock(quantity)
            self._product_repo.save(product)
            prices[product_id] = product.price

        logger.debug("Stock reserved", quantities=dict(requests))
        return prices
