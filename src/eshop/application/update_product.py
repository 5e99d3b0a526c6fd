"""Application service: Update Product use case."""

from __future__ import annotations

from typing import Callable

import structlog

from eshop.application.show_product import PRODUCT_NOT_FOUND
from eshop.domain.exceptions import EntityNotFoundError
from eshop.domain.model.value_objects import Money
from eshop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str, new_price: str) -> None:
        """Update a product's price.

        This does NOT affect any existing orders — their items captured a
        price snapshot at creation time.
        """
        with self._uow_factory() as uow:
            product = uow.products.get_for_update(product_id)
            if product is None:
                raise EntityNotFoundError(PRODUCT_NOT_FOUND)

            old_price = product.price
            product.update_price(Money.of(new_price))
            uow.products.save(product)
            uow.commit()

        logger.info(
            "Product price updated",
            product_id=product_id,
            old_price=str(old_price),
            new_price=str(product.price),
        )
