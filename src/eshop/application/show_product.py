"""Application service: Show Product use case (query)."""

from __future__ import annotations

from typing import Callable

from eshop.application.dto import ProductDTO
from eshop.domain.exceptions import EntityNotFoundError
from eshop.domain.repository.unit_of_work import UnitOfWork

PRODUCT_NOT_FOUND = "Product not found"


class ShowProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(PRODUCT_NOT_FOUND)
        return ProductDTO.from_product(product)
