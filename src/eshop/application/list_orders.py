"""Application service: List Orders use case (query)."""

from __future__ import annotations

from typing import Callable

from eshop.application.dto import OrderDTO
from eshop.domain.model.product import Product
from eshop.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, user_id: str) -> list[OrderDTO]:
        """Return the user's orders, newest first, with product summaries.

        Read-only: nothing is locked and nothing is committed.
        """
        with self._uow_factory() as uow:
            orders = uow.orders.list_for_user(user_id)
            products: dict[str, Product | None] = {}
            for order in orders:
                for item in order.items:
                    if item.product_id not in products:
                        products[item.product_id] = uow.products.get_by_id(item.product_id)

        orders.sort(key=lambda o: (o.created_at, o.id or 0), reverse=True)
        return [OrderDTO.from_order(order, products) for order in orders]
