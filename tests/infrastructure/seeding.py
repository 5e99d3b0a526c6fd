"""Helpers for loading fixtures into a JSON store."""

from eshop.infrastructure.persistence.json_store import JsonStore
from eshop.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def seed(store: JsonStore, products=(), carts=()) -> None:
    with JsonUnitOfWork(store) as uow:
        for product in products:
            uow.products.save(product)
        for cart in carts:
            uow.carts.save(cart)
        uow.commit()
