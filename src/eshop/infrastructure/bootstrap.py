"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from eshop.application.list_orders import ListOrdersHandler
from eshop.application.place_order import PlaceOrderHandler
from eshop.application.show_product import ShowProductHandler
from eshop.application.update_product import UpdateProductHandler
from eshop.infrastructure.config import Settings
from eshop.infrastructure.persistence.json_store import JsonStore
from eshop.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@lru_cache
def settings() -> Settings:
    return Settings.from_env()


@lru_cache
def json_store(data_dir: Path) -> JsonStore:
    # One store per directory, so every unit of work shares its row locks.
    return JsonStore(data_dir)


def unit_of_work() -> JsonUnitOfWork:
    return JsonUnitOfWork(json_store(settings().data_dir))


def place_order_handler() -> PlaceOrderHandler:
    return PlaceOrderHandler(unit_of_work, verify_total=settings().verify_total)


def list_orders_handler() -> ListOrdersHandler:
    return ListOrdersHandler(unit_of_work)


def show_product_handler() -> ShowProductHandler:
    return ShowProductHandler(unit_of_work)


def update_product_handler() -> UpdateProductHandler:
    return UpdateProductHandler(unit_of_work)
