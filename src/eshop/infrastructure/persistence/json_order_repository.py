"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from eshop.domain.model.order import Address, Customer, Order, OrderItem
from eshop.domain.model.value_objects import Money, Quantity
from eshop.domain.repository.order_repository import OrderRepository
from eshop.infrastructure.persistence.json_store import JsonStore


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._pending: list[Order] = []

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        self._pending.append(order)

    def list_for_user(self, user_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._store.read("orders")
            if raw["user_id"] == user_id
        ]

    # --- Unit of work hooks ---------------------------------------------------

    @property
    def has_changes(self) -> bool:
        return bool(self._pending)

    def apply(self, records: list[dict]) -> list[dict]:
        """Append the pending orders, numbering them after the last stored ID."""
        next_id = max((raw["id"] for raw in records), default=0) + 1
        merged = list(records)
        for order in self._pending:
            order.id = next_id
            next_id += 1
            merged.append(self._to_raw(order))
        return merged

    def discard(self, unassign: bool = False) -> None:
        if unassign:
            for order in self._pending:
                order.id = None
        self._pending.clear()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "customer": {
                "first_name": order.customer.first_name,
                "last_name": order.customer.last_name,
                "email": order.customer.email,
            },
            "address": {
                "street": order.address.street,
                "city": order.address.city,
                "zip": order.address.zip,
            },
            "total": str(order.total.amount),
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            customer=Customer(**raw["customer"]),
            address=Address(**raw["address"]),
            total=Money(Decimal(raw["total"])),
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
