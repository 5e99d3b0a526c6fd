"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its items. Items refer to
products by id only; nothing on the product side points back at orders.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from eshop.domain.exceptions import ValidationError
from eshop.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Customer:
    first_name: str
    last_name: str
    email: str

    def violations(self) -> list[str]:
        errors = []
        if not (self.first_name or "").strip():
            errors.append("Customer first name can't be blank")
        if not (self.last_name or "").strip():
            errors.append("Customer last name can't be blank")
        email = (self.email or "").strip()
        if not email:
            errors.append("Customer email can't be blank")
        elif "@" not in email:
            errors.append("Customer email is invalid")
        return errors


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    zip: str

    def violations(self) -> list[str]:
        errors = []
        if not (self.street or "").strip():
            errors.append("Address street can't be blank")
        if not (self.city or "").strip():
            errors.append("Address city can't be blank")
        if not (self.zip or "").strip():
            errors.append("Address zip can't be blank")
        return errors


@dataclass(frozen=True)
class OrderItem:
    """Captures the price of a product at order-creation time.

    Frozen: neither ``quantity`` nor ``unit_price`` changes after the
    order is placed, whatever happens to the product's price later.
    """

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.build()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    customer: Customer
    address: Address
    total: Money
    items: list[OrderItem]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def build(
        user_id: str,
        customer: Customer,
        address: Address,
        declared_total: Decimal | str | float | None,
        line_items: Iterable[tuple[str, int, Money]],
        verify_total: bool = True,
    ) -> Order:
        """Create a new order from ``(product_id, quantity, unit_price)`` tuples.

        Repeated product ids collapse into one item with the quantities
        summed. Every violated rule is collected and raised together in a
        single ``ValidationError``.

        With ``verify_total`` the declared total must match the sum of the
        line items; without it the declared total is taken as supplied.
        """
        errors = customer.violations() + address.violations()

        merged: dict[str, tuple[int, Money]] = {}
        for product_id, quantity, unit_price in line_items:
            if product_id in merged:
                quantity += merged[product_id][0]
            merged[product_id] = (quantity, unit_price)

        if not merged:
            errors.append("Order must contain at least one item")

        items: list[OrderItem] = []
        for product_id, (quantity, unit_price) in merged.items():
            if unit_price.is_zero:
                errors.append(f"Unit price for product {product_id} must be greater than 0")
                continue
            try:
                items.append(OrderItem(product_id, Quantity(quantity), unit_price))
            except ValidationError as exc:
                errors.append(f"Quantity for product {product_id}: {exc}")

        computed = Money.zero()
        for item in items:
            computed = computed + item.line_total

        total = computed
        if declared_total is not None:
            try:
                declared = Money.of(declared_total)
            except ValidationError as exc:
                errors.extend(f"Total: {message}" for message in exc.messages)
            else:
                if not verify_total:
                    total = declared
                elif declared.quantized() != computed.quantized():
                    errors.append(
                        f"Total {declared} does not match the sum of the line items {computed}"
                    )

        if errors:
            raise ValidationError(*errors)

        return Order(
            id=None,
            user_id=user_id,
            customer=customer,
            address=address,
            total=total,
            items=items,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
