"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI / HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from eshop.domain.model.order import Order
from eshop.domain.model.product import Product


@dataclass(frozen=True)
class CustomerDetails:
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class AddressDetails:
    street: str
    city: str
    zip: str


@dataclass(frozen=True)
class PlaceOrderRequest:
    """Input: what the customer submitted at checkout.

    ``item_ids`` holds one product id per unit, so a product ordered
    twice appears twice.
    """

    customer: CustomerDetails
    address: AddressDetails
    item_ids: list[str] = field(default_factory=list)
    total: Decimal | str | None = None


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as shown in the catalog and inside orders."""

    id: str
    title: str
    price: Decimal
    stock: int
    description: str
    thumbnail: str | None
    tags: list[str]
    created_at: datetime

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            title=product.title,
            price=product.price.amount,
            stock=product.stock,
            description=product.description,
            thumbnail=product.thumbnail,
            tags=list(product.tags),
            created_at=product.created_at,
        )


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item."""

    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    product: ProductDTO | None = None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: int
    user_id: str
    customer: CustomerDetails
    address: AddressDetails
    total: Decimal
    created_at: datetime
    items: list[OrderItemDTO]

    @staticmethod
    def from_order(order: Order, products: dict[str, Product | None] | None = None) -> OrderDTO:
        """Map an order; ``products`` supplies the product summaries, if any."""
        products = products or {}
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            customer=CustomerDetails(
                first_name=order.customer.first_name,
                last_name=order.customer.last_name,
                email=order.customer.email,
            ),
            address=AddressDetails(
                street=order.address.street,
                city=order.address.city,
                zip=order.address.zip,
            ),
            total=order.total.amount,
            created_at=order.created_at,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    line_total=item.line_total.amount,
                    product=(
                        ProductDTO.from_product(products[item.product_id])
                        if products.get(item.product_id) is not None
                        else None
                    ),
                )
                for item in order.items
            ],
        )
