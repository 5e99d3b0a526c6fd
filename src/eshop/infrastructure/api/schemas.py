"""Pydantic request/response schemas for the HTTP API.

These are external contracts — separate from the application DTOs.
Keys are camelCase on the wire; snake_case names are accepted on input too.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eshop.application.dto import (
    AddressDetails,
    CustomerDetails,
    OrderDTO,
    PlaceOrderRequest,
    ProductDTO,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CustomerSchema(CamelModel):
    # Blank fields are reported by the Order aggregate together with every
    # other violation, so nothing is required here.
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class AddressSchema(CamelModel):
    street: str = ""
    city: str = ""
    zip: str = ""


# ---------------------------------------------------------------------------
# Order placement
# ---------------------------------------------------------------------------
class OrderItemRefSchema(BaseModel):
    """One unit of a product. Catalog fields sent along are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)


class PlaceOrderSchema(BaseModel):
    customer: CustomerSchema = Field(default_factory=CustomerSchema)
    address: AddressSchema = Field(default_factory=AddressSchema)
    total: Decimal | None = None
    items: list[OrderItemRefSchema] = Field(default_factory=list)

    def to_request(self) -> PlaceOrderRequest:
        return PlaceOrderRequest(
            customer=CustomerDetails(
                first_name=self.customer.first_name,
                last_name=self.customer.last_name,
                email=self.customer.email,
            ),
            address=AddressDetails(
                street=self.address.street,
                city=self.address.city,
                zip=self.address.zip,
            ),
            item_ids=[item.id for item in self.items],
            total=self.total,
        )


class PlaceOrderBody(BaseModel):
    order: PlaceOrderSchema

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order": {
                        "customer": {
                            "firstName": "Mario",
                            "lastName": "Rossi",
                            "email": "mario@example.com",
                        },
                        "address": {"street": "Via Roma 1", "city": "Milano", "zip": "20100"},
                        "total": 1029.98,
                        "items": [{"id": "laptop-1"}, {"id": "mouse-1"}],
                    }
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class ProductResponse(CamelModel):
    id: str
    title: str
    price: float
    stock: int
    description: str
    thumbnail: str | None
    tags: list[str]
    created_at: datetime

    @staticmethod
    def from_dto(dto: ProductDTO) -> ProductResponse:
        return ProductResponse(
            id=dto.id,
            title=dto.title,
            price=float(dto.price),
            stock=dto.stock,
            description=dto.description,
            thumbnail=dto.thumbnail,
            tags=dto.tags,
            created_at=dto.created_at,
        )


class OrderItemResponse(CamelModel):
    product_id: str
    quantity: int
    unit_price: float
    product: ProductResponse | None = None


class OrderResponse(CamelModel):
    id: int
    user_id: str
    customer: CustomerSchema
    address: AddressSchema
    total: float
    created_at: datetime
    order_items: list[OrderItemResponse]

    @staticmethod
    def from_dto(dto: OrderDTO) -> OrderResponse:
        return OrderResponse(
            id=dto.id,
            user_id=dto.user_id,
            customer=CustomerSchema(
                first_name=dto.customer.first_name,
                last_name=dto.customer.last_name,
                email=dto.customer.email,
            ),
            address=AddressSchema(
                street=dto.address.street,
                city=dto.address.city,
                zip=dto.address.zip,
            ),
            total=float(dto.total),
            created_at=dto.created_at,
            order_items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=float(item.unit_price),
                    product=ProductResponse.from_dto(item.product) if item.product else None,
                )
                for item in dto.items
            ],
        )
