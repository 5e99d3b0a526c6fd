"""FastAPI routes — orders and the product read path.

Routes are plain ``def`` functions: FastAPI runs them in its thread pool,
so a placement waiting on a product's row lock never blocks the event
loop.
"""

from fastapi import APIRouter, Depends, Header, HTTPException

from eshop.application.list_orders import ListOrdersHandler
from eshop.application.place_order import PlaceOrderHandler
from eshop.application.show_product import ShowProductHandler
from eshop.infrastructure import bootstrap
from eshop.infrastructure.api.schemas import (
    OrderResponse,
    PlaceOrderBody,
    ProductResponse,
)


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Resolve the acting user from the ``X-User-Id`` header."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
def list_orders(
    user_id: str = Depends(current_user_id),
    handler: ListOrdersHandler = Depends(bootstrap.list_orders_handler),
) -> list[OrderResponse]:
    return [OrderResponse.from_dto(dto) for dto in handler.handle(user_id)]


@order_router.post("", status_code=201, response_model=OrderResponse)
def place_order(
    body: PlaceOrderBody,
    user_id: str = Depends(current_user_id),
    handler: PlaceOrderHandler = Depends(bootstrap.place_order_handler),
) -> OrderResponse:
    dto = handler.handle(user_id, body.order.to_request())
    return OrderResponse.from_dto(dto)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("/{product_id}", response_model=ProductResponse)
def show_product(
    product_id: str,
    handler: ShowProductHandler = Depends(bootstrap.show_product_handler),
) -> ProductResponse:
    return ProductResponse.from_dto(handler.handle(product_id))
