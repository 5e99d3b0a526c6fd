"""Application service: Place Order use case.

Orchestrates the inventory ledger, the Order aggregate and the cart
store inside a single unit of work. Either the stock decrement, the
order insert and the cart clear are all committed, or none of them is.

A placement moves through these states::

    RECEIVED -> AGGREGATING -> RESERVING -> PERSISTING -> CART_CLEARING -> COMPLETED

and drops to FAILED from any of them on error.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import structlog

from eshop.application.dto import OrderDTO, PlaceOrderRequest
from eshop.domain.model.order import Address, Customer, Order
from eshop.domain.repository.unit_of_work import UnitOfWork
from eshop.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class PlacementState(Enum):
    RECEIVED = "RECEIVED"
    AGGREGATING = "AGGREGATING"
    RESERVING = "RESERVING"
    PERSISTING = "PERSISTING"
    CART_CLEARING = "CART_CLEARING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


_NEXT_STATE = {
    PlacementState.RECEIVED: PlacementState.AGGREGATING,
    PlacementState.AGGREGATING: PlacementState.RESERVING,
    PlacementState.RESERVING: PlacementState.PERSISTING,
    PlacementState.PERSISTING: PlacementState.CART_CLEARING,
    PlacementState.CART_CLEARING: PlacementState.COMPLETED,
}


@dataclass
class Placement:
    """Tracks where a single placement request is in the workflow."""

    user_id: str
    state: PlacementState = PlacementState.RECEIVED
    reason: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in (PlacementState.COMPLETED, PlacementState.FAILED)

    def advance(self, to: PlacementState) -> None:
        if _NEXT_STATE.get(self.state) is not to:
            raise RuntimeError(
                f"Illegal placement transition {self.state.value} -> {to.value}"
            )
        logger.debug("Placement advanced", user_id=self.user_id, state=to.value)
        self.state = to

    def fail(self, reason: str) -> None:
        if self.is_terminal:
            raise RuntimeError(f"Placement already {self.state.value}")
        logger.info(
            "Placement failed",
            user_id=self.user_id,
            failed_in=self.state.value,
            reason=reason,
        )
        self.state = PlacementState.FAILED
        self.reason = reason


def aggregate_quantities(item_ids: list[str]) -> dict[str, int]:
    """Count references per product id, keeping first-seen order."""
    return dict(Counter(item_ids))


class PlaceOrderHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        verify_total: bool = True,
    ) -> None:
        self._uow_factory = uow_factory
        self._verify_total = verify_total

    def handle(self, user_id: str, request: PlaceOrderRequest) -> OrderDTO:
        """Place an order for ``user_id``.

        Raises:
            ProductNotFound, InsufficientStock: a product cannot be reserved.
            ValidationError: the order is invalid; every violation is listed.
            PersistenceFailure: the commit failed.

        Nothing is written in any of those cases.
        """
        placement = Placement(user_id=user_id)
        try:
            return self._run(placement, request)
        except Exception as exc:
            if not placement.is_terminal:
                placement.fail(str(exc) or type(exc).__name__)
            raise

    def _run(self, placement: Placement, request: PlaceOrderRequest) -> OrderDTO:
        placement.advance(PlacementState.AGGREGATING)
        quantities = aggregate_quantities(request.item_ids)

        with self._uow_factory() as uow:
            placement.advance(PlacementState.RESERVING)
            prices = InventoryLedger(uow.products).reserve(quantities)

            placement.advance(PlacementState.PERSISTING)
            order = Order.build(
                user_id=placement.user_id,
                customer=Customer(
                    first_name=request.customer.first_name,
                    last_name=request.customer.last_name,
                    email=request.customer.email,
                ),
                address=Address(
                    street=request.address.street,
                    city=request.address.city,
                    zip=request.address.zip,
                ),
                declared_total=request.total,
                line_items=[
                    (product_id, quantity, prices[product_id])
                    for product_id, quantity in quantities.items()
                ],
                verify_total=self._verify_total,
            )
            uow.orders.add(order)

            placement.advance(PlacementState.CART_CLEARING)
            cart = uow.carts.current_cart(placement.user_id)
            if cart is not None:
                uow.carts.clear(cart.id)

            products = {
                product_id: uow.products.get_by_id(product_id) for product_id in quantities
            }
            uow.commit()

        placement.advance(PlacementState.COMPLETED)
        logger.info(
            "Order placed",
            user_id=placement.user_id,
            order_id=order.id,
            total=str(order.total),
            items=order.item_count,
        )
        return OrderDTO.from_order(order, products)
