"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Stage a new order; its ID is assigned when the unit of work commits."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return every order placed by the user, in no particular order."""
