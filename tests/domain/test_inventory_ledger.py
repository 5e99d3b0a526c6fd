"""Unit tests for the InventoryLedger domain service."""

import pytest

from eshop.domain.exceptions import InsufficientStock, ProductNotFound
from eshop.domain.model.product import Product
from eshop.domain.model.value_objects import Money
from eshop.domain.service.inventory_ledger import InventoryLedger
from tests.fakes import FakeProductRepository


def _make_repo(*rows: tuple[str, str, str, int]) -> FakeProductRepository:
    """Create repo with (product_id, title, price, stock) tuples."""
    return FakeProductRepository({
        pid: Product(id=pid, title=title, price=Money.of(price), stock=stock)
        for pid, title, price, stock in rows
    })


class TestReserve:

    def test_decrements_all_products(self):
        repo = _make_repo(("A", "Laptop", "999.99", 10), ("B", "Mouse", "29.99", 50))

        prices = InventoryLedger(repo).reserve({"A": 2, "B": 5})

        assert repo.get_by_id("A").stock == 8
        assert repo.get_by_id("B").stock == 45
        assert prices == {"A": Money.of("999.99"), "B": Money.of("29.99")}

    def test_exact_stock_can_be_reserved(self):
        repo = _make_repo(("A", "Laptop", "999.99", 2))
        InventoryLedger(repo).reserve({"A": 2})
        assert repo.get_by_id("A").stock == 0

    def test_insufficient_stock_rejected(self):
        repo = _make_repo(("A", "Keyboard", "149.99", 1))

        with pytest.raises(InsufficientStock) as exc_info:
            InventoryLedger(repo).reserve({"A": 2})

        assert str(exc_info.value) == (
            "Insufficient stock for product 'Keyboard'. Available: 1, requested: 2"
        )

    def test_missing_product_rejected(self):
        repo = _make_repo()
        with pytest.raises(ProductNotFound, match="Product ghost not found"):
            InventoryLedger(repo).reserve({"ghost": 1})

    def test_no_partial_reservation_on_failure(self):
        """If A passes but B fails, A must not be decremented."""
        repo = _make_repo(("A", "Laptop", "999.99", 10), ("B", "Mouse", "29.99", 1))

        with pytest.raises(InsufficientStock):
            InventoryLedger(repo).reserve({"A": 2, "B": 5})

        assert repo.get_by_id("A").stock == 10
        assert repo.get_by_id("B").stock == 1

    def test_fails_on_first_problem_in_request_order(self):
        repo = _make_repo(("A", "Laptop", "999.99", 0))
        # "ghost" is checked first because it was requested first.
        with pytest.raises(ProductNotFound):
            InventoryLedger(repo).reserve({"ghost": 1, "A": 1})

    def test_locks_rows_in_sorted_order(self):
        repo = _make_repo(("A", "Laptop", "1", 5), ("B", "Mouse", "1", 5), ("C", "Pad", "1", 5))
        InventoryLedger(repo).reserve({"C": 1, "A": 1, "B": 1})
        assert repo.locked == ["A", "B", "C"]
