"""Tests for the JSON-backed unit of work and its repositories."""

import json

import pytest

from eshop.domain.exceptions import EntityNotFoundError, PersistenceFailure
from eshop.domain.model.order import Address, Customer, Order
from eshop.domain.model.value_objects import Money
from eshop.infrastructure.persistence.json_store import JsonStore
from eshop.infrastructure.persistence.locking import HeldLocks, RowLocks


def _order(user_id: str = "u-1") -> Order:
    return Order.build(
        user_id=user_id,
        customer=Customer("Mario", "Rossi", "mario@example.com"),
        address=Address("Via Roma 1", "Milano", "20100"),
        declared_total=None,
        line_items=[("mouse-1", 2, Money.of("29.99"))],
    )


def _stock(store: JsonStore, product_id: str) -> int:
    return next(p["stock"] for p in store.read("products") if p["id"] == product_id)


class TestJsonStore:

    def test_creates_empty_document(self, tmp_path):
        JsonStore(tmp_path / "fresh")
        document = json.loads((tmp_path / "fresh" / "store.json").read_text())
        assert document == {"products": [], "orders": [], "carts": []}

    def test_corrupt_document_is_a_persistence_failure(self, store, tmp_path):
        (tmp_path / "data" / "store.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceFailure, match="store.json"):
            store.read("orders")

    def test_failed_write_leaves_file_untouched(self, store, tmp_path, monkeypatch):
        before = (tmp_path / "data" / "store.json").read_text()

        def full_disk(path, text):
            raise OSError("disk full")

        monkeypatch.setattr(store, "_replace", full_disk)
        with pytest.raises(PersistenceFailure, match="disk full"):
            store.write({"orders": [{"id": 1}]})

        assert (tmp_path / "data" / "store.json").read_text() == before


class TestRowLocks:

    def test_released_rows_are_forgotten(self):
        row_locks = RowLocks()
        for n in range(50):
            held = HeldLocks(row_locks)
            held.acquire(("product", f"missing-{n}"))
            held.release_all()
        assert row_locks._locks == {}

    def test_reacquiring_a_held_row_does_not_block(self):
        row_locks = RowLocks()
        held = HeldLocks(row_locks)
        held.acquire("a")
        held.acquire("a")
        held.release_all()
        assert row_locks._locks == {}

    def test_unit_of_work_releases_its_rows(self, store, uow_factory):
        with uow_factory() as uow:
            uow.products.get_for_update("mouse-1")
            uow.products.get_for_update("ghost")
            assert len(store.row_locks._locks) == 2
        assert store.row_locks._locks == {}


class TestCommitAndRollback:

    def test_commit_publishes_everything(self, store, uow_factory):
        with uow_factory() as uow:
            product = uow.products.get_for_update("mouse-1")
            product.decrement_stock(2)
            uow.products.save(product)
            uow.orders.add(_order())
            uow.carts.clear(1)
            uow.commit()

        assert _stock(store, "mouse-1") == 48
        assert len(store.read("orders")) == 1
        assert store.read("carts")[0]["items"] == []

    def test_leaving_without_commit_discards(self, store, uow_factory):
        with uow_factory() as uow:
            product = uow.products.get_for_update("mouse-1")
            product.decrement_stock(2)
            uow.products.save(product)
            uow.orders.add(_order())

        assert _stock(store, "mouse-1") == 50
        assert store.read("orders") == []

    def test_exception_discards(self, store, uow_factory):
        with pytest.raises(RuntimeError):
            with uow_factory() as uow:
                uow.carts.clear(1)
                raise RuntimeError("boom")

        assert len(store.read("carts")[0]["items"]) == 2

    def test_staged_changes_visible_inside_the_unit_of_work(self, uow_factory):
        with uow_factory() as uow:
            product = uow.products.get_for_update("mouse-1")
            product.decrement_stock(5)
            uow.products.save(product)
            assert uow.products.get_by_id("mouse-1").stock == 45

    def test_order_ids_assigned_on_commit(self, uow_factory):
        first, second = _order(), _order()
        with uow_factory() as uow:
            uow.orders.add(first)
            uow.orders.add(second)
            assert first.id is None
            uow.commit()

        assert (first.id, second.id) == (1, 2)

        third = _order()
        with uow_factory() as uow:
            uow.orders.add(third)
            uow.commit()
        assert third.id == 3

    def test_write_failure_changes_nothing(self, store, uow_factory, monkeypatch):
        def full_disk(path, text):
            raise OSError("disk full")

        monkeypatch.setattr(store, "_replace", full_disk)
        order = _order()

        with pytest.raises(PersistenceFailure, match="disk full"):
            with uow_factory() as uow:
                product = uow.products.get_for_update("mouse-1")
                product.decrement_stock(2)
                uow.products.save(product)
                uow.orders.add(order)
                uow.carts.clear(1)
                uow.commit()

        assert _stock(store, "mouse-1") == 50
        assert store.read("orders") == []
        assert len(store.read("carts")[0]["items"]) == 2
        assert order.id is None

    def test_malformed_records_unassign_order_ids(self, store, uow_factory, monkeypatch):
        original_read = store.read

        def read(name):
            return [{"user_id": "u-9"}] if name == "orders" else original_read(name)

        monkeypatch.setattr(store, "read", read)
        order = _order()

        with pytest.raises(KeyError):
            with uow_factory() as uow:
                uow.orders.add(order)
                uow.commit()

        assert order.id is None
        assert original_read("orders") == []


class TestRepositories:

    def test_product_round_trip(self, uow_factory):
        with uow_factory() as uow:
            laptop = uow.products.get_by_id("laptop-1")
        assert laptop.title == "Laptop"
        assert laptop.price == Money.of("999.99")
        assert laptop.tags == ["electronics", "computers"]

    def test_missing_product(self, uow_factory):
        with uow_factory() as uow:
            assert uow.products.get_by_id("ghost") is None
            assert uow.products.get_for_update("ghost") is None

    def test_order_round_trip(self, uow_factory):
        order = _order()
        with uow_factory() as uow:
            uow.orders.add(order)
            uow.commit()

        with uow_factory() as uow:
            (loaded,) = uow.orders.list_for_user("u-1")
            assert uow.orders.list_for_user("u-2") == []

        assert loaded.id == order.id
        assert loaded.customer == order.customer
        assert loaded.address == order.address
        assert loaded.items == order.items
        assert loaded.total == order.total
        assert loaded.created_at == order.created_at

    def test_current_cart(self, uow_factory):
        with uow_factory() as uow:
            cart = uow.carts.current_cart("u-1")
            assert uow.carts.current_cart("u-9") is None
        assert [(i.product_id, i.quantity) for i in cart.items] == [("laptop-1", 1), ("mouse-1", 2)]

    def test_clearing_unknown_cart(self, uow_factory):
        with uow_factory() as uow:
            with pytest.raises(EntityNotFoundError):
                uow.carts.clear(99)
