import pytest

from eshop.domain.model.cart import Cart, CartItem
from eshop.domain.model.product import Product
from eshop.domain.model.value_objects import Money
from eshop.infrastructure.persistence.json_store import JsonStore
from eshop.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from tests.infrastructure.seeding import seed


@pytest.fixture()
def store(tmp_path) -> JsonStore:
    store = JsonStore(tmp_path / "data")
    seed(
        store,
        products=[
            Product(id="laptop-1", title="Laptop", price=Money.of("999.99"), stock=10,
                    tags=["electronics", "computers"]),
            Product(id="mouse-1", title="Mouse", price=Money.of("29.99"), stock=50),
            Product(id="keyboard-1", title="Keyboard", price=Money.of("149.99"), stock=0),
        ],
        carts=[Cart(id=1, user_id="u-1", items=[CartItem("laptop-1"), CartItem("mouse-1", 2)])],
    )
    return store


@pytest.fixture()
def uow_factory(store):
    return lambda: JsonUnitOfWork(store)
