# tests/test_cart_service.py
"""
Tests del carrito persistido.
"""

import json

import pytest

from conftest import make_product
from storefront.core.exceptions import StorageError, ValidationError
from storefront.db.storage import MemoryStorage
from storefront.services.cart_service import CartService


@pytest.fixture
async def cart(storage):
    service = CartService(storage)
    await service.load()
    return service


async def test_add_same_product_accumulates_quantity(cart):
    """Añadir N veces el mismo producto deja una sola línea con cantidad N."""
    product = make_product("p1", price=1000)
    for _ in range(4):
        await cart.add_item(product)

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 4
    assert cart.item_count() == 4


async def test_item_count_sums_quantities_not_lines(cart):
    await cart.add_item(make_product("p1"), quantity=2)
    await cart.add_item(make_product("p2"), quantity=3)

    assert len(cart.items) == 2
    assert cart.item_count() == 5


async def test_total_price_in_minor_units(cart):
    assert cart.total_price() == 0

    await cart.add_item(make_product("p1", price=1000))
    await cart.add_item(make_product("p2", price=2000), quantity=2)

    assert cart.total_price() == 5000


async def test_add_item_rejects_non_positive_quantity(cart):
    with pytest.raises(ValidationError):
        await cart.add_item(make_product("p1"), quantity=0)
    assert cart.is_empty


async def test_update_quantity_sets_value(cart):
    await cart.add_item(make_product("p1"))
    await cart.update_quantity("p1", 7)

    assert cart.items[0].quantity == 7


@pytest.mark.parametrize("quantity", [0, -1])
async def test_update_quantity_to_zero_or_less_removes_line(cart, quantity):
    await cart.add_item(make_product("p1"))
    await cart.add_item(make_product("p2"))

    await cart.update_quantity("p1", quantity)

    assert [item.id for item in cart.items] == ["p2"]
    assert all(item.quantity >= 1 for item in cart.items)


async def test_update_quantity_unknown_product_is_noop(cart, storage):
    await cart.update_quantity("missing", 3)
    assert cart.is_empty
    assert await storage.get("cart-storage") is None


async def test_remove_item(cart):
    await cart.add_item(make_product("p1"))

    assert await cart.remove_item("p1") is True
    assert await cart.remove_item("p1") is False
    assert cart.is_empty


async def test_clear_resets_count(cart):
    await cart.add_item(make_product("p1"), quantity=3)
    await cart.add_item(make_product("p2"))

    await cart.clear()

    assert cart.item_count() == 0
    assert cart.total_price() == 0


async def test_every_mutation_is_persisted(storage, cart):
    """El carrito se recupera tal cual desde el almacenamiento en una nueva instancia."""
    await cart.add_item(make_product("p1", price=1500), quantity=2)

    stored = json.loads(await storage.get("cart-storage"))
    assert stored["items"][0]["id"] == "p1"
    assert stored["items"][0]["quantity"] == 2

    reloaded = CartService(storage)
    await reloaded.load()
    assert reloaded.item_count() == 2
    assert reloaded.total_price() == 3000
    assert reloaded.items[0].image == "https://cdn.example.com/p1.jpg"


async def test_corrupt_document_loads_as_empty_cart():
    storage = MemoryStorage({"cart-storage": "{not json"})
    cart = CartService(storage)
    await cart.load()
    assert cart.is_empty


class FailingStorage(MemoryStorage):
    async def set(self, key, value):
        raise StorageError("disco lleno", key=key)


async def test_failed_write_leaves_memory_state_untouched():
    cart = CartService(FailingStorage())
    await cart.load()

    with pytest.raises(StorageError):
        await cart.add_item(make_product("p1"))

    assert cart.is_empty
