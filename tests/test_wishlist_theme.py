# tests/test_wishlist_theme.py
"""
Tests de la lista de deseos, el tema y el token de sesión persistidos.
"""

from conftest import make_product
from storefront.services.theme_service import ThemeService
from storefront.services.wishlist_service import WishlistService


async def test_wishlist_add_is_idempotent(storage):
    wishlist = WishlistService(storage)
    await wishlist.load()
    product = make_product("p1")

    await wishlist.add(product)
    await wishlist.add(product)

    assert len(wishlist) == 1
    assert wishlist.contains("p1")
    assert not wishlist.contains("p2")


async def test_wishlist_remove_and_toggle(storage):
    wishlist = WishlistService(storage)
    await wishlist.load()
    product = make_product("p1")

    assert await wishlist.toggle(product) is True
    assert await wishlist.toggle(product) is False
    assert len(wishlist) == 0

    await wishlist.add(product)
    await wishlist.remove("p1")
    await wishlist.remove("p1")
    assert not wishlist.contains("p1")


async def test_wishlist_survives_reload(storage):
    wishlist = WishlistService(storage)
    await wishlist.load()
    await wishlist.add(make_product("p1", price=2500, rating=4.5))

    reloaded = WishlistService(storage)
    await reloaded.load()
    assert reloaded.items[0].price == 2500
    assert reloaded.items[0].rating == 4.5


async def test_theme_defaults_to_dark_and_toggles(storage):
    theme = ThemeService(storage)
    await theme.load()
    assert theme.is_dark is True

    assert await theme.toggle() is False

    reloaded = ThemeService(storage)
    await reloaded.load()
    assert reloaded.is_dark is False


async def test_token_store_keys_are_independent(storage, token_store):
    wishlist = WishlistService(storage)
    await wishlist.load()
    await wishlist.add(make_product("p1"))
    await token_store.set("abc123")

    await token_store.clear()

    assert await token_store.get() is None
    assert await storage.get("wishlist-storage") is not None
