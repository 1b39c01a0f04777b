# tests/test_storage.py
"""
Tests de los backends de almacenamiento y del contenedor de dependencias.
"""

import json

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from conftest import FakeBackend, make_product
from storefront.api.deps import StorefrontContext
from storefront.core.config import Settings
from storefront.core.exceptions import CorruptDocumentError, StorageError
from storefront.db.storage import JsonFileStorage, MemoryStorage, RedisStorage, create_storage
from storefront.services.cart_service import CartService


# ========================================
# FICHEROS JSON
# ========================================

async def test_file_storage_round_trip(tmp_path):
    storage = JsonFileStorage(tmp_path / "state")

    assert await storage.get("cart-storage") is None

    await storage.set("cart-storage", '{"items": []}')
    assert await storage.get("cart-storage") == '{"items": []}'
    assert storage.keys() == ["cart-storage"]
    assert not list((tmp_path / "state").glob("*.tmp"))

    await storage.delete("cart-storage")
    await storage.delete("cart-storage")
    assert await storage.get("cart-storage") is None


async def test_file_storage_sanitizes_keys(tmp_path):
    storage = JsonFileStorage(tmp_path)

    await storage.set("../escape/me", "x")

    assert (tmp_path / ".._escape_me.json").exists()
    assert await storage.get("../escape/me") == "x"


async def test_file_storage_write_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    storage = JsonFileStorage(blocker)

    with pytest.raises(StorageError) as exc_info:
        await storage.set("cart-storage", "{}")

    assert exc_info.value.key == "cart-storage"


async def test_undecodable_file_is_a_corrupt_document(tmp_path):
    (tmp_path / "cart-storage.json").write_bytes(b"\xff\xfe{garbage")
    storage = JsonFileStorage(tmp_path)

    with pytest.raises(CorruptDocumentError) as exc_info:
        await storage.get("cart-storage")

    assert exc_info.value.key == "cart-storage"


async def test_undecodable_cart_file_loads_as_empty_cart(tmp_path):
    (tmp_path / "cart-storage.json").write_bytes(b"\xff\xfe{garbage")
    cart = CartService(JsonFileStorage(tmp_path))

    await cart.load()

    assert cart.is_empty
    await cart.add_item(make_product("p1", price=700))
    assert json.loads((tmp_path / "cart-storage.json").read_text(encoding="utf-8"))["items"][0]["id"] == "p1"


# ========================================
# REDIS
# ========================================

class FakeRedis:
    """Doble mínimo de redis.asyncio.Redis con las operaciones que se usan."""

    def __init__(self, fail: bool = False):
        self.data = {}
        self.fail = fail
        self.closed = False

    def _check(self):
        if self.fail:
            raise RedisConnectionError("Connection refused")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value):
        self._check()
        self.data[key] = value

    async def delete(self, key):
        self._check()
        self.data.pop(key, None)

    async def aclose(self):
        self.closed = True


async def test_redis_storage_uses_key_prefix():
    client = FakeRedis()
    storage = RedisStorage(client, key_prefix="storefront:")

    await storage.set("authToken", "tok")

    assert client.data == {"storefront:authToken": "tok"}
    assert await storage.get("authToken") == "tok"

    await storage.delete("authToken")
    assert await storage.get("authToken") is None

    await storage.close()
    assert client.closed


@pytest.mark.parametrize("operation", ["get", "set", "delete"])
async def test_redis_errors_become_storage_errors(operation):
    storage = RedisStorage(FakeRedis(fail=True))
    args = ("cart-storage", "{}") if operation == "set" else ("cart-storage",)

    with pytest.raises(StorageError):
        await getattr(storage, operation)(*args)


def test_create_storage_selects_backend(tmp_path):
    assert isinstance(create_storage(Settings(STORAGE_BACKEND="memory")), MemoryStorage)

    file_storage = create_storage(Settings(STORAGE_BACKEND="file", STORAGE_DIR=tmp_path))
    assert isinstance(file_storage, JsonFileStorage)
    assert file_storage.directory == tmp_path

    redis_storage = create_storage(Settings(STORAGE_BACKEND="redis", REDIS_KEY_PREFIX="shop:"))
    assert isinstance(redis_storage, RedisStorage)
    assert redis_storage.key_prefix == "shop:"

    with pytest.raises(ValueError):
        create_storage(Settings(STORAGE_BACKEND="sqlite"))


# ========================================
# CONTENEDOR DE DEPENDENCIAS
# ========================================

async def test_context_shares_storage_and_token(tmp_path):
    config = Settings(API_URL="http://testserver/api", STORAGE_BACKEND="file", STORAGE_DIR=tmp_path)
    backend = FakeBackend()
    backend.add("GET", "/orders", {"data": {"orders": [], "total": 0, "page": 1, "limit": 10}})

    async with StorefrontContext(config, JsonFileStorage(tmp_path), transport=httpx.MockTransport(backend)) as ctx:
        await ctx.cart.add_item(make_product("p1", price=1200), quantity=2)
        await ctx.token_store.set("tok-9")
        await ctx.orders.list_orders()

    assert backend.last_request.headers["authorization"] == "Bearer tok-9"

    async with StorefrontContext(config, JsonFileStorage(tmp_path), transport=httpx.MockTransport(backend)) as ctx:
        assert ctx.cart.total_price() == 2400
        assert ctx.theme.is_dark is True
        assert await ctx.auth.is_authenticated()


async def test_context_passes_publishable_key_to_authorizer():
    config = Settings(_env_file=None, STORAGE_BACKEND="memory", PAYMENT_PUBLISHABLE_KEY="pk_test_123")

    async with StorefrontContext.from_settings(config) as ctx:
        assert ctx.checkout.authorizer.publishable_key == "pk_test_123"
        assert not ctx.checkout.authorizer.is_live
