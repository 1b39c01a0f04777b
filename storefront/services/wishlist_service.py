# storefront/services/wishlist_service.py
"""
Lista de deseos persistida: un conjunto de productos sin cantidades.
"""
import logging
from typing import List

from storefront.db.persisted_state import PersistedState
from storefront.db.storage import Storage
from storefront.schemas.cart_schema import WishlistItem, WishlistState
from storefront.schemas.product_schema import ProductResponse

logger = logging.getLogger(__name__)


class WishlistService:

    def __init__(self, storage: Storage, key: str = "wishlist-storage"):
        self._state = PersistedState(storage, key, WishlistState)
        self._items: List[WishlistItem] = []

    async def load(self) -> None:
        self._items = list((await self._state.read()).items)

    async def _commit(self, items: List[WishlistItem]) -> None:
        await self._state.write(WishlistState(items=items))
        self._items = items

    async def add(self, product: ProductResponse) -> None:
        """Añade el producto si no estaba ya; añadirlo dos veces no duplica."""
        if self.contains(product.id):
            return
        await self._commit(self._items + [WishlistItem.from_product(product)])

    async def remove(self, product_id: str) -> None:
        items = [item for item in self._items if item.id != product_id]
        if len(items) != len(self._items):
            await self._commit(items)

    async def toggle(self, product: ProductResponse) -> bool:
        """Añade o quita el producto. Devuelve si queda en la lista."""
        if self.contains(product.id):
            await self.remove(product.id)
            return False
        await self.add(product)
        return True

    async def clear(self) -> None:
        await self._commit([])

    def contains(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self._items)

    @property
    def items(self) -> List[WishlistItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
