# storefront/services/cart_service.py
"""
Servicio de Carrito de Compras del cliente.

Mantiene el carrito en memoria y lo replica en el almacenamiento persistente
en cada mutación, antes de devolver el control. Si la escritura falla se
lanza StorageError y el estado en memoria no cambia.

Reglas del carrito:
- Una sola línea por producto; añadirlo otra vez incrementa la cantidad.
- La cantidad siempre es >= 1; fijarla a 0 o menos elimina la línea.
- Los precios y el total van en unidades menores (enteros).
"""
import logging
from typing import List, Union

from storefront.core.exceptions import ValidationError
from storefront.db.persisted_state import PersistedState
from storefront.db.storage import Storage
from storefront.schemas.cart_schema import CartItem, CartState
from storefront.schemas.product_schema import ProductResponse

logger = logging.getLogger(__name__)


class CartService:
    """
    Servicio para gestionar el carrito de compras persistido.
    """
    def __init__(self, storage: Storage, key: str = "cart-storage"):
        self._state = PersistedState(storage, key, CartState)
        self._items: List[CartItem] = []

    async def load(self) -> None:
        """Recupera el carrito guardado (p. ej. al arrancar la aplicación)."""
        state = await self._state.read()
        self._items = list(state.items)
        logger.debug(f"Carrito cargado con {len(self._items)} líneas")

    async def _commit(self, items: List[CartItem]) -> None:
        await self._state.write(CartState(items=items))
        self._items = items

    # ========================================
    # MUTACIONES
    # ========================================

    async def add_item(self, product: Union[ProductResponse, CartItem], quantity: int = 1) -> CartItem:
        """
        Añade un producto al carrito.
        Si el producto ya existe, incrementa su cantidad.
        """
        if quantity < 1:
            raise ValidationError("La cantidad debe ser al menos 1.", {"quantity": "Debe ser >= 1"})

        items = [item.model_copy() for item in self._items]
        for item in items:
            if item.id == product.id:
                item.quantity += quantity
                await self._commit(items)
                return item

        if isinstance(product, CartItem):
            new_item = product.model_copy(update={"quantity": quantity})
        else:
            new_item = CartItem.from_product(product, quantity)
        items.append(new_item)
        await self._commit(items)
        return new_item

    async def update_quantity(self, product_id: str, new_quantity: int) -> None:
        """
        Fija la cantidad de una línea. Con 0 o menos, la línea se elimina.
        Si el producto no está en el carrito no hace nada.
        """
        if new_quantity <= 0:
            await self.remove_item(product_id)
            return

        if not any(item.id == product_id for item in self._items):
            return
        items = [
            item.model_copy(update={"quantity": new_quantity}) if item.id == product_id else item
            for item in self._items
        ]
        await self._commit(items)

    async def remove_item(self, product_id: str) -> bool:
        """
        Elimina un producto del carrito. Devuelve False si no estaba.
        """
        items = [item for item in self._items if item.id != product_id]
        if len(items) == len(self._items):
            return False
        await self._commit(items)
        return True

    async def clear(self) -> None:
        """
        Vacía completamente el carrito.
        """
        await self._commit([])

    # ========================================
    # CONSULTAS
    # ========================================

    @property
    def items(self) -> List[CartItem]:
        return [item.model_copy() for item in self._items]

    @property
    def is_empty(self) -> bool:
        return not self._items

    def item_count(self) -> int:
        """Suma de cantidades (no de líneas); es lo que muestra el contador del carrito."""
        return sum(item.quantity for item in self._items)

    def total_price(self) -> int:
        """
        Calcula el precio total de todos los productos en el carrito.
        """
        return sum(item.price * item.quantity for item in self._items)
