# storefront/db/token_store.py
"""
Persistencia del token bearer de la sesión de administración.
"""

import logging
from typing import Optional

from storefront.db.storage import Storage

logger = logging.getLogger(__name__)


class TokenStore:
    """Guarda el token como cadena simple bajo su propia clave."""

    def __init__(self, storage: Storage, key: str = "authToken"):
        self.storage = storage
        self.key = key

    async def get(self) -> Optional[str]:
        token = await self.storage.get(self.key)
        return token or None

    async def set(self, token: str) -> None:
        await self.storage.set(self.key, token)
        logger.info("Token de sesión guardado.")

    async def clear(self) -> None:
        await self.storage.delete(self.key)
        logger.info("Token de sesión eliminado.")
