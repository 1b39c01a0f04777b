# storefront/db/persisted_state.py
"""
Lectura y escritura de documentos de estado (carrito, deseos, tema) como JSON.

Un documento corrupto o con una forma inesperada se registra y se trata como
vacío, igual que un documento inexistente; los fallos del backend de
almacenamiento sí se propagan como StorageError.
"""

import logging
from typing import Generic, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from storefront.core.exceptions import CorruptDocumentError
from storefront.db.storage import Storage

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)


class PersistedState(Generic[StateT]):
    """Documento Pydantic guardado bajo una única clave del almacenamiento."""

    def __init__(self, storage: Storage, key: str, model: Type[StateT]):
        self.storage = storage
        self.key = key
        self.model = model

    async def read(self) -> StateT:
        try:
            raw = await self.storage.get(self.key)
        except CorruptDocumentError as e:
            logger.error(f"Documento '{self.key}' ilegible ({e.message}); se descarta.")
            return self.model()
        if not raw:
            return self.model()
        try:
            return self.model.model_validate_json(raw)
        except PydanticValidationError:
            logger.error(f"Documento '{self.key}' corrupto o con formato inesperado; se descarta.")
            return self.model()

    async def write(self, state: StateT) -> None:
        await self.storage.set(self.key, state.model_dump_json(by_alias=True))
