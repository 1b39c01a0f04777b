# storefront/db/storage.py
"""
Almacenamiento persistente del estado del cliente.

Cada documento (carrito, lista de deseos, token de sesión, tema) se guarda
como una cadena JSON bajo su propia clave, de forma independiente. Hay tres
implementaciones intercambiables con la misma interfaz asíncrona:

- MemoryStorage: diccionario en memoria, útil para tests y procesos efímeros.
- JsonFileStorage: un fichero por clave dentro de un directorio local.
- RedisStorage: una clave de Redis por documento, con prefijo configurable.

Los errores de lectura/escritura nunca se silencian: se convierten en
StorageError para que quien llama decida cómo informar al usuario.
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from redis import RedisError
from redis.asyncio import Redis

from storefront.core.config import Settings
from storefront.core.exceptions import CorruptDocumentError, StorageError

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Interfaz clave/valor que usan los stores del cliente."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...

    async def close(self) -> None:
        """Libera las conexiones del backend, si las hay."""
        return None


class MemoryStorage(Storage):
    """Almacenamiento en memoria; se pierde al terminar el proceso."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class JsonFileStorage(Storage):
    """
    Guarda cada clave en `<directorio>/<clave>.json`.

    La escritura se hace sobre un fichero temporal y se renombra después,
    de modo que un fallo a mitad de escritura no deja un documento truncado.
    """

    _SAFE_KEY = re.compile(r"[^A-Za-z0-9._-]")

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        safe_key = self._SAFE_KEY.sub("_", key)
        return self.directory / f"{safe_key}.json"

    async def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptDocumentError(f"'{key}' no es texto UTF-8 válido", key=key) from e
        except OSError as e:
            raise StorageError(f"No se pudo leer '{key}': {e}", key=key) from e

    async def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"No se pudo guardar '{key}': {e}", key=key) from e

    async def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"No se pudo eliminar '{key}': {e}", key=key) from e

    def keys(self):
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))


class RedisStorage(Storage):
    """Almacenamiento sobre Redis, una clave por documento."""

    def __init__(self, client: Redis, key_prefix: str = ""):
        self._redis = client
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisStorage":
        client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
        return cls(client, key_prefix=settings.REDIS_KEY_PREFIX)

    def _full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(self._full_key(key))
        except RedisError as e:
            raise StorageError(f"Error leyendo '{key}' de Redis: {e}", key=key) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._redis.set(self._full_key(key), value)
        except RedisError as e:
            raise StorageError(f"Error guardando '{key}' en Redis: {e}", key=key) from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(self._full_key(key))
        except RedisError as e:
            raise StorageError(f"Error eliminando '{key}' de Redis: {e}", key=key) from e

    async def close(self) -> None:
        await self._redis.aclose()


def create_storage(settings: Settings) -> Storage:
    """Crea el backend de almacenamiento indicado en STORAGE_BACKEND."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return JsonFileStorage(settings.STORAGE_DIR)
    if backend == "redis":
        return RedisStorage.from_settings(settings)
    raise ValueError(f"STORAGE_BACKEND desconocido: {settings.STORAGE_BACKEND}")
