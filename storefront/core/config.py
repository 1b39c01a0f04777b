# storefront/core/config.py
"""
Este archivo contiene la configuración del cliente de la tienda.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

# Apunta a la raíz del proyecto
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración del cliente usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    PROJECT_NAME: str = "Storefront Client"
    PROJECT_VERSION: str = "0.1.0"

    # API REST del backend (externo)
    API_URL: str = "http://localhost:3000/api"
    REQUEST_TIMEOUT: float = 15.0

    # Almacenamiento persistente del estado del cliente: memory | file | redis
    STORAGE_BACKEND: str = "file"
    STORAGE_DIR: Path = BASE_DIR / ".storefront"

    # Configuración de Redis (solo si STORAGE_BACKEND == "redis")
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_KEY_PREFIX: str = "storefront:"

    # Claves de cada documento persistido, independientes entre sí
    CART_STORAGE_KEY: str = "cart-storage"
    WISHLIST_STORAGE_KEY: str = "wishlist-storage"
    AUTH_TOKEN_KEY: str = "authToken"
    THEME_STORAGE_KEY: str = "theme-storage"

    # Pagos - la clave publicable solo la usa el SDK de tarjetas externo
    CURRENCY: str = "ngn"
    PAYMENT_PUBLISHABLE_KEY: Optional[str] = None

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def REDIS_URL(self) -> str:
        """URL de conexión a Redis."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

# Instancia global de la configuración
settings = Settings()
