# tests/test_config.py

import logging

from storefront.core.config import Settings
from storefront.core.logging_config import setup_logging


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "https://shop.example.com/api")
    monkeypatch.setenv("redis_port", "6380")
    monkeypatch.setenv("STORAGE_BACKEND", "redis")

    config = Settings(_env_file=None)

    assert config.API_URL == "https://shop.example.com/api"
    assert config.REDIS_URL == "redis://localhost:6380/0"
    assert config.CART_STORAGE_KEY == "cart-storage"
    assert config.AUTH_TOKEN_KEY == "authToken"


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "storefront.log"
    setup_logging(Settings(_env_file=None, LOG_LEVEL="debug", LOG_FILE_PATH=str(log_file)))

    logging.getLogger("storefront.test").debug("hola")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hola" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING

    # Deja el logger raíz sin el handler de fichero para el resto de tests
    setup_logging(Settings(_env_file=None))
