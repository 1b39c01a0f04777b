# storefront/core/logging_config.py
"""
Configuración del logging de la aplicación a partir de los settings.
"""

import logging
from pathlib import Path

from storefront.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configura el logger raíz con el nivel y formato definidos en la configuración.
    Si LOG_FILE_PATH está definido, añade además un handler de fichero.
    """
    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # httpx registra cada petición en INFO, demasiado ruido para el cliente
    logging.getLogger("httpx").setLevel(logging.WARNING)
