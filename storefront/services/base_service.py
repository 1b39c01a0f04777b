# storefront/services/base_service.py
"""
Base común de los servicios de dominio.

Cada servicio recibe el ApiClient por constructor y valida todas las
respuestas contra su esquema antes de devolverlas: una forma inesperada se
rechaza aquí con ResponseFormatError en lugar de llegar sin tipar a la UI.
"""

import logging
from typing import Any, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from storefront.api.client import ApiClient
from storefront.core.exceptions import ResponseFormatError
from storefront.schemas.base_schema import ApiResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseService:

    def __init__(self, api: ApiClient):
        self.api = api

    def _unwrap(self, payload: Any, data_type: Type[T], action: str) -> T:
        """Valida el sobre `{data, message}` y devuelve `data` ya tipado."""
        try:
            envelope = ApiResponse[data_type].model_validate(payload)
        except PydanticValidationError as e:
            logger.error(f"Respuesta inesperada al {action}: {e.error_count()} errores de validación")
            raise ResponseFormatError(
                f"Respuesta inesperada del servidor al {action}.",
                details=e.errors(include_url=False),
            ) from e
        return envelope.data
