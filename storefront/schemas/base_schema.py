# storefront/schemas/base_schema.py
"""
Piezas comunes a todos los esquemas Pydantic del cliente.

La API del backend habla en camelCase (`categoryId`, `createdAt`) y el código
Python en snake_case. ApiModel genera los alias automáticamente, de modo que:

    ProductResponse.model_validate({"categoryId": "c1", ...}).category_id
    payload.model_dump(by_alias=True)  # -> {"categoryId": ...}

Todas las respuestas del backend llegan envueltas en `{"data": ..., "message": ...}`.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Modelo base con alias camelCase para el intercambio con la API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict:
        """Serializa el modelo tal como lo espera el backend (camelCase, sin nulos)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ApiResponse(BaseModel, Generic[T]):
    """Sobre genérico de respuesta del backend."""
    data: T
    message: Optional[str] = None
