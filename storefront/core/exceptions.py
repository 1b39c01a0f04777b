# storefront/core/exceptions.py
"""
Jerarquía de excepciones del cliente de la tienda.

Todas las excepciones exponen `message`, un texto legible pensado para
mostrarse tal cual al usuario (toast, alerta, mensaje del bot). El tipo
concreto permite a quien llama distinguir los casos sin comparar cadenas:

- ValidationError: falla una validación local, nunca llega a la red.
- AuthError: token ausente, caducado o rechazado (redirigir al login).
- NetworkError: no se pudo contactar con el servidor; reintentable.
- ApiError: el servidor respondió con un estado distinto de 2xx.
- ResponseFormatError: respuesta 2xx con una forma inesperada.
- PaymentError: el SDK de pagos rechazó o no completó el cobro.
- StorageError: fallo al leer o escribir el almacenamiento persistente.
  CorruptDocumentError si el documento existe pero no se puede decodificar.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Excepción base de todo el paquete."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Error de validación local con un mensaje por campo."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}


class AuthError(StorefrontError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(StorefrontError):
    pass


class ApiError(StorefrontError):
    """El backend respondió con un estado no exitoso."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details


class ResponseFormatError(StorefrontError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class PaymentError(StorefrontError):
    def __init__(self, message: str, payment_intent_id: Optional[str] = None):
        super().__init__(message)
        self.payment_intent_id = payment_intent_id


class StorageError(StorefrontError):
    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class CorruptDocumentError(StorageError):
    """El documento existe pero su contenido no se puede decodificar."""
    pass
