# storefront/api/client.py
"""
Cliente HTTP único para toda la comunicación con la API del backend.

Responsabilidades:
- Construir las URLs a partir de la URL base configurada
- Adjuntar `Authorization: Bearer <token>` si hay sesión guardada
- Serializar los cuerpos: JSON para dicts/listas/modelos, multipart para MultipartForm
- Normalizar los errores a la jerarquía de storefront.core.exceptions

No hay reintentos: un NetworkError se propaga para que el usuario decida.
"""

import json
import logging
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union

import httpx
from pydantic import BaseModel

from storefront.core.exceptions import ApiError, AuthError, NetworkError, ResponseFormatError
from storefront.db.token_store import TokenStore

logger = logging.getLogger(__name__)

FileContent = Union[bytes, BinaryIO]


def _as_text(value: Any) -> str:
    """Mensaje de error como texto; los backends que validan por campo envían una lista."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value if item not in (None, ""))
    return str(value).strip()


class MultipartForm:
    """
    Cuerpo multipart/form-data: campos de texto más ficheros.

    Es el equivalente a un FormData del navegador. El cliente lo envía sin
    fijar Content-Type; httpx genera la cabecera con el boundary.
    """

    def __init__(self, fields: Optional[Dict[str, Any]] = None):
        self._fields: List[Tuple[str, str]] = []
        self._files: List[Tuple[str, Tuple[str, FileContent, str]]] = []
        for name, value in (fields or {}).items():
            self.add_field(name, value)

    def add_field(self, name: str, value: Any) -> "MultipartForm":
        if value is None:
            return self
        if isinstance(value, (list, tuple)):
            for item in value:
                self.add_field(name, item)
        elif isinstance(value, bool):
            self._fields.append((name, "true" if value else "false"))
        elif isinstance(value, dict):
            self._fields.append((name, json.dumps(value)))
        else:
            self._fields.append((name, str(value)))
        return self

    def add_file(
        self,
        name: str,
        content: Union[FileContent, Path],
        filename: Optional[str] = None,
        content_type: str = "application/octet-stream",
    ) -> "MultipartForm":
        if isinstance(content, Path):
            filename = filename or content.name
            content = content.read_bytes()
        self._files.append((name, (filename or name, content, content_type)))
        return self

    @property
    def fields(self) -> List[Tuple[str, str]]:
        return list(self._fields)

    @property
    def files(self) -> List[Tuple[str, Tuple[str, FileContent, str]]]:
        return list(self._files)

    def to_httpx_files(self) -> list:
        # Los campos van como partes sin nombre de fichero para forzar multipart
        # incluso cuando el formulario no lleva ningún fichero.
        parts: list = [(name, (None, value)) for name, value in self._fields]
        parts.extend(self._files)
        return parts


class ApiClient:
    """
    Envoltorio asíncrono sobre httpx.AsyncClient.

    Args:
        base_url: URL base de la API (p. ej. http://localhost:3000/api)
        token_store: origen del token bearer; si está vacío se envía sin auth
        timeout: segundos antes de abortar cada petición
        transport: transporte httpx alternativo (tests)
    """

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ========================================
    # MÉTODOS PÚBLICOS
    # ========================================

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return await self._request("POST", path, body=body, headers=headers)

    async def put(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return await self._request("PUT", path, body=body, headers=headers)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self._request("PATCH", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def upload_file(
        self,
        path: str,
        file: Union[FileContent, Path],
        filename: Optional[str] = None,
        field: str = "file",
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Sube un único fichero como multipart en el campo `field`."""
        form = MultipartForm().add_file(field, file, filename=filename)
        return await self._request("POST", path, body=form, params=params)

    # ========================================
    # PETICIÓN Y NORMALIZACIÓN DE ERRORES
    # ========================================

    async def _build_headers(self, extra: Optional[Dict[str, str]]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = await self.token_store.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        request_headers = await self._build_headers(headers)
        request_kwargs: Dict[str, Any] = {}

        if isinstance(body, MultipartForm):
            request_kwargs["files"] = body.to_httpx_files()
        elif body is not None:
            if isinstance(body, BaseModel):
                body = body.model_dump(by_alias=True, exclude_none=True, mode="json")
            request_kwargs["content"] = json.dumps(body)
            request_headers["Content-Type"] = "application/json"

        if params:
            params = {key: value for key, value in params.items() if value is not None}

        logger.debug(f"{method} {path}")
        try:
            response = await self._client.request(
                method, path, params=params or None, headers=request_headers, **request_kwargs
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Tiempo de espera agotado en {method} {path}")
            raise NetworkError("El servidor tardó demasiado en responder. Inténtalo de nuevo.") from e
        except httpx.TransportError as e:
            logger.warning(f"Error de red en {method} {path}: {e}")
            raise NetworkError("No se pudo conectar con el servidor. Comprueba tu conexión.") from e

        if not response.is_success:
            raise self._error_from_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(
                f"Respuesta no válida del servidor en {method} {path}",
                details=response.text[:200],
            ) from e

    @staticmethod
    def _error_from_response(response: httpx.Response) -> Exception:
        """Convierte una respuesta no 2xx en AuthError o ApiError."""
        status_code = response.status_code
        message = f"HTTP {status_code}"
        code = None
        details = None
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            message = _as_text(payload.get("message")) or _as_text(payload.get("error")) or message
            code = payload.get("code")
            details = payload.get("details")

        logger.warning(f"{response.request.method} {response.request.url.path} -> {status_code}: {message}")
        if status_code in (401, 403):
            return AuthError(message, status_code=status_code)
        return ApiError(message, status_code=status_code, code=code, details=details)
