# storefront/services/upload_service.py
"""
Subida genérica de ficheros. Devuelve la URL pública del fichero.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from storefront.api.client import FileContent
from storefront.core.exceptions import ResponseFormatError
from storefront.schemas.upload_schema import UploadResult
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)


class UploadService(BaseService):

    async def upload_file(
        self,
        file: Union[Path, FileContent],
        path: str,
        filename: Optional[str] = None,
    ) -> UploadResult:
        """Sube un fichero a la carpeta `path` del almacenamiento del backend."""
        payload = await self.api.upload_file("/upload", file, filename=filename, params={"path": path})
        return self._parse_result(payload)

    async def upload_single(self, file: Union[Path, FileContent], filename: Optional[str] = None) -> UploadResult:
        payload = await self.api.upload_file("/upload/single", file, filename=filename)
        return self._parse_result(payload)

    def _parse_result(self, payload) -> UploadResult:
        # /upload responde sin sobre ({"url": ...}); /upload/single a veces lo envuelve
        if isinstance(payload, dict) and "data" in payload:
            result = self._unwrap(payload, UploadResult, "subir el fichero")
        elif isinstance(payload, dict) and payload.get("url"):
            result = UploadResult(url=payload["url"])
        else:
            raise ResponseFormatError("La subida no devolvió ninguna URL.", details=payload)
        logger.info(f"Fichero subido: {result.url}")
        return result
