# storefront/schemas/upload_schema.py
"""
Esquema de respuesta de la subida de ficheros.
"""

from storefront.schemas.base_schema import ApiModel


class UploadResult(ApiModel):
    """URL pública del fichero subido."""
    url: str
