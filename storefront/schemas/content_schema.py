# storefront/schemas/content_schema.py
"""
Esquemas Pydantic para los bloques de contenido editable del sitio.

Cada bloque se identifica por página + sección. El contenido en sí
(`content_data`) es un objeto JSON cuya forma depende de `content_type`
(texto, imagen, lista de enlaces...), por eso se valida solo como dict.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from storefront.schemas.base_schema import ApiModel


class SiteContentBase(ApiModel):
    page: str
    section: str
    content_type: str
    content_data: Dict[str, Any]


class SiteContentCreate(SiteContentBase):
    pass


class SiteContentUpdate(ApiModel):
    page: Optional[str] = None
    section: Optional[str] = None
    content_type: Optional[str] = None
    content_data: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class SiteContentResponse(SiteContentBase):
    id: str
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
