# storefront/services/content_service.py
"""
Servicio de contenido editable del sitio (textos e imágenes por página/sección).
"""

from typing import List, Optional

from storefront.schemas.content_schema import SiteContentCreate, SiteContentResponse, SiteContentUpdate
from storefront.services.base_service import BaseService


class ContentService(BaseService):

    async def get_site_content(self, page: str, section: Optional[str] = None) -> List[SiteContentResponse]:
        """Bloques de contenido de una página, opcionalmente filtrados por sección."""
        payload = await self.api.get("/site-content", params={"page": page, "section": section})
        return self._unwrap(payload, List[SiteContentResponse], "obtener el contenido")

    async def list_all_content(self) -> List[SiteContentResponse]:
        payload = await self.api.get("/simple-content/admin/all")
        return self._unwrap(payload, List[SiteContentResponse], "listar el contenido (admin)")

    async def create_content(self, content_in: SiteContentCreate) -> SiteContentResponse:
        payload = await self.api.post("/simple-content", content_in)
        return self._unwrap(payload, SiteContentResponse, "crear el contenido")

    async def update_content(self, content_id: str, content_in: SiteContentUpdate) -> SiteContentResponse:
        payload = await self.api.put(f"/simple-content/{content_id}", content_in)
        return self._unwrap(payload, SiteContentResponse, "actualizar el contenido")

    async def delete_content(self, content_id: str) -> None:
        await self.api.delete(f"/simple-content/{content_id}")
