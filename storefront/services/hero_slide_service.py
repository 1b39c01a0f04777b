# storefront/services/hero_slide_service.py
"""
Servicio de diapositivas del carrusel de la portada.
"""

import logging
from typing import List

from storefront.schemas.hero_slide_schema import HeroSlideCreate, HeroSlideResponse, HeroSlideUpdate
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)


class HeroSlideService(BaseService):

    async def list_slides(self) -> List[HeroSlideResponse]:
        """Diapositivas activas, en el orden en que las sirve el backend."""
        payload = await self.api.get("/hero-slides")
        return self._unwrap(payload, List[HeroSlideResponse], "listar diapositivas")

    async def list_all_slides(self) -> List[HeroSlideResponse]:
        payload = await self.api.get("/admin/hero-slides")
        return self._unwrap(payload, List[HeroSlideResponse], "listar diapositivas (admin)")

    async def create_slide(self, slide_in: HeroSlideCreate) -> HeroSlideResponse:
        payload = await self.api.post("/admin/hero-slides", slide_in)
        slide = self._unwrap(payload, HeroSlideResponse, "crear la diapositiva")
        logger.info(f"Diapositiva creada: {slide.id}")
        return slide

    async def update_slide(self, slide_id: str, slide_in: HeroSlideUpdate) -> HeroSlideResponse:
        payload = await self.api.put(f"/admin/hero-slides/{slide_id}", slide_in)
        return self._unwrap(payload, HeroSlideResponse, "actualizar la diapositiva")

    async def delete_slide(self, slide_id: str) -> None:
        await self.api.delete(f"/admin/hero-slides/{slide_id}")
        logger.info(f"Diapositiva eliminada: {slide_id}")
