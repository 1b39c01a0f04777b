# storefront/services/category_service.py
"""
Servicio de categorías: lecturas públicas y CRUD de administración.

Si se adjunta un fichero de imagen, la creación y la actualización se envían
como multipart a la misma ruta; sin fichero, como JSON.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from storefront.api.client import FileContent, MultipartForm
from storefront.schemas.category_schema import CategoryCreate, CategoryResponse, CategoryUpdate
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)


class CategoryService(BaseService):

    async def list_categories(self) -> List[CategoryResponse]:
        payload = await self.api.get("/categories")
        return self._unwrap(payload, List[CategoryResponse], "listar categorías")

    async def get_category(self, slug: str) -> CategoryResponse:
        payload = await self.api.get(f"/categories/{slug}")
        return self._unwrap(payload, CategoryResponse, "obtener la categoría")

    async def create_category(
        self,
        category_in: CategoryCreate,
        image_file: Optional[Union[Path, FileContent]] = None,
    ) -> CategoryResponse:
        body = self._build_body(category_in, image_file)
        payload = await self.api.post("/admin/categories", body)
        category = self._unwrap(payload, CategoryResponse, "crear la categoría")
        logger.info(f"Categoría creada: {category.slug}")
        return category

    async def update_category(
        self,
        category_id: str,
        category_in: CategoryUpdate,
        image_file: Optional[Union[Path, FileContent]] = None,
    ) -> CategoryResponse:
        body = self._build_body(category_in, image_file)
        payload = await self.api.put(f"/admin/categories/{category_id}", body)
        return self._unwrap(payload, CategoryResponse, "actualizar la categoría")

    async def delete_category(self, category_id: str) -> None:
        await self.api.delete(f"/admin/categories/{category_id}")
        logger.info(f"Categoría eliminada: {category_id}")

    @staticmethod
    def _build_body(category_in, image_file):
        data = category_in.to_payload()
        if image_file is None:
            return data
        form = MultipartForm(data)
        filename = image_file.name if isinstance(image_file, Path) else "image"
        return form.add_file("image", image_file, filename=filename)
