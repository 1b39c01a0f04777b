# storefront/services/product_service.py

"""
Capa de servicios para el catálogo de productos.

Proporciona una función por operación del backend:
- Lecturas públicas del catálogo (listado, detalle, por categoría)
- CRUD del panel de administración, en JSON o multipart con imágenes

Precios: ProductCreate/ProductUpdate llevan el precio en unidades mayores
tal como lo introduce el administrador; aquí se convierte a unidades menores
con money.to_minor_units. Es el único punto de conversión del cliente.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from storefront.api.client import FileContent, MultipartForm
from storefront.schemas.product_schema import ProductCreate, ProductResponse, ProductUpdate
from storefront.services import money
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)

ImageFile = Union[Path, FileContent]


class ProductService(BaseService):
    """
    Servicio para operaciones relacionadas con productos.
    """

    # ========================================
    # OPERACIONES DE CONSULTA (PÚBLICAS)
    # ========================================

    async def list_products(self) -> List[ProductResponse]:
        payload = await self.api.get("/products")
        return self._unwrap(payload, List[ProductResponse], "listar productos")

    async def get_product(self, product_id: str) -> ProductResponse:
        payload = await self.api.get(f"/products/{product_id}")
        return self._unwrap(payload, ProductResponse, "obtener el producto")

    async def list_by_category(self, category_slug: str) -> List[ProductResponse]:
        """Productos de una categoría, identificada por su slug."""
        payload = await self.api.get(f"/products/category/{category_slug}")
        return self._unwrap(payload, List[ProductResponse], "listar productos de la categoría")

    # ========================================
    # OPERACIONES DE ADMINISTRACIÓN
    # ========================================

    async def list_admin_products(self) -> List[ProductResponse]:
        """Todos los productos, incluidos los inactivos."""
        payload = await self.api.get("/admin/products")
        return self._unwrap(payload, List[ProductResponse], "listar productos (admin)")

    async def create_product(self, product_in: ProductCreate) -> ProductResponse:
        data = self._to_api_payload(product_in)
        payload = await self.api.post("/admin/products", data)
        product = self._unwrap(payload, ProductResponse, "crear el producto")
        logger.info(f"Producto creado: {product.id}")
        return product

    async def create_product_with_files(
        self, product_in: ProductCreate, images: Sequence[ImageFile]
    ) -> ProductResponse:
        """Crea un producto subiendo sus imágenes en la misma petición multipart."""
        form = self._to_multipart(self._to_api_payload(product_in), images)
        payload = await self.api.post("/admin/products/with-files", form)
        product = self._unwrap(payload, ProductResponse, "crear el producto")
        logger.info(f"Producto creado con {len(images)} imágenes: {product.id}")
        return product

    async def update_product(self, product_id: str, product_in: ProductUpdate) -> ProductResponse:
        data = self._to_api_payload(product_in)
        payload = await self.api.put(f"/admin/products/{product_id}", data)
        return self._unwrap(payload, ProductResponse, "actualizar el producto")

    async def update_product_with_files(
        self, product_id: str, product_in: ProductUpdate, images: Sequence[ImageFile]
    ) -> ProductResponse:
        form = self._to_multipart(self._to_api_payload(product_in), images)
        payload = await self.api.put(f"/admin/products/with-files/{product_id}", form)
        return self._unwrap(payload, ProductResponse, "actualizar el producto")

    async def delete_product(self, product_id: str) -> None:
        await self.api.delete(f"/admin/products/{product_id}")
        logger.info(f"Producto eliminado: {product_id}")

    # ========================================
    # CONVERSIÓN ENTRE FORMULARIO Y API
    # ========================================

    @staticmethod
    def _to_api_payload(product_in: Union[ProductCreate, ProductUpdate]) -> Dict[str, Any]:
        """Serializa a camelCase y convierte el precio a unidades menores."""
        data = product_in.to_payload()
        if product_in.price is not None:
            data["price"] = money.to_minor_units(product_in.price)
        return data

    @staticmethod
    def _to_multipart(data: Dict[str, Any], images: Sequence[ImageFile]) -> MultipartForm:
        form = MultipartForm(data)
        for index, image in enumerate(images):
            filename = image.name if isinstance(image, Path) else f"image-{index}"
            form.add_file("images", image, filename=filename)
        return form
