# storefront/schemas/product_schema.py

"""
Esquemas Pydantic para los productos del catálogo.

Notas sobre precios:
- En todo el cliente los precios son enteros en unidades menores de la
  moneda (kobo, céntimos). El backend también los guarda así.
- La única excepción es el precio que introduce un administrador al crear o
  editar un producto (ProductCreate / ProductUpdate): llega en unidades
  mayores como Decimal y ProductService lo convierte antes de enviarlo.
- Una respuesta con un precio no entero (p. ej. 15.5) se rechaza al validar,
  en lugar de propagar una unidad ambigua hacia la interfaz.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from storefront.schemas.base_schema import ApiModel
from storefront.schemas.category_schema import CategoryResponse

# ========================================
# ESQUEMA BASE
# ========================================

class ProductBase(ApiModel):
    """
    Propiedades comunes de un producto.

    - images: URLs ya subidas (ver UploadService)
    - rating: valoración media 0-5, calculada por el backend
    """
    name: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    images: List[str] = []
    stock: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = True


# ========================================
# ESQUEMAS PARA OPERACIONES (ADMIN)
# ========================================

class ProductCreate(ProductBase):
    """
    Datos de creación de un producto tal como los introduce el administrador.

    Ejemplo:
        ProductCreate(name="Bolso de cuentas", price=Decimal("25000.00"), category_id="c1")
    """
    price: Decimal = Field(..., ge=0, description="Precio en unidades mayores")


class ProductUpdate(ApiModel):
    """Actualización parcial de un producto; solo se envían los campos presentes."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    category_id: Optional[str] = None
    images: Optional[List[str]] = None
    stock: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = None


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ProductResponse(ProductBase):
    """Proyección de solo lectura de un producto servido por la API."""
    id: str
    price: int = Field(..., ge=0, description="Precio en unidades menores")
    category: Optional[CategoryResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("images", mode="before")
    @classmethod
    def drop_empty_images(cls, value):
        if value is None:
            return []
        return [url for url in value if url]

    @property
    def main_image(self) -> Optional[str]:
        return self.images[0] if self.images else None
