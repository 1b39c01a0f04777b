# storefront/schemas/category_schema.py

"""
Esquemas Pydantic para las categorías del catálogo.

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryUpdate: Para actualizar categorías existentes (PUT)
- CategoryResponse: Para las respuestas de la API (GET)
"""

from datetime import datetime
from typing import Optional

from storefront.schemas.base_schema import ApiModel

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(ApiModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear una nueva categoría. El ID lo asigna el backend."""
    pass


class CategoryUpdate(ApiModel):
    """Esquema para actualizar una categoría. Todos los campos son opcionales."""
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
