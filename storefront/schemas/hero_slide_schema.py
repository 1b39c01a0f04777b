# storefront/schemas/hero_slide_schema.py
"""
Esquemas Pydantic para las diapositivas del carrusel principal.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from storefront.schemas.base_schema import ApiModel


class HeroSlideBase(ApiModel):
    """Propiedades comunes de una diapositiva."""
    title: str
    subtitle: Optional[str] = None
    image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class HeroSlideCreate(HeroSlideBase):
    pass


class HeroSlideUpdate(ApiModel):
    """Actualización parcial; permite además activar o desactivar la diapositiva."""
    title: Optional[str] = None
    subtitle: Optional[str] = None
    image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class HeroSlideResponse(HeroSlideBase):
    id: str
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
