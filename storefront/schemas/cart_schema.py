# storefront/schemas/cart_schema.py
"""
Esquemas Pydantic para el estado local persistido: carrito, lista de deseos y tema.
"""

from typing import List, Optional

from pydantic import Field

from storefront.schemas.base_schema import ApiModel
from storefront.schemas.product_schema import ProductResponse


class CartItem(ApiModel):
    """Línea del carrito. Una por producto; el precio va en unidades menores."""
    id: str
    name: str
    price: int = Field(..., ge=0)
    image: Optional[str] = None
    quantity: int = Field(default=1, ge=1)

    @classmethod
    def from_product(cls, product: ProductResponse, quantity: int = 1) -> "CartItem":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            image=product.main_image,
            quantity=quantity,
        )

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


class CartState(ApiModel):
    """Documento del carrito tal como se guarda en el almacenamiento."""
    items: List[CartItem] = []


class WishlistItem(ApiModel):
    """Proyección de un producto guardada en la lista de deseos."""
    id: str
    name: str
    price: int = Field(..., ge=0)
    images: List[str] = []
    category_id: Optional[str] = None
    rating: Optional[float] = None
    stock: Optional[int] = None
    is_active: Optional[bool] = True

    @classmethod
    def from_product(cls, product: ProductResponse) -> "WishlistItem":
        return cls.model_validate(product.model_dump(include=set(cls.model_fields)))


class WishlistState(ApiModel):
    items: List[WishlistItem] = []


class ThemeState(ApiModel):
    is_dark: bool = True
