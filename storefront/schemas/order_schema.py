# storefront/schemas/order_schema.py
"""
Se encarga de definir los esquemas Pydantic para los pedidos y sus líneas.
"""

from datetime import datetime
from typing import List, Optional
import enum

from pydantic import EmailStr, Field, field_validator

from storefront.schemas.base_schema import ApiModel
from storefront.schemas.product_schema import ProductResponse

class OrderStatus(str, enum.Enum):
    """Define los posibles estados de un pedido."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class ShippingAddress(ApiModel):
    """Dirección de envío tal como se recoge en el checkout."""
    address: str
    city: str
    state: str
    full_name: Optional[str] = None
    mobile: Optional[str] = None

class OrderItemBase(ApiModel):
    """Propiedades base para una línea de pedido."""
    product_id: str = Field(..., description="ID del producto")
    quantity: int = Field(..., description="Cantidad del producto", gt=0)
    price: int = Field(..., description="Precio unitario en unidades menores", ge=0)

class OrderItemCreate(OrderItemBase):
    pass

class OrderItem(OrderItemBase):
    """Línea de pedido devuelta por la API, con el producto anidado si viene."""
    id: str
    order_id: Optional[str] = None
    created_at: Optional[datetime] = None
    product: Optional[ProductResponse] = None

class OrderBase(ApiModel):
    """Propiedades base de un pedido."""
    user_email: EmailStr = Field(..., description="Email del cliente")
    user_name: str = Field(..., description="Nombre del cliente")
    user_phone: Optional[str] = None
    shipping_address: ShippingAddress
    total_amount: int = Field(..., description="Total en unidades menores", ge=0)

class OrderCreate(OrderBase):
    """Esquema para crear un pedido, con su lista de líneas."""
    items: List[OrderItemCreate] = Field(..., min_length=1)

    @field_validator("user_name")
    @classmethod
    def validate_user_name(cls, v):
        if not v or not v.strip():
            raise ValueError("El nombre del cliente es requerido")
        return v.strip()

class OrderResponse(OrderBase):
    """Esquema completo de respuesta para un pedido."""
    id: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[OrderItem] = []

class OrderStatusUpdate(ApiModel):
    """Esquema para actualizar únicamente el estado de un pedido."""
    status: OrderStatus
    note: Optional[str] = None

class OrderPage(ApiModel):
    """Página del listado de pedidos del panel de administración."""
    orders: List[OrderResponse]
    total: int
    page: int
    limit: int
