# storefront/schemas/payment_schema.py
"""
Esquemas Pydantic para el ciclo de vida del pago con tarjeta y el checkout.

Flujo resumido:
1. PaymentRequest  -> POST /payments/create-payment-intent -> PaymentIntent
2. El SDK externo autoriza la tarjeta con `client_secret` -> CardAuthorization
3. PaymentRequest  -> POST /payments/confirm/{id}          -> ConfirmedOrder
"""

from typing import List, Optional
import enum

from pydantic import Field

from storefront.schemas.base_schema import ApiModel

# ========================================
# DATOS DEL CLIENTE
# ========================================

class CustomerInfo(ApiModel):
    """Datos de contacto y entrega recogidos en el formulario de checkout."""
    email: str
    mobile: str
    full_name: str
    address: str
    city: str
    state: str

    def billing_details(self) -> dict:
        """Detalles de facturación en el formato que espera el SDK de tarjetas."""
        return {
            "name": self.full_name,
            "email": self.email,
            "phone": self.mobile,
            "address": {"line1": self.address, "city": self.city, "state": self.state},
        }

# ========================================
# INTENCIÓN DE PAGO
# ========================================

class PaymentLineItem(ApiModel):
    id: str
    name: str
    price: int = Field(..., ge=0)
    quantity: int = Field(..., ge=1)

class PaymentRequest(ApiModel):
    """Importe total (unidades menores), cliente y líneas del carrito."""
    amount: int = Field(..., gt=0)
    currency: str
    delivery_fee: int = Field(default=0, ge=0)
    customer_info: CustomerInfo
    items: List[PaymentLineItem] = Field(..., min_length=1)

class PaymentIntent(ApiModel):
    """
    Intención de pago emitida por el backend.

    `client_secret` solo se entrega al SDK externo para autorizar la tarjeta;
    nunca se persiste ni se registra en logs.
    """
    payment_intent_id: str
    client_secret: str = Field(..., repr=False)
    amount: Optional[int] = None
    currency: Optional[str] = None

class PaymentIntentStatus(str, enum.Enum):
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_ACTION = "requires_action"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"

class PaymentStatusResponse(ApiModel):
    payment_intent_id: Optional[str] = None
    status: PaymentIntentStatus
    amount: Optional[int] = None
    currency: Optional[str] = None

class ConfirmedOrder(ApiModel):
    """Pedido creado en el backend tras confirmar el pago."""
    id: str
    formatted_order_number: Optional[str] = None
    total_amount: Optional[int] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None

# ========================================
# AUTORIZACIÓN DE TARJETA (SDK EXTERNO)
# ========================================

class CardAuthorization(ApiModel):
    """Resultado que devuelve el SDK de tarjetas tras confirmar el pago."""
    status: PaymentIntentStatus
    payment_intent_id: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error_message is None and self.status == PaymentIntentStatus.SUCCEEDED

# ========================================
# CHECKOUT
# ========================================

class DeliveryRegion(ApiModel):
    name: str
    fee: int = Field(..., ge=0, description="Gastos de envío en unidades menores")

class CheckoutQuote(ApiModel):
    subtotal: int
    delivery_fee: int
    total: int

class CheckoutResult(ApiModel):
    order_id: str
    order_number: Optional[str] = None
    amount: int
    payment_intent_id: str
