# storefront/services/checkout_service.py
"""
Orquestador del Flujo de Checkout con pago con tarjeta.

Este componente encapsula la máquina de estados del proceso de compra, desde
que el cliente rellena sus datos de entrega hasta que el pedido queda
confirmado y el carrito vacío:

    COLLECTING_INFO -> INTENT_CREATED -> AUTHORIZING -> CONFIRMING -> DONE

Cualquier fallo intermedio devuelve el flujo a COLLECTING_INFO (nunca a
AUTHORIZING): el siguiente intento crea una intención de pago nueva con una
clave de idempotencia nueva, y la intención fallida se cancela. El carrito
solo se vacía cuando el backend ha confirmado el pedido.
"""
import enum
import logging
import re
import uuid
from typing import Any, Dict, List, Mapping, Optional

from storefront.core.exceptions import PaymentError, StorageError, StorefrontError, ValidationError
from storefront.schemas.payment_schema import (
    CheckoutQuote,
    CheckoutResult,
    CustomerInfo,
    DeliveryRegion,
    PaymentIntent,
    PaymentLineItem,
    PaymentRequest,
)
from storefront.services.card_authorizer import CardPaymentAuthorizer
from storefront.services.cart_service import CartService
from storefront.services.payment_service import PaymentService

logger = logging.getLogger(__name__)

# Validación simple de email
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

REQUIRED_FIELDS = {
    "email": "El correo electrónico",
    "mobile": "El teléfono",
    "full_name": "El nombre completo",
    "address": "La dirección",
    "city": "La ciudad",
    "state": "El estado",
}

# Gastos de envío por estado, en kobo (1 NGN = 100 kobo)
DEFAULT_DELIVERY_REGIONS: List[DeliveryRegion] = [
    DeliveryRegion(name="Lagos", fee=150000),
    DeliveryRegion(name="Abuja", fee=200000),
    DeliveryRegion(name="Kano", fee=250000),
    DeliveryRegion(name="Rivers", fee=250000),
    DeliveryRegion(name="Oyo", fee=250000),
    DeliveryRegion(name="Delta", fee=250000),
    DeliveryRegion(name="Imo", fee=250000),
    DeliveryRegion(name="Anambra", fee=250000),
    DeliveryRegion(name="Edo", fee=250000),
    DeliveryRegion(name="Cross River", fee=250000),
    DeliveryRegion(name="Others", fee=250000),
]


class CheckoutStep(str, enum.Enum):
    COLLECTING_INFO = "collecting_info"
    INTENT_CREATED = "intent_created"
    AUTHORIZING = "authorizing"
    CONFIRMING = "confirming"
    DONE = "done"


def validate_customer_info(form_data: Mapping[str, Any]) -> CustomerInfo:
    """
    Valida los datos de entrega antes de tocar la red.

    Todos los campos son obligatorios y el email debe tener un formato
    plausible. Teléfono y dirección no se validan más allá de no estar vacíos.

    Raises:
        ValidationError: con un mensaje por campo en `errors`
    """
    cleaned: Dict[str, str] = {}
    errors: Dict[str, str] = {}
    for field, label in REQUIRED_FIELDS.items():
        value = str(form_data.get(field) or "").strip()
        if not value:
            errors[field] = f"{label} es obligatorio."
        cleaned[field] = value

    if "email" not in errors and not EMAIL_REGEX.match(cleaned["email"]):
        errors["email"] = "El formato del correo electrónico no parece válido."

    if errors:
        raise ValidationError("Revisa los datos de entrega.", errors)
    return CustomerInfo(**cleaned)


class CheckoutService:
    """
    Gestiona el proceso de checkout de varios pasos.
    """

    def __init__(
        self,
        cart: CartService,
        payment_service: PaymentService,
        authorizer: CardPaymentAuthorizer,
        currency: str = "ngn",
        delivery_regions: Optional[List[DeliveryRegion]] = None,
    ):
        """
        Args:
            cart: carrito del que se leen las líneas y que se vacía al terminar
            payment_service: intención de pago y confirmación en el backend
            authorizer: SDK externo de tarjetas
            currency: moneda de la intención de pago
            delivery_regions: tabla de gastos de envío por región
        """
        self.cart = cart
        self.payment_service = payment_service
        self.authorizer = authorizer
        self.currency = currency
        self.delivery_regions = {
            region.name: region for region in (delivery_regions or DEFAULT_DELIVERY_REGIONS)
        }
        self.step = CheckoutStep.COLLECTING_INFO
        self.last_error: Optional[str] = None
        self._in_progress = False

    # ========================================
    # CÁLCULO DEL IMPORTE
    # ========================================

    def delivery_fee(self, region: str) -> int:
        try:
            return self.delivery_regions[region].fee
        except KeyError:
            raise ValidationError(
                f"No hacemos envíos a '{region}'.",
                {"state": "Selecciona un estado de la lista."},
            )

    def quote(self, region: str) -> CheckoutQuote:
        """Subtotal del carrito, gastos de envío y total, en unidades menores."""
        subtotal = self.cart.total_price()
        fee = self.delivery_fee(region)
        return CheckoutQuote(subtotal=subtotal, delivery_fee=fee, total=subtotal + fee)

    def build_payment_request(self, customer: CustomerInfo) -> PaymentRequest:
        quote = self.quote(customer.state)
        items = [
            PaymentLineItem(id=item.id, name=item.name, price=item.price, quantity=item.quantity)
            for item in self.cart.items
        ]
        return PaymentRequest(
            amount=quote.total,
            currency=self.currency,
            delivery_fee=quote.delivery_fee,
            customer_info=customer,
            items=items,
        )

    # ========================================
    # FLUJO PRINCIPAL
    # ========================================

    async def checkout(self, form_data: Mapping[str, Any], card: Any = None) -> CheckoutResult:
        """
        Ejecuta el checkout completo para el carrito actual.

        Args:
            form_data: datos de entrega (email, mobile, full_name, address, city, state)
            card: referencia opaca al elemento de tarjeta del SDK

        Raises:
            ValidationError: datos incompletos, carrito vacío o región desconocida
            PaymentError: el SDK rechazó la tarjeta o falló la autenticación
            AuthError, NetworkError, ApiError, ResponseFormatError: fallos del backend
        """
        if self._in_progress:
            raise ValidationError("Ya hay un pago en curso.")

        self._in_progress = True
        self.last_error = None
        try:
            return await self._run(form_data, card)
        except StorefrontError as e:
            logger.warning(f"Checkout interrumpido en el paso '{self.step.value}': {e.message}")
            self.last_error = e.message
            self.step = CheckoutStep.COLLECTING_INFO
            raise
        except Exception:
            logger.error(f"Error inesperado en el checkout (paso '{self.step.value}')", exc_info=True)
            self.last_error = "Ocurrió un error inesperado al procesar tu pedido."
            self.step = CheckoutStep.COLLECTING_INFO
            raise
        finally:
            self._in_progress = False

    async def _run(self, form_data: Mapping[str, Any], card: Any) -> CheckoutResult:
        # 1. Datos de entrega
        self.step = CheckoutStep.COLLECTING_INFO
        customer = validate_customer_info(form_data)
        if self.cart.is_empty:
            raise ValidationError("Tu carrito está vacío.")
        payment_request = self.build_payment_request(customer)

        # 2. Intención de pago, con una clave nueva por intento
        idempotency_key = uuid.uuid4().hex
        intent = await self.payment_service.create_payment_intent(payment_request, idempotency_key)
        self.step = CheckoutStep.INTENT_CREATED

        # 3. Autorización de la tarjeta en el SDK externo
        self.step = CheckoutStep.AUTHORIZING
        payment_intent_id = await self._authorize(intent, customer, card)

        # 4. Confirmación del pago y creación del pedido
        self.step = CheckoutStep.CONFIRMING
        order = await self.payment_service.confirm_payment(payment_intent_id, payment_request)

        # 5. Fin
        self.step = CheckoutStep.DONE
        await self._clear_cart_after_order(order.id)
        logger.info(f"Checkout completado: pedido {order.id} por {payment_request.amount} {self.currency}")
        return CheckoutResult(
            order_id=order.id,
            order_number=order.formatted_order_number,
            amount=payment_request.amount,
            payment_intent_id=payment_intent_id,
        )

    async def _authorize(self, intent: PaymentIntent, customer: CustomerInfo, card: Any) -> str:
        """Pasa el client_secret al SDK; si no hay éxito, cancela la intención y lanza PaymentError."""
        try:
            authorization = await self.authorizer.confirm_card_payment(
                intent.client_secret, customer.billing_details(), card
            )
        except StorefrontError:
            await self._cancel_intent(intent.payment_intent_id)
            raise
        except Exception as e:
            await self._cancel_intent(intent.payment_intent_id)
            raise PaymentError(str(e) or "El pago ha fallado.", intent.payment_intent_id) from e

        if not authorization.succeeded:
            await self._cancel_intent(intent.payment_intent_id)
            raise PaymentError(
                authorization.error_message or "El pago no se ha completado.",
                intent.payment_intent_id,
            )
        return authorization.payment_intent_id or intent.payment_intent_id

    async def _cancel_intent(self, payment_intent_id: str) -> None:
        try:
            await self.payment_service.cancel_payment(payment_intent_id)
        except StorefrontError as e:
            # El error original del pago es el que se comunica al usuario
            logger.warning(f"No se pudo cancelar la intención {payment_intent_id}: {e.message}")

    async def _clear_cart_after_order(self, order_id: str) -> None:
        try:
            await self.cart.clear()
        except StorageError as e:
            # El pedido ya existe en el backend; no se informa como fallo del checkout
            logger.error(f"Pedido {order_id} confirmado pero no se pudo vaciar el carrito: {e.message}")
