# storefront/services/payment_service.py
"""
Servicio de pagos: ciclo de vida de la intención de pago en el backend.

La autorización de la tarjeta (tokenización, 3-D Secure) no pasa por aquí:
la hace el SDK externo con el `client_secret` de la intención. Ver
storefront/services/card_authorizer.py.
"""

import logging

from storefront.schemas.payment_schema import (
    ConfirmedOrder,
    PaymentIntent,
    PaymentRequest,
    PaymentStatusResponse,
)
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "Idempotency-Key"


class PaymentService(BaseService):

    async def create_payment_intent(self, payment_in: PaymentRequest, idempotency_key: str) -> PaymentIntent:
        """
        Crea una intención de pago por el importe total del pedido.

        La clave de idempotencia identifica el intento de checkout: si la
        petición se repite con la misma clave, el backend puede devolver la
        misma intención en lugar de crear otra.
        """
        payload = await self.api.post(
            "/payments/create-payment-intent",
            payment_in,
            headers={IDEMPOTENCY_HEADER: idempotency_key},
        )
        intent = self._unwrap(payload, PaymentIntent, "crear la intención de pago")
        logger.info(f"Intención de pago creada: {intent.payment_intent_id} ({payment_in.amount} {payment_in.currency})")
        return intent

    async def confirm_payment(self, payment_intent_id: str, payment_in: PaymentRequest) -> ConfirmedOrder:
        """Confirma el pago en el backend y crea el pedido con las líneas y la dirección."""
        payload = await self.api.post(f"/payments/confirm/{payment_intent_id}", payment_in)
        order = self._unwrap(payload, ConfirmedOrder, "confirmar el pago")
        logger.info(f"Pago {payment_intent_id} confirmado, pedido {order.id}")
        return order

    async def get_payment_status(self, payment_intent_id: str) -> PaymentStatusResponse:
        payload = await self.api.get(f"/payments/status/{payment_intent_id}")
        return self._unwrap(payload, PaymentStatusResponse, "consultar el estado del pago")

    async def cancel_payment(self, payment_intent_id: str) -> None:
        await self.api.post(f"/payments/cancel/{payment_intent_id}")
        logger.info(f"Intención de pago cancelada: {payment_intent_id}")
