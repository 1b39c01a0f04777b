# storefront/services/card_authorizer.py
"""
Integración con el SDK externo de pago con tarjeta.

La aplicación nunca ve los datos de la tarjeta: entrega al SDK el
`client_secret` de la intención de pago y los datos de facturación, y el SDK
se encarga de tokenizar la tarjeta y de cualquier desafío 3-D Secure. Aquí
solo se define la interfaz que usa el checkout y una implementación simulada
para desarrollo y pruebas.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from storefront.core.exceptions import PaymentError
from storefront.schemas.payment_schema import CardAuthorization, PaymentIntentStatus

logger = logging.getLogger(__name__)


class CardPaymentAuthorizer(ABC):
    """Interfaz del SDK de tarjetas que usa CheckoutService."""

    @abstractmethod
    async def confirm_card_payment(
        self,
        client_secret: str,
        billing_details: Dict[str, Any],
        card: Any = None,
    ) -> CardAuthorization:
        """
        Confirma el pago con la tarjeta indicada.

        Args:
            client_secret: secreto de la intención de pago, de un solo uso
            billing_details: nombre, email, teléfono y dirección del cliente
            card: referencia opaca al elemento de tarjeta del SDK
        """


def intent_id_from_secret(client_secret: str) -> str:
    """Los secretos tienen la forma `<intent_id>_secret_<sufijo>`."""
    return client_secret.split("_secret_")[0]


class SimulatedCardAuthorizer(CardPaymentAuthorizer):
    """
    SDK simulado. Aprueba cualquier tarjeta salvo los números de prueba de
    rechazo y de desafío fallido, con un retardo opcional para imitar la red.

    Se inicializa con la clave publicable igual que el SDK real. Con una
    clave de producción (`pk_live_...`) se niega a autorizar: un cobro real
    nunca debe pasar por el simulador.
    """

    DECLINED_CARD = "4000000000000002"
    CHALLENGE_FAILED_CARD = "4000008400001629"
    LIVE_KEY_PREFIX = "pk_live_"

    def __init__(self, publishable_key: Optional[str] = None, delay: float = 0.0):
        self.publishable_key = publishable_key
        self.delay = delay
        self.calls = 0

    @property
    def is_live(self) -> bool:
        return bool(self.publishable_key) and self.publishable_key.startswith(self.LIVE_KEY_PREFIX)

    async def confirm_card_payment(
        self,
        client_secret: str,
        billing_details: Dict[str, Any],
        card: Any = None,
    ) -> CardAuthorization:
        self.calls += 1
        if self.is_live:
            logger.error("Clave publicable de producción configurada con el SDK simulado")
            raise PaymentError(
                "El pago con tarjeta no está disponible en este entorno.",
                intent_id_from_secret(client_secret),
            )
        if self.delay:
            await asyncio.sleep(self.delay)

        payment_intent_id = intent_id_from_secret(client_secret)
        card_number = self._card_number(card)

        if card_number == self.DECLINED_CARD:
            logger.info(f"[SIMULADO] Tarjeta rechazada para {payment_intent_id}")
            return CardAuthorization(
                status=PaymentIntentStatus.REQUIRES_PAYMENT_METHOD,
                payment_intent_id=payment_intent_id,
                error_message="Your card was declined.",
            )
        if card_number == self.CHALLENGE_FAILED_CARD:
            logger.info(f"[SIMULADO] Desafío 3-D Secure fallido para {payment_intent_id}")
            return CardAuthorization(
                status=PaymentIntentStatus.REQUIRES_ACTION,
                payment_intent_id=payment_intent_id,
                error_message="We are unable to authenticate your payment method.",
            )

        logger.info(f"[SIMULADO] Pago autorizado para {payment_intent_id}")
        return CardAuthorization(status=PaymentIntentStatus.SUCCEEDED, payment_intent_id=payment_intent_id)

    @staticmethod
    def _card_number(card: Any) -> Optional[str]:
        if isinstance(card, dict):
            card = card.get("number")
        if card is None:
            return None
        return str(card).replace(" ", "")
