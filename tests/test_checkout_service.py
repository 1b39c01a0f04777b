# tests/test_checkout_service.py
"""
Tests del orquestador de checkout: importe enviado, orden de los pasos,
idempotencia por intento y comportamiento ante fallos.
"""

import json

import httpx
import pytest

from conftest import make_product
from storefront.core.exceptions import ApiError, PaymentError, ValidationError
from storefront.schemas.payment_schema import DeliveryRegion
from storefront.services.card_authorizer import SimulatedCardAuthorizer
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService, CheckoutStep, validate_customer_info
from storefront.services.payment_service import PaymentService

FORM = {
    "email": "ada@example.com",
    "mobile": "08012345678",
    "full_name": "Ada Obi",
    "address": "1 Marina Road",
    "city": "Lagos Island",
    "state": "Lagos",
}

VALID_CARD = "4242 4242 4242 4242"


@pytest.fixture
async def cart(storage):
    service = CartService(storage)
    await service.load()
    await service.add_item(make_product("p1", price=1000), quantity=1)
    await service.add_item(make_product("p2", price=2000), quantity=2)
    return service


@pytest.fixture
def authorizer():
    return SimulatedCardAuthorizer()


@pytest.fixture
def checkout(cart, api_client, authorizer):
    return CheckoutService(
        cart,
        PaymentService(api_client),
        authorizer,
        currency="ngn",
        delivery_regions=[DeliveryRegion(name="Lagos", fee=500)],
    )


@pytest.fixture
def payment_backend(backend):
    counter = {"intents": 0}

    def create_intent(request):
        counter["intents"] += 1
        intent_id = f"pi_{counter['intents']}"
        return httpx.Response(200, json={"data": {
            "paymentIntentId": intent_id,
            "clientSecret": f"{intent_id}_secret_xyz",
        }})

    backend.add("POST", "/payments/create-payment-intent", handler=create_intent)
    backend.add("POST", "/payments/confirm/pi_1", {"data": {"id": "o1", "formattedOrderNumber": "ORD-0001"}})
    backend.add("POST", "/payments/confirm/pi_2", {"data": {"id": "o2", "formattedOrderNumber": "ORD-0002"}})
    backend.add("POST", "/payments/cancel/pi_1", {"data": None})
    return backend


def requests_to(backend, suffix):
    return [r for r in backend.requests if r.url.path.endswith(suffix)]


async def test_amount_includes_delivery_fee(checkout, payment_backend):
    """1000×1 + 2000×2 + 500 de envío = 5500."""
    await checkout.checkout(FORM, card=VALID_CARD)

    intent_request = requests_to(payment_backend, "/create-payment-intent")[0]
    body = json.loads(intent_request.content)
    assert body["amount"] == 5500
    assert body["deliveryFee"] == 500
    assert body["currency"] == "ngn"
    assert [item["quantity"] for item in body["items"]] == [1, 2]
    assert body["customerInfo"]["fullName"] == "Ada Obi"


async def test_successful_checkout_clears_cart(checkout, cart, payment_backend):
    result = await checkout.checkout(FORM, card=VALID_CARD)

    assert result.order_id == "o1"
    assert result.order_number == "ORD-0001"
    assert result.amount == 5500
    assert result.payment_intent_id == "pi_1"
    assert checkout.step == CheckoutStep.DONE
    assert cart.is_empty

    paths = [r.url.path for r in payment_backend.requests]
    assert paths == ["/api/payments/create-payment-intent", "/api/payments/confirm/pi_1"]


async def test_quote(checkout):
    quote = checkout.quote("Lagos")
    assert (quote.subtotal, quote.delivery_fee, quote.total) == (5000, 500, 5500)


async def test_declined_card_returns_to_info_step(checkout, cart, payment_backend):
    with pytest.raises(PaymentError) as exc_info:
        await checkout.checkout(FORM, card=SimulatedCardAuthorizer.DECLINED_CARD)

    assert exc_info.value.payment_intent_id == "pi_1"
    assert checkout.step == CheckoutStep.COLLECTING_INFO
    assert checkout.last_error == "Your card was declined."
    assert cart.item_count() == 3
    assert requests_to(payment_backend, "/confirm/pi_1") == []
    assert len(requests_to(payment_backend, "/cancel/pi_1")) == 1


async def test_retry_creates_new_intent_with_new_idempotency_key(checkout, payment_backend):
    with pytest.raises(PaymentError):
        await checkout.checkout(FORM, card=SimulatedCardAuthorizer.DECLINED_CARD)

    result = await checkout.checkout(FORM, card=VALID_CARD)

    intent_requests = requests_to(payment_backend, "/create-payment-intent")
    keys = [r.headers["idempotency-key"] for r in intent_requests]
    assert len(intent_requests) == 2
    assert keys[0] != keys[1]
    assert result.payment_intent_id == "pi_2"


async def test_confirmation_failure_keeps_cart(checkout, cart, payment_backend):
    payment_backend.add("POST", "/payments/confirm/pi_1", {"message": "Intent mismatch"}, status=400)

    with pytest.raises(ApiError):
        await checkout.checkout(FORM, card=VALID_CARD)

    assert checkout.step == CheckoutStep.COLLECTING_INFO
    assert checkout.last_error == "Intent mismatch"
    assert not cart.is_empty


async def test_invalid_form_never_reaches_network(checkout, backend):
    with pytest.raises(ValidationError) as exc_info:
        await checkout.checkout(dict(FORM, email="not-an-email", city="  "))

    assert set(exc_info.value.errors) == {"email", "city"}
    assert backend.requests == []


async def test_unknown_region_is_rejected(checkout, backend):
    with pytest.raises(ValidationError) as exc_info:
        await checkout.checkout(dict(FORM, state="Atlantis"))

    assert "state" in exc_info.value.errors
    assert backend.requests == []


async def test_empty_cart_is_rejected(checkout, cart, backend):
    await cart.clear()

    with pytest.raises(ValidationError):
        await checkout.checkout(FORM, card=VALID_CARD)

    assert backend.requests == []


def test_validate_customer_info_strips_values():
    customer = validate_customer_info(dict(FORM, full_name="  Ada Obi  "))
    assert customer.full_name == "Ada Obi"
    assert customer.billing_details()["address"]["city"] == "Lagos Island"


async def test_failed_challenge_is_a_payment_error(checkout, cart, payment_backend):
    with pytest.raises(PaymentError) as exc_info:
        await checkout.checkout(FORM, card={"number": SimulatedCardAuthorizer.CHALLENGE_FAILED_CARD})

    assert "authenticate" in exc_info.value.message
    assert not cart.is_empty


class BrokenAuthorizer(SimulatedCardAuthorizer):
    async def confirm_card_payment(self, client_secret, billing_details, card=None):
        raise RuntimeError("sdk not loaded")


async def test_authorizer_crash_cancels_intent(cart, api_client, payment_backend):
    checkout = CheckoutService(
        cart, PaymentService(api_client), BrokenAuthorizer(),
        delivery_regions=[DeliveryRegion(name="Lagos", fee=500)],
    )

    with pytest.raises(PaymentError) as exc_info:
        await checkout.checkout(FORM, card=VALID_CARD)

    assert exc_info.value.message == "sdk not loaded"
    assert len(requests_to(payment_backend, "/cancel/pi_1")) == 1
    assert checkout.step == CheckoutStep.COLLECTING_INFO


async def test_live_key_never_authorizes_with_simulator(cart, api_client, payment_backend):
    authorizer = SimulatedCardAuthorizer("pk_live_51abc")
    checkout = CheckoutService(
        cart, PaymentService(api_client), authorizer,
        delivery_regions=[DeliveryRegion(name="Lagos", fee=500)],
    )

    with pytest.raises(PaymentError) as exc_info:
        await checkout.checkout(FORM, card=VALID_CARD)

    assert exc_info.value.payment_intent_id == "pi_1"
    assert len(requests_to(payment_backend, "/cancel/pi_1")) == 1
    assert requests_to(payment_backend, "/confirm/pi_1") == []
    assert not cart.is_empty
