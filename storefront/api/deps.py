# storefront/api/deps.py
"""
Módulo de dependencias del cliente.

Este archivo centraliza la construcción de todos los objetos que la interfaz
necesita: almacenamiento, cliente HTTP, stores persistidos y servicios. En
lugar de singletons globales, StorefrontContext los crea y los entrega
explícitamente, de modo que cada test o proceso puede montar el suyo.

Uso típico:

    async with StorefrontContext.from_settings() as ctx:
        products = await ctx.products.list_products()
        await ctx.cart.add_item(products[0])
"""

import logging
from typing import Optional

import httpx

from storefront.api.client import ApiClient
from storefront.core.config import Settings, settings
from storefront.db.storage import Storage, create_storage
from storefront.db.token_store import TokenStore
from storefront.services.auth_service import AuthService
from storefront.services.card_authorizer import CardPaymentAuthorizer, SimulatedCardAuthorizer
from storefront.services.cart_service import CartService
from storefront.services.category_service import CategoryService
from storefront.services.checkout_service import CheckoutService
from storefront.services.content_service import ContentService
from storefront.services.hero_slide_service import HeroSlideService
from storefront.services.order_service import OrderService
from storefront.services.payment_service import PaymentService
from storefront.services.product_service import ProductService
from storefront.services.theme_service import ThemeService
from storefront.services.upload_service import UploadService
from storefront.services.user_service import UserService
from storefront.services.wishlist_service import WishlistService

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    """
    Dependencia para obtener el objeto de configuración.
    """
    return settings


class StorefrontContext:
    """
    Contenedor de dependencias de una sesión del cliente.

    Al entrar en el contexto se cargan carrito, lista de deseos y tema desde
    el almacenamiento; al salir se cierran el cliente HTTP y el almacenamiento.
    """

    def __init__(
        self,
        config: Settings,
        storage: Storage,
        authorizer: Optional[CardPaymentAuthorizer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = config
        self.storage = storage
        self.token_store = TokenStore(storage, config.AUTH_TOKEN_KEY)
        self.api = ApiClient(
            config.API_URL,
            self.token_store,
            timeout=config.REQUEST_TIMEOUT,
            transport=transport,
        )

        # Estado local persistido
        self.cart = CartService(storage, config.CART_STORAGE_KEY)
        self.wishlist = WishlistService(storage, config.WISHLIST_STORAGE_KEY)
        self.theme = ThemeService(storage, config.THEME_STORAGE_KEY)

        # Servicios de dominio
        self.auth = AuthService(self.api, self.token_store)
        self.products = ProductService(self.api)
        self.categories = CategoryService(self.api)
        self.hero_slides = HeroSlideService(self.api)
        self.content = ContentService(self.api)
        self.orders = OrderService(self.api)
        self.users = UserService(self.api)
        self.uploads = UploadService(self.api)
        self.payments = PaymentService(self.api)
        self.checkout = CheckoutService(
            self.cart,
            self.payments,
            authorizer or SimulatedCardAuthorizer(config.PAYMENT_PUBLISHABLE_KEY),
            currency=config.CURRENCY,
        )

    @classmethod
    def from_settings(
        cls,
        config: Optional[Settings] = None,
        authorizer: Optional[CardPaymentAuthorizer] = None,
    ) -> "StorefrontContext":
        config = config or get_settings()
        return cls(config, create_storage(config), authorizer=authorizer)

    async def load(self) -> None:
        """Hidrata los stores persistidos."""
        await self.cart.load()
        await self.wishlist.load()
        await self.theme.load()
        logger.info(
            f"Estado local cargado: {self.cart.item_count()} artículos en el carrito, "
            f"{len(self.wishlist)} en la lista de deseos"
        )

    async def aclose(self) -> None:
        await self.api.aclose()
        await self.storage.close()

    async def __aenter__(self) -> "StorefrontContext":
        await self.load()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
