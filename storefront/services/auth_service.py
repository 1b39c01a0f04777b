# storefront/services/auth_service.py
"""
Servicio de sesión del panel de administración.

El login devuelve un token bearer que se guarda en TokenStore; desde ese
momento ApiClient lo adjunta a todas las peticiones. No hay refresh token:
cuando caduca, `verify()` lo descarta y hay que volver a iniciar sesión.
"""

import logging
from typing import Optional

from storefront.api.client import ApiClient
from storefront.core.exceptions import AuthError
from storefront.db.token_store import TokenStore
from storefront.schemas.user_schema import AdminSession, AdminUser, SessionCheck
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):

    def __init__(self, api: ApiClient, token_store: TokenStore):
        super().__init__(api)
        self.token_store = token_store
        self.current_user: Optional[AdminUser] = None

    async def login(self, email: str, password: str) -> AdminUser:
        payload = await self.api.post("/auth/admin/login", {"email": email, "password": password})
        session = self._unwrap(payload, AdminSession, "iniciar sesión")
        await self.token_store.set(session.token)
        self.current_user = session.user
        logger.info(f"Sesión iniciada: {session.user.email}")
        return session.user

    async def verify(self) -> Optional[AdminUser]:
        """
        Comprueba el token guardado contra el backend.

        Devuelve None si no hay token. Si el backend lo rechaza, se elimina
        y se propaga el AuthError para que la UI redirija al login.
        """
        if not await self.token_store.get():
            self.current_user = None
            return None
        try:
            payload = await self.api.get("/auth/admin/verify")
        except AuthError:
            logger.info("Token rechazado por el backend, se descarta la sesión.")
            await self.token_store.clear()
            self.current_user = None
            raise
        self.current_user = self._unwrap(payload, SessionCheck, "verificar la sesión").user
        return self.current_user

    async def logout(self) -> None:
        await self.token_store.clear()
        self.current_user = None

    async def is_authenticated(self) -> bool:
        return await self.token_store.get() is not None

    @property
    def is_admin(self) -> bool:
        return self.current_user is not None and self.current_user.is_active

    async def request_password_reset(self, email: str) -> None:
        await self.api.post("/auth/admin/forgot-password", {"email": email})

    async def reset_password(self, token: str, new_password: str) -> None:
        await self.api.post("/auth/admin/reset-password", {"token": token, "newPassword": new_password})
