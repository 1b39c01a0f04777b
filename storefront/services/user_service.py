# storefront/services/user_service.py
"""
Gestión de los usuarios del back-office (requiere sesión de administrador).
"""

import logging
from typing import Optional

from storefront.schemas.user_schema import AdminUser, UserCreate, UserRole, UsersPage, UserStats, UserUpdate
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)


class UserService(BaseService):

    async def list_users(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> UsersPage:
        params = {
            "page": page,
            "limit": limit,
            "search": search or None,
            "role": role.value if role else None,
            "isActive": None if is_active is None else str(is_active).lower(),
        }
        payload = await self.api.get("/admin/users", params=params)
        return self._unwrap(payload, UsersPage, "listar usuarios")

    async def get_user(self, user_id: str) -> AdminUser:
        payload = await self.api.get(f"/admin/users/{user_id}")
        return self._unwrap(payload, AdminUser, "obtener el usuario")

    async def create_user(self, user_in: UserCreate) -> AdminUser:
        payload = await self.api.post("/admin/users", user_in)
        user = self._unwrap(payload, AdminUser, "crear el usuario")
        logger.info(f"Usuario creado: {user.email} ({user.role.value})")
        return user

    async def update_user(self, user_id: str, user_in: UserUpdate) -> AdminUser:
        payload = await self.api.put(f"/admin/users/{user_id}", user_in)
        return self._unwrap(payload, AdminUser, "actualizar el usuario")

    async def update_user_password(self, user_id: str, new_password: str) -> None:
        await self.api.patch(f"/admin/users/{user_id}/password", {"newPassword": new_password})

    async def delete_user(self, user_id: str) -> None:
        """Desactiva el usuario (borrado lógico)."""
        await self.api.delete(f"/admin/users/{user_id}")
        logger.info(f"Usuario desactivado: {user_id}")

    async def permanent_delete_user(self, user_id: str) -> None:
        await self.api.delete(f"/admin/users/{user_id}/permanent")
        logger.warning(f"Usuario eliminado definitivamente: {user_id}")

    async def get_user_stats(self) -> UserStats:
        payload = await self.api.get("/admin/users/stats")
        return self._unwrap(payload, UserStats, "obtener estadísticas de usuarios")
