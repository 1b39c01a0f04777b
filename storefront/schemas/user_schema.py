# storefront/schemas/user_schema.py
"""
Esquemas Pydantic para los usuarios del panel de administración y su sesión.

El backend de usuarios devuelve el identificador como `_id`; el resto de
recursos usa `id`. AdminUser acepta ambos.
"""

from datetime import datetime
from typing import List, Optional
import enum

from pydantic import AliasChoices, EmailStr, Field

from storefront.schemas.base_schema import ApiModel


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


class UserRef(ApiModel):
    """Referencia resumida a otro usuario (creador, último editor)."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class AdminUser(ApiModel):
    """Usuario del back-office."""
    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = UserRole.USER
    permissions: List[str] = []
    is_active: bool = True
    last_login: Optional[datetime] = None
    profile_image: Optional[str] = None
    phone: Optional[str] = None
    created_by: Optional[UserRef] = None
    updated_by: Optional[UserRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class UserCreate(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str
    last_name: str
    role: Optional[UserRole] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None
    phone: Optional[str] = None


class UserUpdate(ApiModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8)


class UserStats(ApiModel):
    total_active: int
    total_inactive: int
    total_admins: int
    total_managers: int
    total_users: int
    new_users_last_month: int
    total: int


class UsersPage(ApiModel):
    users: List[AdminUser]
    total: int
    page: int
    limit: int
    total_pages: int


# ========================================
# SESIÓN DE ADMINISTRADOR
# ========================================

class AdminSession(ApiModel):
    """Respuesta del login: token bearer y usuario autenticado."""
    token: str
    user: AdminUser


class SessionCheck(ApiModel):
    """Respuesta de la verificación del token actual."""
    user: AdminUser
