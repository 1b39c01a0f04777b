# storefront/services/theme_service.py
"""
Preferencia de tema (oscuro/claro) persistida. Por defecto, oscuro.
"""

from storefront.db.persisted_state import PersistedState
from storefront.db.storage import Storage
from storefront.schemas.cart_schema import ThemeState


class ThemeService:

    def __init__(self, storage: Storage, key: str = "theme-storage"):
        self._state = PersistedState(storage, key, ThemeState)
        self._current = ThemeState()

    async def load(self) -> None:
        self._current = await self._state.read()

    @property
    def is_dark(self) -> bool:
        return self._current.is_dark

    async def set_theme(self, is_dark: bool) -> None:
        new_state = ThemeState(is_dark=is_dark)
        await self._state.write(new_state)
        self._current = new_state

    async def toggle(self) -> bool:
        await self.set_theme(not self.is_dark)
        return self.is_dark
