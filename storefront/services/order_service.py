# storefront/services/order_service.py
"""
Servicio de pedidos: creación desde la tienda y gestión desde el panel.
"""

import logging
from typing import Optional

from storefront.schemas.order_schema import (
    OrderCreate,
    OrderPage,
    OrderResponse,
    OrderStatus,
    OrderStatusUpdate,
)
from storefront.services.base_service import BaseService

logger = logging.getLogger(__name__)


class OrderService(BaseService):

    async def create_order(self, order_in: OrderCreate) -> OrderResponse:
        payload = await self.api.post("/orders", order_in)
        order = self._unwrap(payload, OrderResponse, "crear el pedido")
        logger.info(f"Pedido creado: {order.id} ({len(order_in.items)} líneas)")
        return order

    async def list_orders(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        search: Optional[str] = None,
    ) -> OrderPage:
        """Listado paginado de pedidos con filtros opcionales por estado y texto."""
        params = {
            "page": page,
            "limit": limit,
            "status": status.value if status else None,
            "search": search or None,
        }
        payload = await self.api.get("/orders", params=params)
        return self._unwrap(payload, OrderPage, "listar pedidos")

    async def get_order(self, order_id: str) -> OrderResponse:
        payload = await self.api.get(f"/orders/{order_id}")
        return self._unwrap(payload, OrderResponse, "obtener el pedido")

    async def update_order_status(
        self, order_id: str, status: OrderStatus, note: Optional[str] = None
    ) -> OrderResponse:
        body = OrderStatusUpdate(status=status, note=note)
        payload = await self.api.put(f"/orders/{order_id}/status", body)
        order = self._unwrap(payload, OrderResponse, "actualizar el estado del pedido")
        logger.info(f"Pedido {order_id} pasa a estado '{status.value}'")
        return order
