"""Application service for Order queries."""

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import OrderDTO, OrderItemDTO, OrderListDTO
from core.data.uow import create_uow
from core.domain.entities.order import Order


class OrderApplicationService:
    """
    Application service for read-only order operations.

    Responsibilities:
    - Load aggregates through the UoW
    - Transform domain entities to DTOs
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def get_order(self, order_id: str) -> Optional[OrderDTO]:
        """Get order by ID.

        Args:
            order_id: Order ID string

        Returns:
            OrderDTO if found, None otherwise
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)

            if not order:
                return None

            return self._order_to_dto(order)

    async def list_orders(self, limit: int = 100, offset: int = 0) -> OrderListDTO:
        """List orders with pagination, newest first.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            OrderListDTO
        """
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_all(limit=limit, offset=offset)
            total = await uow.orders.count()
            dtos = [self._order_to_dto(order) for order in orders]
            return OrderListDTO(orders=dtos, total=total)

    async def get_order_events(self, order_id: str) -> List[Dict[str, Any]]:
        """Audit trail for an order, oldest first."""
        uow = create_uow(self._session_factory)
        async with uow:
            return await uow.events.get_events(order_id)

    def _order_to_dto(self, order: Order) -> OrderDTO:
        """Transform Order domain entity to OrderDTO.

        Args:
            order: Order domain entity

        Returns:
            OrderDTO instance
        """
        items = [
            OrderItemDTO(
                product_id=item.product_id,
                title=item.title,
                price=item.price.amount,
                quantity=item.quantity,
            )
            for item in order.items
        ]

        return OrderDTO(
            order_id=order.order_id,
            gateway_order_id=order.gateway_order_id,
            status=order.status.value,
            subtotal=order.subtotal.amount,
            discount_amount=order.discount_amount.amount,
            amount=order.amount.amount,
            currency=order.currency,
            coupon_code=order.coupon_code,
            payment_id=order.payment_id,
            customer_name=order.customer.name,
            email=order.customer.email,
            items=items,
            expires_at=order.expires_at,
            created_at=order.created_at,
        )
