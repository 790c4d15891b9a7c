"""SQLAlchemy implementation of OrderRepository."""

from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.clock import utcnow
from core.domain.entities.order import Order, OrderStatus
from core.domain.repositories.order_repository import OrderRepository

from ..mappers import OrderMapper
from ..models.order_model import OrderModel


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> None:
        """Insert order aggregate with its item snapshots.

        Args:
            order: Order domain aggregate
        """
        self._session.add(OrderMapper.to_persistence(order))
        await self._session.flush()  # Propagate to DB without committing

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.gateway_order_id == gateway_order_id)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """List orders with pagination, newest first.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates
        """
        result = await self._session.execute(
            select(OrderModel)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
            .limit(limit)
            .offset(offset)
        )
        models = result.scalars().all()

        return [OrderMapper.to_domain(model) for model in models]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(OrderModel))
        return result.scalar_one()

    async def transition_status(
        self,
        order_id: str,
        from_status: OrderStatus,
        to_status: OrderStatus,
        payment_id: Optional[str] = None,
    ) -> bool:
        """Compare-and-set the status in a single UPDATE.

        The WHERE clause carries the expected status, so of two racing
        transactions only one can match the row.
        """
        values = {"status": to_status.value, "updated_at": utcnow()}
        if payment_id is not None:
            values["payment_id"] = payment_id

        result = await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .where(OrderModel.status == from_status.value)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def get_status(self, order_id: str) -> Optional[OrderStatus]:
        result = await self._session.execute(
            select(OrderModel.status).where(OrderModel.id == order_id)
        )
        status = result.scalar_one_or_none()
        return OrderStatus(status) if status is not None else None
