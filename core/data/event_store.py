"""
Event Store Implementation.

Append-only storage for order domain events. Events are written through
the same session as the state change they describe, so they commit or
roll back together with it.
"""
import logging
from typing import Any, Dict, Iterable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.events.base import DomainEvent

from .models.event_model import OrderEventModel


logger = logging.getLogger(__name__)


class EventStore:
    """
    Event Store for order domain events.

    Usage:
        async with create_uow(session_factory) as uow:
            await uow.events.append_all(order.get_domain_events())
            await uow.commit()
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize event store.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, event: DomainEvent) -> int:
        """
        Append event to store.

        Args:
            event: Domain event to append

        Returns:
            Sequence number assigned to the event
        """
        logger.info(
            f"Appending event: {event.event_type} "
            f"(aggregate: {event.aggregate_id})"
        )

        sequence_number = await self._get_next_sequence_number(event.aggregate_id)

        event_model = OrderEventModel(
            event_id=event.event_id,
            event_type=event.event_type,
            event_version=event.event_version,
            aggregate_id=event.aggregate_id,
            aggregate_type=event.aggregate_type,
            event_data=event.get_event_data(),
            execution_id=event.execution_id,
            occurred_at=event.occurred_at,
            sequence_number=sequence_number,
        )

        self.session.add(event_model)
        await self.session.flush()

        logger.debug(
            f"✅ Event appended: {event.event_type} "
            f"(sequence: {sequence_number})"
        )
        return sequence_number

    async def append_all(self, events: Iterable[DomainEvent]) -> int:
        """
        Append events in order.

        Returns:
            Number of events appended
        """
        count = 0
        for event in events:
            await self.append(event)
            count += 1
        return count

    async def get_events(self, aggregate_id: str) -> List[Dict[str, Any]]:
        """
        Get all event records for an aggregate, oldest first.

        Args:
            aggregate_id: Aggregate ID

        Returns:
            List of event dictionaries
        """
        result = await self.session.execute(
            select(OrderEventModel)
            .where(OrderEventModel.aggregate_id == aggregate_id)
            .order_by(OrderEventModel.sequence_number)
        )
        return [self._to_dict(model) for model in result.scalars().all()]

    async def _get_next_sequence_number(self, aggregate_id: str) -> int:
        result = await self.session.execute(
            select(func.max(OrderEventModel.sequence_number)).where(
                OrderEventModel.aggregate_id == aggregate_id
            )
        )
        max_seq = result.scalar()
        return (max_seq or 0) + 1

    @staticmethod
    def _to_dict(model: OrderEventModel) -> Dict[str, Any]:
        return {
            "event_id": model.event_id,
            "event_type": model.event_type,
            "event_version": model.event_version,
            "aggregate_id": model.aggregate_id,
            "aggregate_type": model.aggregate_type,
            "execution_id": model.execution_id,
            "occurred_at": model.occurred_at,
            "sequence_number": model.sequence_number,
            "data": model.event_data,
        }
