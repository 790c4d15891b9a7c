"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order, OrderStatus


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> None:
        """Insert a new order with its item snapshots.

        Args:
            order: Order aggregate to persist
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by its own identifier.

        Args:
            order_id: Order id

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        """Retrieve order by the gateway-assigned order id (unique).

        Args:
            gateway_order_id: Gateway order id

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """List orders, newest first.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Total number of orders."""
        pass

    @abstractmethod
    async def transition_status(
        self,
        order_id: str,
        from_status: OrderStatus,
        to_status: OrderStatus,
        payment_id: Optional[str] = None,
    ) -> bool:
        """Compare-and-set the order status.

        Args:
            order_id: Order id
            from_status: Status the row must currently have
            to_status: New status
            payment_id: Payment id to record alongside

        Returns:
            True if the row was updated, False if its status did not match
        """
        pass

    @abstractmethod
    async def get_status(self, order_id: str) -> Optional[OrderStatus]:
        """Read the current status of an order.

        Args:
            order_id: Order id

        Returns:
            Current status, None if the order does not exist
        """
        pass
