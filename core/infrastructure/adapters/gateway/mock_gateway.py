"""
In-memory payment gateway.

This simulates the gateway for testing and demos.
"""
from typing import Any, Dict, Optional
import logging
import uuid

from core.application.interfaces import GatewayOrder, IPaymentGateway
from core.domain.errors import GatewayUnavailable


logger = logging.getLogger(__name__)


class MockPaymentGateway(IPaymentGateway):
    """
    Mock implementation of the payment gateway.

    Orders live in a dict. Set ``available = False`` to simulate an outage.
    """

    def __init__(self):
        self.orders: Dict[str, GatewayOrder] = {}
        self.available = True
        self.fetch_calls = []
        logger.info("MockPaymentGateway initialized (in-memory)")

    def register_order(self, gateway_order_id: str, amount_minor: int, currency: str = "INR") -> GatewayOrder:
        """Seed an order as if the gateway had created it (for testing)."""
        order = GatewayOrder(
            gateway_order_id=gateway_order_id,
            amount_minor=amount_minor,
            currency=currency,
        )
        self.orders[gateway_order_id] = order
        return order

    async def fetch_order(self, gateway_order_id: str) -> GatewayOrder:
        self.fetch_calls.append(gateway_order_id)
        if not self.available:
            raise GatewayUnavailable("Mock gateway offline")

        order = self.orders.get(gateway_order_id)
        if order is None:
            raise GatewayUnavailable(
                f"Gateway has no order {gateway_order_id}",
                status=404,
            )
        return order

    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        if not self.available:
            raise GatewayUnavailable("Mock gateway offline")

        order = GatewayOrder(
            gateway_order_id=f"order_{uuid.uuid4().hex[:14]}",
            amount_minor=amount_minor,
            currency=currency,
            notes=dict(notes or {}, receipt=receipt),
        )
        self.orders[order.gateway_order_id] = order
        logger.info(f"Mock gateway order created: {order.gateway_order_id} ({amount_minor} {currency})")
        return order
