"""
Razorpay Orders API client.

Only the two calls checkout needs: create an order and fetch one back for
the amount cross-check.
"""
from typing import Any, Dict, Optional
import asyncio
import logging

import aiohttp

from core.application.interfaces import GatewayOrder, IPaymentGateway
from core.domain.errors import GatewayUnavailable
from core.settings.sections.gateway import GatewaySettings


logger = logging.getLogger(__name__)


class RazorpayClient(IPaymentGateway):
    """
    aiohttp implementation of the payment gateway.

    Every failure (network, timeout, auth, non-2xx, malformed body) surfaces
    as GatewayUnavailable.
    """

    def __init__(self, settings: GatewaySettings):
        """
        Initialize Razorpay client.

        Args:
            settings: Gateway settings with API credentials
        """
        if not settings.key_id or not settings.key_secret:
            raise ValueError("Razorpay key id and key secret must be configured")

        self.base_url = settings.base_url.rstrip("/")
        self._auth = aiohttp.BasicAuth(settings.key_id, settings.key_secret)
        self._timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
        logger.info(f"RazorpayClient initialized ({self.base_url})")

    async def fetch_order(self, gateway_order_id: str) -> GatewayOrder:
        payload = await self._request("GET", f"/orders/{gateway_order_id}")
        return self._to_gateway_order(payload)

    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        body = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        payload = await self._request("POST", "/orders", json=body)
        order = self._to_gateway_order(payload)
        logger.info(f"✅ Gateway order created: {order.gateway_order_id} ({amount_minor} {currency})")
        return order

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(auth=self._auth, timeout=self._timeout) as session:
                async with session.request(method, url, **kwargs) as response:
                    if response.status >= 300:
                        error_text = await response.text()
                        logger.error(
                            f"Razorpay API error: {method} {path} -> {response.status} - {error_text[:200]}"
                        )
                        raise GatewayUnavailable(
                            f"Gateway returned HTTP {response.status}",
                            status=response.status,
                        )
                    return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Razorpay request failed: {method} {path}: {e!r}")
            raise GatewayUnavailable(f"Gateway request failed: {e!r}") from e
        except ValueError as e:
            raise GatewayUnavailable(f"Malformed gateway response: {e!r}") from e

    @staticmethod
    def _to_gateway_order(payload: Dict[str, Any]) -> GatewayOrder:
        try:
            return GatewayOrder(
                gateway_order_id=str(payload["id"]),
                amount_minor=int(payload["amount"]),
                currency=str(payload.get("currency", "INR")),
                status=str(payload.get("status", "created")),
                notes=payload.get("notes") or {},
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GatewayUnavailable(f"Malformed gateway response: {e!r}") from e
