"""
Gateway signature verification.

Two HMAC-SHA256 schemes are in play:

- Buyer redirect: HMAC(key_secret, "<gateway_order_id>|<payment_id>")
- Webhook: HMAC(webhook_secret, raw request body bytes)

Both digests are hex-encoded and compared in constant time.
"""
import hashlib
import hmac
import logging
from typing import Optional

from core.domain.errors import SignatureMismatch


logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Verifies buyer-redirect and webhook signatures."""

    def __init__(self, key_secret: str, webhook_secret: str):
        if not key_secret:
            raise ValueError("Gateway key secret is not configured")
        if not webhook_secret:
            raise ValueError("Gateway webhook secret is not configured")
        self._key_secret = key_secret.encode("utf-8")
        self._webhook_secret = webhook_secret.encode("utf-8")

    def payment_signature(self, gateway_order_id: str, payment_id: str) -> str:
        """Expected hex signature for a buyer redirect."""
        message = f"{gateway_order_id}|{payment_id}".encode("utf-8")
        return hmac.new(self._key_secret, message, hashlib.sha256).hexdigest()

    def webhook_signature(self, raw_body: bytes) -> str:
        """Expected hex signature for a webhook body."""
        return hmac.new(self._webhook_secret, raw_body, hashlib.sha256).hexdigest()

    def verify_payment(self, gateway_order_id: str, payment_id: str, signature: Optional[str]) -> None:
        """
        Verify a buyer-redirect signature.

        Raises:
            SignatureMismatch: signature missing or wrong
        """
        expected = self.payment_signature(gateway_order_id, payment_id)
        if not signature or not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
            logger.warning(
                f"🔒 Payment signature mismatch: gateway_order={gateway_order_id} "
                f"payment={payment_id}"
            )
            raise SignatureMismatch(
                "Payment signature mismatch",
                gateway_order_id=gateway_order_id,
                payment_id=payment_id,
            )

    def verify_webhook(self, raw_body: bytes, signature: Optional[str]) -> None:
        """
        Verify a webhook signature over the unparsed body.

        Raises:
            SignatureMismatch: header missing or wrong
        """
        if not signature:
            logger.warning("🔒 Webhook rejected: missing signature header")
            raise SignatureMismatch("Missing webhook signature")

        expected = self.webhook_signature(raw_body)
        if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
            logger.warning(f"🔒 Webhook signature mismatch ({len(raw_body)} bytes)")
            raise SignatureMismatch("Webhook signature mismatch")
