"""Application DTOs for payment confirmation."""

from typing import Optional

from pydantic import BaseModel, Field


class VerifyPaymentRequest(BaseModel):
    """Buyer-redirect confirmation for an existing pending order."""

    razorpay_order_id: str = Field(..., min_length=1, description="Gateway order ID")
    razorpay_payment_id: str = Field(..., min_length=1, description="Gateway payment ID")
    razorpay_signature: str = Field(..., min_length=1, description="HMAC of order_id|payment_id")

    model_config = {"frozen": True}


class ConfirmationResponse(BaseModel):
    """Outcome of a successful (or already applied) confirmation."""

    success: bool = Field(default=True, description="Always true; failures are errors")
    order_id: str = Field(..., description="Order ID")
    status: str = Field(..., description="Order status after confirmation")
    already_confirmed: bool = Field(..., description="True if this was a replay")

    model_config = {"frozen": True}


class WebhookPaymentEntity(BaseModel):
    """Payment entity inside a gateway webhook."""

    id: str = Field(..., description="Gateway payment ID")
    order_id: Optional[str] = Field(None, description="Gateway order ID")
    amount: Optional[int] = Field(None, ge=0, description="Captured amount in minor units")
    currency: Optional[str] = Field(None, description="Currency code")
    status: Optional[str] = Field(None, description="Payment status")


class WebhookPaymentWrapper(BaseModel):
    entity: WebhookPaymentEntity


class WebhookPayload(BaseModel):
    payment: Optional[WebhookPaymentWrapper] = None


class WebhookEvent(BaseModel):
    """Gateway webhook body. Unknown fields are ignored."""

    event: str = Field(..., description="Event name, e.g. payment.captured")
    payload: WebhookPayload = Field(default_factory=WebhookPayload)


class WebhookAck(BaseModel):
    """Webhook response body."""

    status: str = Field(..., description="processed | already_processed | ignored")
    order_id: Optional[str] = Field(None, description="Order ID when known")
    reason: Optional[str] = Field(None, description="Error code for ignored events")
