"""Application DTOs for checkout."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class CustomerDTO(BaseModel):
    """Buyer contact details."""

    name: str = Field(..., min_length=1, max_length=255, description="Buyer name")
    email: str = Field(
        ..., max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Buyer email"
    )
    phone: str = Field(..., min_length=7, max_length=20, description="Buyer phone")
    address: str = Field(..., min_length=1, description="Shipping address")

    model_config = {"frozen": True, "str_strip_whitespace": True}


class CartItemDTO(BaseModel):
    """One cart line: a catalog product, or a custom pack."""

    product_id: Optional[str] = Field(None, description="Catalog product id")
    quantity: int = Field(..., gt=0, le=100, description="Quantity")
    is_custom: bool = Field(default=False, description="Custom pack (no catalog product)")
    custom_price: Optional[Decimal] = Field(None, ge=0, description="Custom pack price")
    custom_title: Optional[str] = Field(None, max_length=500, description="Custom pack title")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_shape(self) -> "CartItemDTO":
        if self.is_custom and self.custom_price is None:
            raise ValueError("custom items require custom_price")
        if not self.is_custom and not self.product_id:
            raise ValueError("catalog items require product_id")
        return self


class StartCheckoutRequest(BaseModel):
    """Request DTO for creating a pending order and its gateway order."""

    customer: CustomerDTO = Field(..., description="Buyer details")
    items: List[CartItemDTO] = Field(..., min_length=1, description="Cart lines")
    coupon_code: Optional[str] = Field(None, max_length=64, description="Coupon code")

    model_config = {"frozen": True}


class CheckoutResponse(BaseModel):
    """Response DTO for a started checkout."""

    order_id: str = Field(..., description="Order ID")
    gateway_order_id: str = Field(..., description="Gateway order to pay against")
    amount_minor: int = Field(..., ge=0, description="Amount in minor units (paise)")
    currency: str = Field(..., description="Currency code")
    discount_amount: Decimal = Field(..., ge=0, description="Applied discount")
    coupon_code: Optional[str] = Field(None, description="Applied coupon, if any")
    expires_at: datetime = Field(..., description="Payment window end (UTC)")
    key_id: str = Field(default="", description="Public gateway key for the buyer widget")

    model_config = {"frozen": True}


class PlacePaidOrderRequest(BaseModel):
    """Request DTO for the combined create-and-confirm path."""

    customer: CustomerDTO = Field(..., description="Buyer details")
    items: List[CartItemDTO] = Field(..., min_length=1, description="Cart lines")
    coupon_code: Optional[str] = Field(None, max_length=64, description="Coupon code")
    razorpay_order_id: str = Field(..., min_length=1, description="Gateway order ID")
    razorpay_payment_id: str = Field(..., min_length=1, description="Gateway payment ID")
    razorpay_signature: str = Field(..., min_length=1, description="Buyer-redirect signature")

    model_config = {"frozen": True}
