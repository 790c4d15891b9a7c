"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class OrderItemDTO(BaseModel):
    """DTO for a frozen order item snapshot."""

    product_id: Optional[str] = Field(None, description="Catalog product id (None for custom items)")
    title: str = Field(..., description="Title at order time")
    price: Decimal = Field(..., ge=0, description="Unit price at order time")
    quantity: int = Field(..., gt=0, description="Quantity ordered")

    model_config = {"frozen": True}


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    order_id: str = Field(..., description="Order ID")
    gateway_order_id: str = Field(..., description="Gateway order ID")
    status: str = Field(..., description="Order status")
    subtotal: Decimal = Field(..., ge=0, description="Sum of item line totals")
    discount_amount: Decimal = Field(..., ge=0, description="Coupon discount")
    amount: Decimal = Field(..., ge=0, description="Payable amount")
    currency: str = Field(default="INR", description="Currency code")
    coupon_code: Optional[str] = Field(None, description="Applied coupon")
    payment_id: Optional[str] = Field(None, description="Gateway payment ID once confirmed")
    customer_name: str = Field(..., description="Buyer name")
    email: str = Field(..., description="Buyer email")
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")
    expires_at: Optional[datetime] = Field(None, description="Payment window end")
    created_at: datetime = Field(..., description="Creation time (UTC)")

    model_config = {"frozen": True}


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    total: int = Field(..., ge=0, description="Total number of orders, across all pages")

    model_config = {"frozen": True}
