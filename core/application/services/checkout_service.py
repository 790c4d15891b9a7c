"""Application service for checkout: pending orders and the combined paid path."""

from typing import List

from core.application.dtos.checkout_dto import (
    CartItemDTO,
    CheckoutResponse,
    CustomerDTO,
    PlacePaidOrderRequest,
    StartCheckoutRequest,
)
from core.application.dtos.payment_dto import ConfirmationResponse
from core.application.use_cases.place_paid_order import (
    PlacePaidOrderCommand,
    PlacePaidOrderUseCase,
)
from core.application.use_cases.start_checkout import (
    StartCheckoutCommand,
    StartCheckoutUseCase,
)
from core.domain.entities.order import CustomerDetails
from core.domain.pricing import CartLine


class CheckoutService:
    """
    Translates checkout DTOs into use case commands and back.
    """

    def __init__(
        self,
        start_checkout: StartCheckoutUseCase,
        place_paid_order: PlacePaidOrderUseCase,
        key_id: str = "",
    ) -> None:
        self._start_checkout = start_checkout
        self._place_paid_order = place_paid_order
        self._key_id = key_id

    async def start_checkout(self, request: StartCheckoutRequest) -> CheckoutResponse:
        order = await self._start_checkout.execute(
            StartCheckoutCommand(
                customer=self._to_customer(request.customer),
                lines=self._to_cart_lines(request.items),
                coupon_code=request.coupon_code,
            )
        )
        return CheckoutResponse(
            order_id=order.order_id,
            gateway_order_id=order.gateway_order_id,
            amount_minor=order.amount.to_minor_units(),
            currency=order.currency,
            discount_amount=order.discount_amount.amount,
            coupon_code=order.coupon_code,
            expires_at=order.expires_at,
            key_id=self._key_id,
        )

    async def place_paid_order(self, request: PlacePaidOrderRequest) -> ConfirmationResponse:
        result = await self._place_paid_order.execute(
            PlacePaidOrderCommand(
                customer=self._to_customer(request.customer),
                lines=self._to_cart_lines(request.items),
                gateway_order_id=request.razorpay_order_id,
                payment_id=request.razorpay_payment_id,
                signature=request.razorpay_signature,
                coupon_code=request.coupon_code,
            )
        )
        return ConfirmationResponse(
            order_id=result.order_id,
            status=result.status.value,
            already_confirmed=result.already_confirmed,
        )

    @staticmethod
    def _to_customer(customer: CustomerDTO) -> CustomerDetails:
        return CustomerDetails(
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
        )

    @staticmethod
    def _to_cart_lines(items: List[CartItemDTO]) -> List[CartLine]:
        return [
            CartLine(
                quantity=item.quantity,
                product_id=None if item.is_custom else item.product_id,
                custom_price=item.custom_price if item.is_custom else None,
                custom_title=item.custom_title if item.is_custom else None,
            )
            for item in items
        ]
