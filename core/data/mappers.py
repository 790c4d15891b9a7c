"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal

from core.domain.entities.catalog import Coupon, DiscountType, Product
from core.domain.entities.order import CustomerDetails, Order, OrderItem, OrderStatus
from core.domain.value_objects import Money

from .models.catalog_model import CouponModel, ProductModel
from .models.order_model import OrderItemModel, OrderModel


def _money(value, currency: str) -> Money:
    return Money(amount=Decimal(str(value)), currency=currency)


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel, currency: str) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance
            currency: Currency of the owning order

        Returns:
            OrderItem domain entity
        """
        return OrderItem(
            title=model.title,
            price=_money(model.price, currency),
            quantity=model.quantity,
            product_id=model.product_id,
        )

    @staticmethod
    def to_persistence(entity: OrderItem, order_id: str) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem domain entity
            order_id: Order ID string

        Returns:
            OrderItemModel instance
        """
        return OrderItemModel(
            order_id=order_id,
            product_id=entity.product_id,
            title=entity.title,
            price=entity.price.amount,
            quantity=entity.quantity,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested items).

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        currency = model.currency
        items = [OrderItemMapper.to_domain(item_model, currency) for item_model in model.items]

        return Order(
            order_id=model.id,
            gateway_order_id=model.gateway_order_id,
            customer=CustomerDetails(
                name=model.customer_name,
                email=model.email,
                phone=model.phone,
                address=model.address,
            ),
            items=items,
            subtotal=_money(model.subtotal, currency),
            discount_amount=_money(model.discount_amount, currency),
            amount=_money(model.amount, currency),
            status=OrderStatus(model.status),
            coupon_code=model.coupon_code,
            payment_id=model.payment_id,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model (with nested items).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        order_model = OrderModel(
            id=entity.order_id,
            gateway_order_id=entity.gateway_order_id,
            payment_id=entity.payment_id,
            status=entity.status.value,
            subtotal=entity.subtotal.amount,
            discount_amount=entity.discount_amount.amount,
            amount=entity.amount.amount,
            currency=entity.currency,
            coupon_code=entity.coupon_code,
            customer_name=entity.customer.name,
            email=entity.customer.email,
            phone=entity.customer.phone,
            address=entity.customer.address,
            expires_at=entity.expires_at,
            created_at=entity.created_at,
        )

        order_model.items = [
            OrderItemMapper.to_persistence(item, entity.order_id)
            for item in entity.items
        ]

        return order_model


class ProductMapper:
    """Static mapper for Product ↔ ProductModel transformation."""

    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        return Product(
            product_id=model.id,
            title=model.title,
            price=_money(model.price, model.currency),
            stock=model.stock,
        )

    @staticmethod
    def to_persistence(entity: Product) -> ProductModel:
        return ProductModel(
            id=entity.product_id,
            title=entity.title,
            price=entity.price.amount,
            currency=entity.price.currency,
            stock=entity.stock,
        )


class CouponMapper:
    """Static mapper for Coupon ↔ CouponModel transformation."""

    @staticmethod
    def to_domain(model: CouponModel) -> Coupon:
        return Coupon(
            code=model.code,
            discount_type=DiscountType(model.discount_type),
            value=Decimal(str(model.value)),
            end_date=model.end_date,
            usage_limit=model.usage_limit,
            used_count=model.used_count,
            is_active=model.is_active,
        )

    @staticmethod
    def to_persistence(entity: Coupon) -> CouponModel:
        return CouponModel(
            code=entity.code,
            discount_type=entity.discount_type.value,
            value=entity.value,
            end_date=entity.end_date,
            usage_limit=entity.usage_limit,
            used_count=entity.used_count,
            is_active=entity.is_active,
        )
