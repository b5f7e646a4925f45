"""Order aggregate: the immutable record of a checked-out cart.

Items, total and shipping address are copied by value when the order is
placed, so later changes to products, prices or the customer's address book
never alter an existing order. Only the payment and fulfilment status fields
change after creation.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.shared.color import Color


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@storefront.value_object(part_of="Order")
class DeliveryAddress:
    """The shipping address as it was when the order was placed."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    selected_size = String(max_length=50)
    selected_color = ValueObject(Color)

    @property
    def subtotal(self):
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    shipping_address = ValueObject(DeliveryAddress)
    payment_method = String(max_length=50)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        expected = round(sum(item.price * item.quantity for item in self.items), 2)
        if round(self.total_amount or 0.0, 2) != expected:
            raise ValidationError({"total_amount": [f"Total {self.total_amount} does not match item sum {expected}"]})

    @classmethod
    def place(cls, customer_id, items_data, shipping_address, payment_method=None):
        """Build a pending order from item snapshots.

        Args:
            customer_id: The customer placing the order.
            items_data: List of dicts with product_id, name, price, quantity,
                        selected_size and selected_color (a Color or None).
            shipping_address: Dict with street, city, state, zip_code, country.
            payment_method: Free-form label such as ``"card"`` or ``"cod"``.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        items = [OrderItem(**item) for item in items_data]
        total = round(sum(item.price * item.quantity for item in items), 2)

        order = cls(
            customer_id=customer_id,
            items=items,
            total_amount=total,
            shipping_address=DeliveryAddress(**shipping_address),
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=sum(item.quantity for item in items),
                total_amount=total,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order
