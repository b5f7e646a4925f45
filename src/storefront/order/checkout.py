"""Checkout: turn a customer's cart into an order.

This is the only operation that writes several aggregates. All of its
writes happen inside the command handler's Unit of Work, so the order,
the stock decrements, the customer's order link and the emptied cart are
committed together or not at all.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    shipping_address_id = Identifier(required=True)
    payment_method = String(max_length=50)


def _snapshot_address(address):
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zip_code": address.zip_code,
        "country": address.country,
    }


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        customer_repo = current_domain.repository_for(Customer)
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)

        customer = customer_repo.get(command.customer_id)

        cart = cart_repo.for_customer(customer.id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})

        address = customer.find_address(command.shipping_address_id)
        if address is None:
            raise ValidationError({"shipping_address_id": ["Invalid shipping address"]})

        # Validate every line before writing anything
        products = {}
        items_data = []
        for line in cart.lines:
            product = products.get(str(line.product_id))
            if product is None:
                product = product_repo.find_by_id(line.product_id)
                if product is None:
                    raise ValidationError({"items": [f"Product {line.product_id} is no longer available"]})
                products[str(product.id)] = product

            if not product.is_active:
                raise ValidationError({"items": [f"{product.name} is no longer available"]})

            requested = sum(ln.quantity for ln in cart.lines if str(ln.product_id) == str(product.id))
            if requested > product.stock_quantity:
                raise ValidationError(
                    {"items": [f"Insufficient stock for {product.name}: {product.stock_quantity} available"]}
                )

            items_data.append(
                {
                    "product_id": str(product.id),
                    "name": product.name,
                    "price": line.price_at_addition,
                    "quantity": line.quantity,
                    "selected_size": line.selected_size,
                    "selected_color": line.selected_color,
                }
            )

        order = Order.place(
            customer_id=customer.id,
            items_data=items_data,
            shipping_address=_snapshot_address(address),
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)

        for line in cart.lines:
            products[str(line.product_id)].withdraw_stock(line.quantity)
        for product in products.values():
            product_repo.add(product)

        customer.link_order(order.id)
        customer_repo.add(customer)

        cart.clear(order_id=order.id)
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(customer.id),
            total_amount=order.total_amount,
        )
        return str(order.id)
