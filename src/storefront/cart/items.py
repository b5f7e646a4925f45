"""Cart line management: commands and handler.

Lines are addressed by product id plus the optional size and color, never by
a line id. Color arrives flattened as ``color_name`` / ``color_hex``.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    selected_size = String(max_length=50)
    color_name = String(max_length=50)
    color_hex = String(max_length=9)


@storefront.command(part_of="Cart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    selected_size = String(max_length=50)
    color_name = String(max_length=50)
    color_hex = String(max_length=9)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selected_size = String(max_length=50)
    color_name = String(max_length=50)
    color_hex = String(max_length=9)


def _color(command):
    if not command.color_name and not command.color_hex:
        return None
    return {"name": command.color_name, "hex_code": command.color_hex}


def _existing_cart(customer_id):
    cart = current_domain.repository_for(Cart).for_customer(customer_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": ["Cart not found"]})
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        customer = current_domain.repository_for(Customer).get(command.customer_id)
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active:
            raise ValidationError({"product_id": ["Product is not available"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(customer.id) or Cart.create(customer_id=customer.id)
        cart.add_item(
            product_id=product.id,
            quantity=command.quantity,
            price=product.price,
            size=command.selected_size,
            color=_color(command),
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = _existing_cart(command.customer_id)
        cart.update_item_quantity(
            product_id=command.product_id,
            quantity=command.quantity,
            size=command.selected_size,
            color=_color(command),
        )
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _existing_cart(command.customer_id)
        cart.remove_item(
            product_id=command.product_id,
            size=command.selected_size,
            color=_color(command),
        )
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
