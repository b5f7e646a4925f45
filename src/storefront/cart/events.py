"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """Units of a product variant were added to a cart, creating or growing a line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selected_size = String()
    color_name = String()
    color_hex = String()
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)
    price_at_addition = Float(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selected_size = String()
    color_name = String()
    color_hex = String()
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selected_size = String()
    color_name = String()
    color_hex = String()


@storefront.event(part_of="Cart")
class CartCleared:
    """All lines were removed from a cart, normally because it was checked out."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier()
