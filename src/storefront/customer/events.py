"""Domain events for the Customer aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    """A customer record was created on first login."""

    __version__ = 1

    customer_id = Identifier(required=True)
    external_id = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="Customer")
class ProfileUpdated:
    """A customer's name or phone number was changed."""

    __version__ = 1

    customer_id = Identifier(required=True)
    first_name = String()
    last_name = String()
    phone = String()


@storefront.event(part_of="Customer")
class AddressAdded:
    __version__ = 1

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    street = String(required=True)
    city = String(required=True)
    state = String(required=True)
    zip_code = String(required=True)
    country = String(required=True)
    is_default = Boolean(required=True)


@storefront.event(part_of="Customer")
class AddressUpdated:
    __version__ = 1

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String()
    street = String()
    city = String()
    state = String()
    zip_code = String()
    country = String()
    is_default = Boolean()


@storefront.event(part_of="Customer")
class AddressRemoved:
    __version__ = 1

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.event(part_of="Customer")
class WishlistItemAdded:
    __version__ = 1

    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Customer")
class WishlistItemRemoved:
    __version__ = 1

    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Customer")
class RoleChanged:
    """An administrator changed a customer's role."""

    __version__ = 1

    customer_id = Identifier(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)
