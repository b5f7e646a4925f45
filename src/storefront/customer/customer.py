"""Customer aggregate root with ShippingAddress entity.

A Customer is the storefront's record of a person whose identity is owned by
an external identity provider. It is keyed by that provider's subject id and
owns the address book, the wishlist and references to placed orders.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, String, Text

from storefront.domain import storefront

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

ADDRESS_FIELDS = ("label", "street", "city", "state", "zip_code", "country")
REQUIRED_ADDRESS_FIELDS = ("street", "city", "state", "zip_code", "country")


class CustomerRole(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.entity(part_of="Customer")
class ShippingAddress:
    """A delivery address in the customer's address book."""

    label = String(max_length=50)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    is_default = Boolean(default=False)


@storefront.aggregate
class Customer:
    """A registered shopper, identified by a system id and an external subject id.

    Addresses, wishlist and order references change together with the
    customer, so the "exactly one default address" invariant can be checked
    on every save.
    """

    external_id = String(required=True, max_length=255, unique=True)
    email = String(required=True, max_length=254)
    first_name = String(max_length=100, default="")
    last_name = String(max_length=100)
    phone = String(max_length=20)
    addresses = HasMany(ShippingAddress)
    wishlist = Text()  # JSON array of product ids
    order_ids = Text()  # JSON array of order ids, oldest first
    role = String(choices=CustomerRole, default=CustomerRole.CUSTOMER.value)
    registered_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, external_id, email, first_name="", last_name=None, phone=None):
        from storefront.customer.events import CustomerRegistered

        now = datetime.now(UTC)
        customer = cls(
            external_id=external_id,
            email=email.strip().lower(),
            first_name=first_name or "",
            last_name=last_name,
            phone=phone,
            wishlist=json.dumps([]),
            order_ids=json.dumps([]),
            registered_at=now,
            updated_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                external_id=external_id,
                email=customer.email,
                registered_at=now,
            )
        )
        return customer

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def update_profile(self, first_name=_UNSET, last_name=_UNSET, phone=_UNSET):
        from storefront.customer.events import ProfileUpdated

        if first_name is not _UNSET:
            self.first_name = first_name or ""
        if last_name is not _UNSET:
            self.last_name = last_name
        if phone is not _UNSET:
            self.phone = phone
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProfileUpdated(
                customer_id=str(self.id),
                first_name=self.first_name,
                last_name=self.last_name,
                phone=self.phone,
            )
        )

    def change_email(self, email):
        email = email.strip().lower()
        if email != self.email:
            self.email = email
            self.updated_at = datetime.now(UTC)

    def change_role(self, role):
        from storefront.customer.events import RoleChanged

        if role not in [r.value for r in CustomerRole]:
            raise ValidationError({"role": [f"Invalid role: {role}"]})

        previous_role = self.role
        self.role = role
        self.updated_at = datetime.now(UTC)
        self.raise_(
            RoleChanged(
                customer_id=str(self.id),
                previous_role=previous_role,
                new_role=role,
            )
        )

    @property
    def is_admin(self):
        return self.role == CustomerRole.ADMIN.value

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def find_address(self, address_id):
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def add_address(self, street, city, state, zip_code, country, label=None, is_default=False):
        from storefront.customer.events import AddressAdded

        values = {"street": street, "city": city, "state": state, "zip_code": zip_code, "country": country}
        missing = [name for name, value in values.items() if not value or not str(value).strip()]
        if missing:
            raise ValidationError(
                {name: ["is required"] for name in missing}
                | {"address": ["All address fields (street, city, state, zip_code, country) are required"]}
            )

        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = ShippingAddress(label=label, is_default=is_default, **values)
            self.add_addresses(address)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            AddressAdded(
                customer_id=str(self.id),
                address_id=str(address.id),
                street=street,
                city=city,
                state=state,
                zip_code=zip_code,
                country=country,
                is_default=is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **changes):
        from storefront.customer.events import AddressUpdated

        address = self.find_address(address_id)
        if address is None:
            raise ObjectNotFoundError({"address": ["Shipping address not found"]})

        unknown = set(changes) - set(ADDRESS_FIELDS)
        if unknown:
            raise ValidationError({field: ["Unknown address field"] for field in sorted(unknown)})

        blank = [f for f in REQUIRED_ADDRESS_FIELDS if f in changes and not (changes[f] or "").strip()]
        if blank:
            raise ValidationError({f: ["cannot be blank"] for f in blank})

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if str(addr.id) != str(address_id) and addr.is_default:
                        addr.is_default = False
                address.is_default = True

            for field, value in changes.items():
                setattr(address, field, value)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            AddressUpdated(
                customer_id=str(self.id),
                address_id=str(address_id),
                is_default=address.is_default,
                **changes,
            )
        )
        return address

    def remove_address(self, address_id):
        from storefront.customer.events import AddressRemoved

        address = self.find_address(address_id)
        if address is None:
            raise ObjectNotFoundError({"address": ["Shipping address not found"]})

        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # Promote the first remaining address when the default goes away
            if was_default and self.addresses and not any(a.is_default for a in self.addresses):
                self.addresses[0].is_default = True

        self.updated_at = datetime.now(UTC)
        self.raise_(
            AddressRemoved(
                customer_id=str(self.id),
                address_id=str(address_id),
            )
        )

    @property
    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    # -------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------
    @property
    def wishlist_ids(self):
        return json.loads(self.wishlist) if self.wishlist else []

    def add_to_wishlist(self, product_id):
        from storefront.customer.events import WishlistItemAdded

        product_ids = self.wishlist_ids
        if str(product_id) in product_ids:
            raise InvalidOperationError("Product already in wishlist")

        product_ids.append(str(product_id))
        self.wishlist = json.dumps(product_ids)
        self.updated_at = datetime.now(UTC)
        self.raise_(WishlistItemAdded(customer_id=str(self.id), product_id=str(product_id)))

    def remove_from_wishlist(self, product_id):
        from storefront.customer.events import WishlistItemRemoved

        product_ids = self.wishlist_ids
        if str(product_id) not in product_ids:
            raise ObjectNotFoundError({"wishlist": ["Product not found in wishlist"]})

        product_ids.remove(str(product_id))
        self.wishlist = json.dumps(product_ids)
        self.updated_at = datetime.now(UTC)
        self.raise_(WishlistItemRemoved(customer_id=str(self.id), product_id=str(product_id)))

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    @property
    def order_id_list(self):
        return json.loads(self.order_ids) if self.order_ids else []

    def link_order(self, order_id):
        order_ids = self.order_id_list
        order_ids.append(str(order_id))
        self.order_ids = json.dumps(order_ids)
        self.updated_at = datetime.now(UTC)
