"""Customer address book: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.customer import ADDRESS_FIELDS, Customer
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class AddAddress:
    """Add a shipping address to a customer's address book."""

    customer_id = Identifier(required=True)
    label = String(max_length=50)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    is_default = Boolean(default=False)


@storefront.command(part_of="Customer")
class UpdateAddress:
    """Merge the provided fields over an existing address."""

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(max_length=50)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    is_default = Boolean()


@storefront.command(part_of="Customer")
class RemoveAddress:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command_handler(part_of=Customer)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        address = customer.add_address(
            street=command.street,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            country=command.country,
            label=command.label,
            is_default=bool(command.is_default),
        )
        repo.add(customer)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        updates = {}
        for field in ADDRESS_FIELDS:
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value

        customer.update_address(command.address_id, is_default=command.is_default, **updates)
        repo.add(customer)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.remove_address(command.address_id)
        repo.add(customer)
