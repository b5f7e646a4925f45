"""Customer profile management: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class UpdateProfile:
    """Change a customer's name or phone. Fields left unset are not touched."""

    customer_id = Identifier(required=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    phone = String(max_length=20)


@storefront.command_handler(part_of=Customer)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        updates = {}
        for field in ("first_name", "last_name", "phone"):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value

        customer.update_profile(**updates)
        repo.add(customer)
