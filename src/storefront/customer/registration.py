"""Customer synchronisation on login: command and handler."""

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Customer")
class SyncCustomer:
    """Create the customer record for a verified identity, or refresh it."""

    external_id = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)


@storefront.command_handler(part_of=Customer)
class SyncCustomerHandler:
    @handle(SyncCustomer)
    def sync_customer(self, command):
        repo = current_domain.repository_for(Customer)

        customer = repo.find_by_external_id(command.external_id)
        holder = repo.find_by_email(command.email)
        if holder is not None and (customer is None or holder.id != customer.id):
            raise InvalidOperationError("Email is already registered to another account")

        if customer is not None:
            customer.change_email(command.email)
            repo.add(customer)
            return str(customer.id)

        customer = Customer.register(
            external_id=command.external_id,
            email=command.email,
            first_name=command.first_name or "",
            last_name=command.last_name,
        )
        repo.add(customer)
        logger.info("customer_registered", customer_id=str(customer.id))
        return str(customer.id)
