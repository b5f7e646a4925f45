"""Customer role administration: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Customer")
class ChangeCustomerRole:
    """Promote a customer to admin or demote an admin back to customer."""

    customer_id = Identifier(required=True)
    role = String(required=True, max_length=20)


@storefront.command_handler(part_of=Customer)
class ChangeCustomerRoleHandler:
    @handle(ChangeCustomerRole)
    def change_role(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.change_role(command.role)
        repo.add(customer)
        logger.info("customer_role_changed", customer_id=str(customer.id), role=command.role)
