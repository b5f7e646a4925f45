"""Customer removal by an administrator: command and handler.

The customer record and their cart are deleted. Placed orders are kept.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.customer.customer import Customer
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Customer")
class RemoveCustomer:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Customer)
class RemoveCustomerHandler:
    @handle(RemoveCustomer)
    def remove_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_customer(customer.id)
        if cart is not None:
            cart_repo.remove(cart)

        repo.remove(customer)
        logger.info("customer_removed", customer_id=str(customer.id))
