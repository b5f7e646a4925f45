"""Customer wishlist: commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class AddToWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Customer")
class RemoveFromWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Customer)
class WishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        # Raises ObjectNotFoundError when the product does not exist
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.add_to_wishlist(command.product_id)
        repo.add(customer)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.remove_from_wishlist(command.product_id)
        repo.add(customer)
