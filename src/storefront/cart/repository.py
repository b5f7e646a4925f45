"""Repository for the Cart aggregate."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_customer(self, customer_id) -> Cart | None:
        """Return the customer's cart, or None if they never added anything."""
        results = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return results[0] if results else None

    def remove(self, cart: Cart) -> None:
        self._dao.delete(cart)
