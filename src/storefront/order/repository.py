"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id) -> list[Order]:
        """All orders placed by ``customer_id``, newest first."""
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").all().items

    def get_for_customer(self, order_id, customer_id) -> Order | None:
        """Return the order only if it belongs to ``customer_id``."""
        results = self._dao.query.filter(id=str(order_id), customer_id=str(customer_id)).all().items
        return results[0] if results else None
