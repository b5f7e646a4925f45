"""Repository for the Customer aggregate."""

from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.repository(part_of=Customer)
class CustomerRepository:
    """Lookups by the identity provider's subject id and by email."""

    def find_by_external_id(self, external_id: str) -> Customer | None:
        results = self._dao.query.filter(external_id=external_id).all().items
        return results[0] if results else None

    def find_by_email(self, email: str) -> Customer | None:
        results = self._dao.query.filter(email=email.strip().lower()).all().items
        return results[0] if results else None

    def list_all(self) -> list[Customer]:
        return self._dao.query.order_by("-registered_at").all().items

    def remove(self, customer: Customer) -> None:
        self._dao.delete(customer)
