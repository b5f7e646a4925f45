"""Repository for the Product aggregate."""

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        results = self._dao.query.filter(id=str(product_id)).all().items
        return results[0] if results else None

    def find_by_name(self, name: str) -> Product | None:
        results = self._dao.query.filter(name=name.strip()).all().items
        return results[0] if results else None

    def find_by_sku(self, sku: str) -> Product | None:
        results = self._dao.query.filter(sku=sku).all().items
        return results[0] if results else None

    def list_active(self) -> list[Product]:
        return self._dao.query.filter(is_active=True).order_by("name").all().items

    def list_all(self) -> list[Product]:
        return self._dao.query.order_by("name").all().items

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
