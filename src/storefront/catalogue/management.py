"""Catalogue administration: create, update and delete products."""

import json

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    category = String(max_length=100)
    sub_category = String(max_length=100)
    brand = String(max_length=100)
    sizes = Text()  # JSON array
    colors = Text()  # JSON array of {name, hex_code}
    sku = String(max_length=50)
    is_active = Boolean(default=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Partial product update. Fields left as None keep their current value."""

    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    stock_quantity = Integer(min_value=0)
    category = String(max_length=100)
    sub_category = String(max_length=100)
    brand = String(max_length=100)
    sizes = Text()
    colors = Text()
    sku = String(max_length=50)
    is_active = Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _ensure_unique(repo, name=None, sku=None, product_id=None):
    if name:
        holder = repo.find_by_name(name)
        if holder is not None and str(holder.id) != str(product_id):
            raise InvalidOperationError(f"A product named '{name.strip()}' already exists")
    if sku:
        holder = repo.find_by_sku(sku)
        if holder is not None and str(holder.id) != str(product_id):
            raise InvalidOperationError(f"A product with SKU '{sku}' already exists")


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        _ensure_unique(repo, name=command.name, sku=command.sku)

        product = Product.create(
            name=command.name,
            price=command.price,
            stock_quantity=command.stock_quantity or 0,
            description=command.description,
            category=command.category,
            sub_category=command.sub_category,
            brand=command.brand,
            sizes=json.loads(command.sizes) if command.sizes else None,
            colors=json.loads(command.colors) if command.colors else None,
            sku=command.sku,
            is_active=command.is_active if command.is_active is not None else True,
        )
        repo.add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        _ensure_unique(repo, name=command.name, sku=command.sku, product_id=product.id)

        changes = {}
        for field in (
            "name",
            "description",
            "price",
            "stock_quantity",
            "category",
            "sub_category",
            "brand",
            "sku",
            "is_active",
        ):
            value = getattr(command, field, None)
            if value is not None:
                changes[field] = value
        if command.sizes is not None:
            changes["sizes"] = json.loads(command.sizes)
        if command.colors is not None:
            changes["colors"] = json.loads(command.colors)

        product.update(**changes)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo.remove(product)
        logger.info("product_deleted", product_id=str(product.id))
