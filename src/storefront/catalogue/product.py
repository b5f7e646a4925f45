"""Product aggregate: the catalogue entry a cart line or order item points at."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.color import Color

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def _sizes_json(sizes):
    sizes = [str(s).strip() for s in (sizes or []) if s is not None and str(s).strip()]
    return json.dumps(sizes)


def _colors_json(colors):
    """Validate each color through the Color value object before storing it."""
    normalised = []
    for entry in colors or []:
        color = entry if isinstance(entry, Color) else Color(**entry)
        normalised.append({"name": color.name, "hex_code": color.hex_code})
    return json.dumps(normalised)


@storefront.aggregate
class Product:
    """A sellable item with a price, a stock count and optional variants.

    Variants are plain lists of sizes and colors; stock is tracked per product.
    """

    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    category = String(max_length=100)
    sub_category = String(max_length=100)
    brand = String(max_length=100)
    sizes = Text()  # JSON array of size labels
    colors = Text()  # JSON array of {name, hex_code}
    sku = String(max_length=50)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_cannot_be_blank(self):
        if not self.name or not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be blank"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        stock_quantity=0,
        description=None,
        category=None,
        sub_category=None,
        brand=None,
        sizes=None,
        colors=None,
        sku=None,
        is_active=True,
    ):
        from storefront.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name.strip() if name else name,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
            category=category,
            sub_category=sub_category,
            brand=brand,
            sizes=_sizes_json(sizes),
            colors=_colors_json(colors),
            sku=sku or None,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock_quantity=product.stock_quantity,
                sku=product.sku,
                created_at=now,
            )
        )
        return product

    @property
    def size_list(self):
        return json.loads(self.sizes) if self.sizes else []

    @property
    def color_list(self):
        return json.loads(self.colors) if self.colors else []

    def update(self, **changes):
        """Apply a partial update. Only keys present in ``changes`` are touched."""
        from storefront.catalogue.events import ProductUpdated

        for field in ("name", "description", "price", "stock_quantity", "category", "sub_category", "brand", "sku", "is_active"):
            value = changes.get(field, _UNSET)
            if value is _UNSET:
                continue
            if field == "name" and value:
                value = value.strip()
            setattr(self, field, value)

        if "sizes" in changes:
            self.sizes = _sizes_json(changes["sizes"])
        if "colors" in changes:
            self.colors = _colors_json(changes["colors"])

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                stock_quantity=self.stock_quantity,
                is_active=self.is_active,
            )
        )

    def withdraw_stock(self, quantity):
        """Take ``quantity`` units out of stock for a placed order."""
        from storefront.catalogue.events import StockWithdrawn

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if quantity > self.stock_quantity:
            raise ValidationError({"stock": [f"Insufficient stock for {self.name}: {self.stock_quantity} available"]})

        previous = self.stock_quantity
        self.stock_quantity = previous - quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                quantity=quantity,
                previous_quantity=previous,
                new_quantity=self.stock_quantity,
            )
        )

    def is_available(self, quantity=1):
        return bool(self.is_active) and self.stock_quantity >= quantity
