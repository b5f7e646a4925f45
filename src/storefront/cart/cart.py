"""Cart aggregate: one per customer, holding lines keyed by product and variant.

A cart line has no identity of its own as far as callers are concerned. It
is addressed by its ``LineKey``, the normalised (product, size, color) tuple,
so adding the same variant twice merges into one line instead of duplicating.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.shared.color import Color


@dataclass(frozen=True)
class LineKey:
    product_id: str
    size: str | None = None
    color_name: str | None = None
    color_hex: str | None = None

    @property
    def color(self):
        if self.color_name is None and self.color_hex is None:
            return None
        return Color(name=self.color_name, hex_code=self.color_hex)


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def line_key(product_id, size=None, color=None):
    """Build the normalised key identifying a cart line.

    ``color`` may be a ``Color``, a ``{"name", "hex_code"}`` mapping or None.
    Whitespace is stripped, empty strings become None and hex codes are upper
    cased, so ``"#ff0000"`` and ``"#FF0000 "`` name the same line.
    """
    if color is None:
        name, hex_code = None, None
    elif isinstance(color, dict):
        name, hex_code = color.get("name"), color.get("hex_code")
    else:
        name, hex_code = color.name, color.hex_code

    hex_code = _clean(hex_code)
    return LineKey(
        product_id=str(product_id),
        size=_clean(size),
        color_name=_clean(name),
        color_hex=hex_code.upper() if hex_code else None,
    )


@storefront.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_at_addition = Float(required=True, min_value=0.0)
    selected_size = String(max_length=50)
    selected_color = ValueObject(Color)
    added_at = DateTime()

    @property
    def key(self):
        return line_key(self.product_id, self.selected_size, self.selected_color)

    @property
    def subtotal(self):
        return round(self.price_at_addition * self.quantity, 2)


@storefront.aggregate
class Cart:
    customer_id = Identifier(required=True, unique=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def lines_must_have_distinct_keys(self):
        keys = [line.key for line in self.lines]
        if len(keys) != len(set(keys)):
            raise ValidationError({"lines": ["Cart lines must not share a product, size and color"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Line lookup
    # -------------------------------------------------------------------
    def find_line(self, key):
        return next((line for line in self.lines if line.key == key), None)

    def _require_line(self, key):
        line = self.find_line(key)
        if line is None:
            raise ObjectNotFoundError({"item": ["Item not found in cart"]})
        return line

    @property
    def is_empty(self):
        return not self.lines

    @property
    def total_amount(self):
        return round(sum(line.price_at_addition * line.quantity for line in self.lines), 2)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, price, size=None, color=None):
        """Add ``quantity`` units, merging into an existing line with the same key.

        A merge refreshes ``price_at_addition`` to ``price``; it is never averaged.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        key = line_key(product_id, size, color)
        existing = self.find_line(key)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            existing.price_at_addition = price
            line = existing
        else:
            line = CartLine(
                product_id=key.product_id,
                quantity=quantity,
                price_at_addition=price,
                selected_size=key.size,
                selected_color=key.color,
                added_at=now,
            )
            self.add_lines(line)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=key.product_id,
                selected_size=key.size,
                color_name=key.color_name,
                color_hex=key.color_hex,
                quantity=quantity,
                line_quantity=line.quantity,
                price_at_addition=price,
            )
        )
        return line

    def update_item_quantity(self, product_id, quantity, size=None, color=None):
        """Overwrite a line's quantity. Zero removes the line."""
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        key = line_key(product_id, size, color)
        line = self._require_line(key)

        if quantity == 0:
            self.remove_item(product_id, size, color)
            return

        previous_quantity = line.quantity
        line.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=key.product_id,
                selected_size=key.size,
                color_name=key.color_name,
                color_hex=key.color_hex,
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id, size=None, color=None):
        key = line_key(product_id, size, color)
        line = self._require_line(key)

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=key.product_id,
                selected_size=key.size,
                color_name=key.color_name,
                color_hex=key.color_hex,
            )
        )

    def clear(self, order_id=None):
        """Empty the cart after checkout. The cart itself is kept."""
        for line in list(self.lines):
            self.remove_lines(line)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), order_id=str(order_id) if order_id else None))
