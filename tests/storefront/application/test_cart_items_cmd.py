"""Application tests for cart commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.catalogue.management import CreateProduct, UpdateProduct
from storefront.customer.registration import SyncCustomer


def _customer():
    return current_domain.process(
        SyncCustomer(external_id="firebase-uid-001", email="asha@example.com", first_name="Asha"),
        asynchronous=False,
    )


def _product(name="Linen Shirt", price=1499.0, **overrides):
    return current_domain.process(
        CreateProduct(name=name, price=price, stock_quantity=10, **overrides),
        asynchronous=False,
    )


def _add(customer_id, product_id, quantity=1, **variant):
    return current_domain.process(
        AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity, **variant),
        asynchronous=False,
    )


def _cart(customer_id):
    return current_domain.repository_for(Cart).for_customer(customer_id)


class TestAddToCartCommand:
    def test_cart_is_created_lazily(self):
        customer_id = _customer()
        assert _cart(customer_id) is None

        product_id = _product()
        _add(customer_id, product_id, 2, selected_size="M", color_name="Red", color_hex="#FF0000")

        cart = _cart(customer_id)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2
        assert cart.lines[0].price_at_addition == 1499.0

    def test_repeated_adds_merge(self):
        customer_id = _customer()
        product_id = _product()
        _add(customer_id, product_id, 2, selected_size="M", color_name="Red", color_hex="#FF0000")
        _add(customer_id, product_id, 1, selected_size="M", color_name="Red", color_hex="#ff0000")

        cart = _cart(customer_id)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 3

    def test_merge_takes_current_price(self):
        customer_id = _customer()
        product_id = _product()
        _add(customer_id, product_id)
        current_domain.process(UpdateProduct(product_id=product_id, price=1599.0), asynchronous=False)
        _add(customer_id, product_id)

        assert _cart(customer_id).lines[0].price_at_addition == 1599.0

    def test_unknown_product(self):
        customer_id = _customer()
        with pytest.raises(ObjectNotFoundError):
            _add(customer_id, "missing-product")

    def test_unknown_customer(self):
        product_id = _product()
        with pytest.raises(ObjectNotFoundError):
            _add("missing-customer", product_id)

    def test_inactive_product_rejected(self):
        customer_id = _customer()
        product_id = _product(is_active=False)
        with pytest.raises(ValidationError):
            _add(customer_id, product_id)

    def test_one_cart_per_customer(self):
        customer_id = _customer()
        first = _add(customer_id, _product())
        second = _add(customer_id, _product(name="Canvas Tote", price=350.0))
        assert first == second


class TestUpdateCartQuantityCommand:
    def test_update_persists(self):
        customer_id = _customer()
        product_id = _product()
        _add(customer_id, product_id, selected_size="M")

        current_domain.process(
            UpdateCartQuantity(customer_id=customer_id, product_id=product_id, quantity=4, selected_size="M"),
            asynchronous=False,
        )
        assert _cart(customer_id).lines[0].quantity == 4

    def test_zero_removes_line(self):
        customer_id = _customer()
        product_id = _product()
        _add(customer_id, product_id)

        current_domain.process(
            UpdateCartQuantity(customer_id=customer_id, product_id=product_id, quantity=0),
            asynchronous=False,
        )
        assert _cart(customer_id).is_empty

    def test_without_cart(self):
        customer_id = _customer()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateCartQuantity(customer_id=customer_id, product_id="prod-001", quantity=1),
                asynchronous=False,
            )


class TestRemoveFromCartCommand:
    def test_remove_persists(self):
        customer_id = _customer()
        product_id = _product()
        _add(customer_id, product_id, color_name="Red", color_hex="#FF0000")

        current_domain.process(
            RemoveFromCart(customer_id=customer_id, product_id=product_id, color_name="Red", color_hex="#FF0000"),
            asynchronous=False,
        )
        assert _cart(customer_id).is_empty

    def test_unmatched_variant(self):
        customer_id = _customer()
        product_id = _product()
        _add(customer_id, product_id, color_name="Red", color_hex="#FF0000")

        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                RemoveFromCart(customer_id=customer_id, product_id=product_id, color_name="Blue"),
                asynchronous=False,
            )
        assert len(_cart(customer_id).lines) == 1
