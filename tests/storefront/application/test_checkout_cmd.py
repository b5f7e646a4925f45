"""Application tests for checkout (PlaceOrder)."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart
from storefront.catalogue.management import CreateProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.customer.addresses import AddAddress, UpdateAddress
from storefront.customer.customer import Customer
from storefront.customer.registration import SyncCustomer
from storefront.order.checkout import PlaceOrder
from storefront.order.order import Order

ADDRESS = {
    "street": "12 Park Street",
    "city": "Kolkata",
    "state": "West Bengal",
    "zip_code": "700016",
    "country": "India",
}


@pytest.fixture()
def customer_id():
    return current_domain.process(
        SyncCustomer(external_id="firebase-uid-001", email="asha@example.com", first_name="Asha"),
        asynchronous=False,
    )


@pytest.fixture()
def address_id(customer_id):
    return current_domain.process(AddAddress(customer_id=customer_id, **ADDRESS), asynchronous=False)


@pytest.fixture()
def product_id():
    return current_domain.process(
        CreateProduct(name="Linen Shirt", price=1499.0, stock_quantity=5),
        asynchronous=False,
    )


def _add(customer_id, product_id, quantity, **variant):
    current_domain.process(
        AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity, **variant),
        asynchronous=False,
    )


def _place(customer_id, address_id, payment_method="card"):
    return current_domain.process(
        PlaceOrder(customer_id=customer_id, shipping_address_id=address_id, payment_method=payment_method),
        asynchronous=False,
    )


class TestPlaceOrder:
    def test_merged_line_becomes_one_order_item(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 2, selected_size="M", color_name="Red", color_hex="#FF0000")
        _add(customer_id, product_id, 1, selected_size="M", color_name="Red", color_hex="#FF0000")

        order = current_domain.repository_for(Order).get(_place(customer_id, address_id))

        assert len(order.items) == 1
        item = order.items[0]
        assert item.quantity == 3
        assert item.price == 1499.0
        assert item.selected_color.name == "Red"
        assert order.total_amount == 3 * 1499.0
        assert order.payment_status == "pending"
        assert order.order_status == "pending"

    def test_cart_is_emptied_but_kept(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        _place(customer_id, address_id)

        cart = current_domain.repository_for(Cart).for_customer(customer_id)
        assert cart is not None
        assert cart.is_empty

    def test_order_is_linked_to_customer(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        order_id = _place(customer_id, address_id)

        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.order_id_list == [order_id]

    def test_stock_is_decremented(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 2)
        _place(customer_id, address_id)

        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 3

    def test_price_snapshot_is_charged(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        current_domain.process(UpdateProduct(product_id=product_id, price=1999.0), asynchronous=False)

        order = current_domain.repository_for(Order).get(_place(customer_id, address_id))
        assert order.items[0].price == 1499.0
        assert order.total_amount == 1499.0

    def test_later_price_change_does_not_alter_order(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        order_id = _place(customer_id, address_id)
        current_domain.process(UpdateProduct(product_id=product_id, price=999.0), asynchronous=False)

        assert current_domain.repository_for(Order).get(order_id).total_amount == 1499.0

    def test_later_address_edit_does_not_alter_order(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        order_id = _place(customer_id, address_id)
        current_domain.process(
            UpdateAddress(customer_id=customer_id, address_id=address_id, city="Howrah"),
            asynchronous=False,
        )

        assert current_domain.repository_for(Order).get(order_id).shipping_address.city == "Kolkata"


class TestPlaceOrderFailures:
    def test_empty_cart(self, customer_id, address_id):
        with pytest.raises(ValidationError) as exc:
            _place(customer_id, address_id)
        assert exc.value.messages == {"cart": ["Cart is empty"]}

    def test_cart_emptied_by_updates(self, customer_id, address_id, product_id):
        from storefront.cart.items import UpdateCartQuantity

        _add(customer_id, product_id, 1)
        current_domain.process(
            UpdateCartQuantity(customer_id=customer_id, product_id=product_id, quantity=0),
            asynchronous=False,
        )
        with pytest.raises(ValidationError):
            _place(customer_id, address_id)

    def test_unknown_address(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        with pytest.raises(ValidationError) as exc:
            _place(customer_id, "not-an-address")
        assert "shipping_address_id" in exc.value.messages

    def test_another_customers_address(self, customer_id, product_id):
        other_id = current_domain.process(
            SyncCustomer(external_id="firebase-uid-002", email="ravi@example.com"),
            asynchronous=False,
        )
        foreign_address = current_domain.process(AddAddress(customer_id=other_id, **ADDRESS), asynchronous=False)
        _add(customer_id, product_id, 1)

        with pytest.raises(ValidationError):
            _place(customer_id, foreign_address)

    def test_unknown_customer(self):
        with pytest.raises(ObjectNotFoundError):
            _place("missing-customer", "missing-address")

    def test_insufficient_stock_leaves_state_unchanged(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 6)

        with pytest.raises(ValidationError):
            _place(customer_id, address_id)

        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 5
        assert len(current_domain.repository_for(Cart).for_customer(customer_id).lines) == 1
        assert current_domain.repository_for(Order).for_customer(customer_id) == []

    def test_stock_counted_across_variant_lines(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 3, selected_size="M")
        _add(customer_id, product_id, 3, selected_size="L")

        with pytest.raises(ValidationError):
            _place(customer_id, address_id)

    def test_deactivated_product(self, customer_id, address_id, product_id):
        _add(customer_id, product_id, 1)
        current_domain.process(UpdateProduct(product_id=product_id, is_active=False), asynchronous=False)

        with pytest.raises(ValidationError):
            _place(customer_id, address_id)


class TestPlaceOrderRollback:
    def test_failure_after_order_insert_discards_every_write(self, monkeypatch, customer_id, address_id, product_id):
        _add(customer_id, product_id, 2)

        def fail_to_link(self, order_id):
            raise RuntimeError("customer store unavailable")

        monkeypatch.setattr(Customer, "link_order", fail_to_link)

        with pytest.raises(RuntimeError):
            _place(customer_id, address_id)

        assert current_domain.repository_for(Order).for_customer(customer_id) == []
        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 5
        cart = current_domain.repository_for(Cart).for_customer(customer_id)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2
        assert current_domain.repository_for(Customer).get(customer_id).order_id_list == []
