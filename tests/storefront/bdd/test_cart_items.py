"""BDD tests for cart line management."""

from protean.exceptions import ObjectNotFoundError
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.cart.cart import Cart, line_key

scenarios("features/cart_items.feature")


def _color(name, hex_code):
    return {"name": name, "hex_code": hex_code}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return Cart.create(customer_id="cust-001")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse(
        '{qty:d} of product "{product_id}" size "{size}" color "{name}" "{hex_code}" are added at {price:f}'
    )
)
def add_item(cart, qty, product_id, size, name, hex_code, price):
    cart.add_item(product_id, qty, price=price, size=size, color=_color(name, hex_code))


@when(parsers.cfparse('the quantity of product "{product_id}" size "{size}" color "{name}" "{hex_code}" is set to {qty:d}'))
def set_quantity(cart, product_id, size, name, hex_code, qty):
    cart.update_item_quantity(product_id, qty, size=size, color=_color(name, hex_code))


@when(parsers.cfparse('product "{product_id}" size "{size}" color "{name}" "{hex_code}" is removed'))
def remove_item(cart, product_id, size, name, hex_code, error):
    try:
        cart.remove_item(product_id, size=size, color=_color(name, hex_code))
    except ObjectNotFoundError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse('the line for product "{product_id}" size "{size}" color "{name}" "{hex_code}" has quantity {qty:d}'))
def line_has_quantity(cart, product_id, size, name, hex_code, qty):
    line = cart.find_line(line_key(product_id, size, _color(name, hex_code)))
    assert line is not None
    assert line.quantity == qty


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total_is(cart, total):
    assert cart.total_amount == total


@then("the line was not found")
def line_not_found(error):
    assert isinstance(error["exc"], ObjectNotFoundError)
