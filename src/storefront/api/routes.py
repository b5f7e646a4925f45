"""FastAPI routes for customers: login, profile, addresses, wishlist, cart, orders, catalogue."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_customer, current_identity
from storefront.api.schemas import (
    AddAddressRequest,
    AddToCartRequest,
    PlaceOrderRequest,
    RemoveFromCartRequest,
    UpdateAddressRequest,
    UpdateCartQuantityRequest,
    UpdateProfileRequest,
)
from storefront.api.serializers import (
    address_payload,
    cart_payload,
    customer_payload,
    order_payload,
    product_payload,
)
from storefront.auth import VerifiedIdentity
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.catalogue.product import Product
from storefront.customer.addresses import AddAddress, RemoveAddress, UpdateAddress
from storefront.customer.customer import Customer
from storefront.customer.profile import UpdateProfile
from storefront.customer.registration import SyncCustomer
from storefront.customer.wishlist import AddToWishlist, RemoveFromWishlist
from storefront.order.checkout import PlaceOrder
from storefront.order.order import Order
from storefront.utils.concurrency import process_with_retry


def _reload_customer(customer_id):
    return current_domain.repository_for(Customer).get(customer_id)


def _color_fields(color):
    if color is None:
        return {}
    return {"color_name": color.name, "color_hex": color.hex_code}


def _split_name(name):
    if not name:
        return None, None
    first, _, last = name.strip().partition(" ")
    return first or None, last.strip() or None


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/login")
async def login(identity: VerifiedIdentity = Depends(current_identity)):
    """Create or refresh the customer record for a verified identity."""
    if not identity.email:
        raise ValidationError({"email": ["Verified identity has no email address"]})

    first_name, last_name = _split_name(identity.name)
    command = SyncCustomer(
        external_id=identity.subject_id,
        email=identity.email,
        first_name=first_name,
        last_name=last_name,
    )
    customer_id = process_with_retry(command)
    return {"message": "Login successful", "customer": customer_payload(_reload_customer(customer_id))}


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/user", tags=["user"])


@user_router.get("/profile")
async def get_profile(customer: Customer = Depends(current_customer)):
    return customer_payload(customer)


@user_router.put("/profile")
async def update_profile(body: UpdateProfileRequest, customer: Customer = Depends(current_customer)):
    command = UpdateProfile(customer_id=str(customer.id), **body.model_dump(exclude_none=True))
    process_with_retry(command)
    return {"message": "Profile updated successfully", "customer": customer_payload(_reload_customer(customer.id))}


@user_router.post("/addresses", status_code=201)
async def add_address(body: AddAddressRequest, customer: Customer = Depends(current_customer)):
    command = AddAddress(customer_id=str(customer.id), **body.model_dump(exclude_none=True))
    process_with_retry(command)
    addresses = [address_payload(a) for a in _reload_customer(customer.id).addresses]
    return {"message": "Address added successfully", "addresses": addresses}


@user_router.put("/addresses/{address_id}")
async def update_address(
    address_id: str,
    body: UpdateAddressRequest,
    customer: Customer = Depends(current_customer),
):
    command = UpdateAddress(
        customer_id=str(customer.id),
        address_id=address_id,
        **body.model_dump(exclude_none=True),
    )
    process_with_retry(command)
    addresses = [address_payload(a) for a in _reload_customer(customer.id).addresses]
    return {"message": "Address updated successfully", "addresses": addresses}


@user_router.delete("/addresses/{address_id}")
async def remove_address(address_id: str, customer: Customer = Depends(current_customer)):
    process_with_retry(RemoveAddress(customer_id=str(customer.id), address_id=address_id))
    addresses = [address_payload(a) for a in _reload_customer(customer.id).addresses]
    return {"message": "Address removed successfully", "addresses": addresses}


def _wishlist_products(customer):
    product_repo = current_domain.repository_for(Product)
    products = [product_repo.find_by_id(pid) for pid in customer.wishlist_ids]
    return [product_payload(p) for p in products if p is not None]


@user_router.get("/wishlist")
async def get_wishlist(customer: Customer = Depends(current_customer)):
    return {"wishlist": _wishlist_products(customer)}


@user_router.post("/wishlist/{product_id}")
async def add_to_wishlist(product_id: str, customer: Customer = Depends(current_customer)):
    process_with_retry(AddToWishlist(customer_id=str(customer.id), product_id=product_id))
    return {"message": "Product added to wishlist", "wishlist": _wishlist_products(_reload_customer(customer.id))}


@user_router.delete("/wishlist/{product_id}")
async def remove_from_wishlist(product_id: str, customer: Customer = Depends(current_customer)):
    process_with_retry(RemoveFromWishlist(customer_id=str(customer.id), product_id=product_id))
    return {
        "message": "Product removed from wishlist",
        "wishlist": _wishlist_products(_reload_customer(customer.id)),
    }


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(message, cart_id):
    cart = current_domain.repository_for(Cart).get(cart_id)
    return {"message": message, "cart": cart_payload(cart)}


@cart_router.get("")
async def get_cart(customer: Customer = Depends(current_customer)):
    cart = current_domain.repository_for(Cart).for_customer(customer.id)
    if cart is None:
        return {"message": "Cart is empty or not found.", "items": []}
    return cart_payload(cart)


@cart_router.post("/add")
async def add_to_cart(body: AddToCartRequest, customer: Customer = Depends(current_customer)):
    command = AddToCart(
        customer_id=str(customer.id),
        product_id=body.product_id,
        quantity=body.quantity,
        selected_size=body.selected_size,
        **_color_fields(body.selected_color),
    )
    cart_id = process_with_retry(command)
    return _cart_response("Item added/updated in cart.", cart_id)


@cart_router.put("/update/{product_id}")
async def update_cart_quantity(
    product_id: str,
    body: UpdateCartQuantityRequest,
    customer: Customer = Depends(current_customer),
):
    command = UpdateCartQuantity(
        customer_id=str(customer.id),
        product_id=product_id,
        quantity=body.quantity,
        selected_size=body.selected_size,
        **_color_fields(body.selected_color),
    )
    cart_id = process_with_retry(command)
    return _cart_response("Cart updated successfully.", cart_id)


@cart_router.delete("/remove/{product_id}")
async def remove_from_cart(
    product_id: str,
    body: RemoveFromCartRequest | None = None,
    customer: Customer = Depends(current_customer),
):
    body = body or RemoveFromCartRequest()
    command = RemoveFromCart(
        customer_id=str(customer.id),
        product_id=product_id,
        selected_size=body.selected_size,
        **_color_fields(body.selected_color),
    )
    cart_id = process_with_retry(command)
    return _cart_response("Item removed from cart.", cart_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest, customer: Customer = Depends(current_customer)):
    """Check out the caller's cart.

    1. Validate cart, address and stock
    2. Create the order from the cart's price snapshots
    3. Decrement stock, link the order and empty the cart
    """
    command = PlaceOrder(
        customer_id=str(customer.id),
        shipping_address_id=body.shipping_address_id,
        payment_method=body.payment_method,
    )
    order_id = process_with_retry(command)
    order = current_domain.repository_for(Order).get(order_id)
    return {"message": "Order created successfully!", "order": order_payload(order)}


@order_router.get("")
async def list_orders(customer: Customer = Depends(current_customer)):
    orders = current_domain.repository_for(Order).for_customer(customer.id)
    return [order_payload(o) for o in orders]


@order_router.get("/{order_id}")
async def get_order(order_id: str, customer: Customer = Depends(current_customer)):
    order = current_domain.repository_for(Order).get_for_customer(order_id, customer.id)
    if order is None:
        raise ObjectNotFoundError({"order": ["Order not found"]})
    return order_payload(order)


# ---------------------------------------------------------------------------
# Product Router (public)
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("")
async def list_products():
    return [product_payload(p) for p in current_domain.repository_for(Product).list_active()]


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None or not product.is_active:
        raise ObjectNotFoundError({"product": ["Product not found"]})
    return product_payload(product)
