"""Response payload builders.

Aggregates are flattened into plain dicts here so route handlers stay thin
and every endpoint renders the same shapes.
"""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def color_payload(color):
    if color is None:
        return None
    return {"name": color.name, "hex_code": color.hex_code}


def address_payload(address):
    return {
        "id": str(address.id),
        "label": address.label,
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zip_code": address.zip_code,
        "country": address.country,
        "is_default": bool(address.is_default),
    }


def customer_payload(customer):
    return {
        "id": str(customer.id),
        "external_id": customer.external_id,
        "email": customer.email,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "phone": customer.phone,
        "role": customer.role,
        "addresses": [address_payload(a) for a in customer.addresses],
        "wishlist": customer.wishlist_ids,
        "orders": customer.order_id_list,
        "registered_at": customer.registered_at.isoformat() if customer.registered_at else None,
    }


def customer_summary_payload(customer):
    """Admin listing shape, without address book, wishlist or orders."""
    return {
        "id": str(customer.id),
        "external_id": customer.external_id,
        "email": customer.email,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "role": customer.role,
    }


def product_payload(product):
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "stock_quantity": product.stock_quantity,
        "category": product.category,
        "sub_category": product.sub_category,
        "brand": product.brand,
        "sizes": product.size_list,
        "colors": product.color_list,
        "sku": product.sku,
        "is_active": bool(product.is_active),
    }


def cart_payload(cart):
    """Cart lines joined with live product data.

    ``price_at_addition`` is what checkout will charge; ``current_price`` is
    shown alongside so clients can flag a change.
    """
    product_repo = current_domain.repository_for(Product)
    items = []
    for line in cart.lines:
        product = product_repo.find_by_id(line.product_id)
        items.append(
            {
                "product_id": str(line.product_id),
                "name": product.name if product else None,
                "current_price": product.price if product else None,
                "stock_quantity": product.stock_quantity if product else 0,
                "is_available": product.is_available(line.quantity) if product else False,
                "price_at_addition": line.price_at_addition,
                "quantity": line.quantity,
                "selected_size": line.selected_size,
                "selected_color": color_payload(line.selected_color),
                "subtotal": line.subtotal,
            }
        )
    return {
        "id": str(cart.id),
        "items": items,
        "total_amount": cart.total_amount,
    }


def order_payload(order):
    address = order.shipping_address
    return {
        "id": str(order.id),
        "customer_id": str(order.customer_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
                "selected_size": item.selected_size,
                "selected_color": color_payload(item.selected_color),
                "subtotal": item.subtotal,
            }
            for item in order.items
        ],
        "total_amount": order.total_amount,
        "shipping_address": {
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
            "country": address.country,
        }
        if address
        else None,
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "order_status": order.order_status,
        "tracking_number": order.tracking_number,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
