"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the API's Pydantic request schemas and
pass the domain's validation rules.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SIZES = ["XS", "S", "M", "L", "XL"]
COLORS = [
    {"name": "Red", "hex_code": "#FF0000"},
    {"name": "Navy", "hex_code": "#000080"},
    {"name": "Black", "hex_code": "#000000"},
    {"name": "White", "hex_code": "#FFFFFF"},
]
PAYMENT_METHODS = ["card", "upi", "cod"]


def shopper_identity() -> tuple[str, str, str]:
    """Generate (subject_id, email, display name) for a new shopper."""
    subject_id = f"lt-{uuid.uuid4().hex[:12]}"
    email = f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}"
    return subject_id, email.lower(), fake.name()


def address_data() -> dict:
    """Generate an AddAddressRequest payload."""
    return {
        "label": random.choice(["Home", "Work", "Other"]),
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "zip_code": fake.zipcode()[:20],
        "country": fake.country()[:100],
    }


def product_data() -> dict:
    """Generate a CreateProductRequest payload with a unique name and SKU."""
    suffix = uuid.uuid4().hex[:8]
    return {
        "name": f"{fake.color_name()} {fake.word().title()} {suffix}",
        "description": fake.sentence(nb_words=12),
        "price": round(random.uniform(5.0, 250.0), 2),
        "stock_quantity": random.randint(500, 5000),
        "category": random.choice(["Apparel", "Footwear", "Accessories"]),
        "brand": fake.company()[:100],
        "sizes": random.sample(SIZES, k=3),
        "colors": random.sample(COLORS, k=2),
        "sku": f"LT-{suffix.upper()}",
    }


def cart_item_data(product: dict) -> dict:
    """Generate an AddToCartRequest payload for a product listing entry."""
    payload = {"product_id": product["id"], "quantity": random.randint(1, 3)}
    if product.get("sizes"):
        payload["selected_size"] = random.choice(product["sizes"])
    if product.get("colors"):
        payload["selected_color"] = random.choice(product["colors"])
    return payload


def checkout_data(address_id: str) -> dict:
    return {"shipping_address_id": address_id, "payment_method": random.choice(PAYMENT_METHODS)}
