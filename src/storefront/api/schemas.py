"""Pydantic request schemas for the storefront API.

These are the external contracts. They are translated into Protean commands
by the route handlers and never passed into the domain as-is.
"""

from pydantic import BaseModel, Field

_FORBID = {"extra": "forbid"}


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ColorSchema(BaseModel):
    name: str | None = None
    hex_code: str | None = None

    model_config = _FORBID


# ---------------------------------------------------------------------------
# Profile / addresses
# ---------------------------------------------------------------------------
class UpdateProfileRequest(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)

    model_config = _FORBID


class AddAddressRequest(BaseModel):
    """Address fields are checked by the domain so that gaps surface as 400s."""

    label: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    is_default: bool = False

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "label": "Home",
                    "street": "12 Park Street",
                    "city": "Kolkata",
                    "state": "West Bengal",
                    "zip_code": "700016",
                    "country": "India",
                    "is_default": True,
                }
            ]
        },
    }


class UpdateAddressRequest(BaseModel):
    label: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    is_default: bool | None = None

    model_config = _FORBID


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    selected_size: str | None = None
    selected_color: ColorSchema | None = None

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "0f6a7c1e-1c1b-4d54-9a0e-3f0c1c2d9e11",
                    "quantity": 2,
                    "selected_size": "M",
                    "selected_color": {"name": "Red", "hex_code": "#FF0000"},
                }
            ]
        },
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=0)
    selected_size: str | None = None
    selected_color: ColorSchema | None = None

    model_config = _FORBID


class RemoveFromCartRequest(BaseModel):
    selected_size: str | None = None
    selected_color: ColorSchema | None = None

    model_config = _FORBID


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    shipping_address_id: str
    payment_method: str = Field(max_length=50)

    model_config = _FORBID


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    category: str | None = None
    sub_category: str | None = None
    brand: str | None = None
    sizes: list[str] = []
    colors: list[ColorSchema] = []
    sku: str | None = Field(default=None, max_length=50)
    is_active: bool = True

    model_config = _FORBID


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    stock_quantity: int | None = Field(default=None, ge=0)
    category: str | None = None
    sub_category: str | None = None
    brand: str | None = None
    sizes: list[str] | None = None
    colors: list[ColorSchema] | None = None
    sku: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None

    model_config = _FORBID


class ChangeRoleRequest(BaseModel):
    role: str

    model_config = _FORBID
