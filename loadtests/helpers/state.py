"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state. Nothing is shared
across users; IDs returned by the API are kept so follow-up requests
can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from login to checkout."""

    token: str | None = None
    customer_id: str | None = None
    address_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_lines: int = 0
    order_ids: list[str] = field(default_factory=list)


@dataclass
class CatalogueState:
    """Tracks products created by a simulated administrator."""

    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
