"""Storefront bounded context: customers, catalogue, carts and orders.

Carts and orders live in the same domain as customers and products so that
checkout can change all of them inside a single Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

storefront = Domain(name="storefront")
