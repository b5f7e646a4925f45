"""FastAPI dependencies resolving the caller from the bearer token."""

from fastapi import Depends, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.auth import Forbidden, Unauthorized, VerifiedIdentity
from storefront.customer.customer import Customer
from storefront.utils.logging import add_context


async def current_identity(request: Request) -> VerifiedIdentity:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("No token provided")

    identity = request.app.state.identity_verifier.verify(token.strip())
    add_context(subject_id=identity.subject_id)
    return identity


async def current_customer(identity: VerifiedIdentity = Depends(current_identity)) -> Customer:
    customer = current_domain.repository_for(Customer).find_by_external_id(identity.subject_id)
    if customer is None:
        raise ObjectNotFoundError({"customer": ["User not found, log in first"]})
    add_context(customer_id=str(customer.id))
    return customer


async def require_admin(customer: Customer = Depends(current_customer)) -> Customer:
    if not customer.is_admin:
        raise Forbidden("Access denied: not an administrator")
    return customer
