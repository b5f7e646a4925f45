"""Admin-only FastAPI routes: catalogue management and customer roles."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import require_admin
from storefront.api.schemas import ChangeRoleRequest, CreateProductRequest, UpdateProductRequest
from storefront.api.serializers import customer_summary_payload, product_payload
from storefront.auth import Forbidden
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.customer.customer import Customer, CustomerRole
from storefront.customer.removal import RemoveCustomer
from storefront.customer.roles import ChangeCustomerRole
from storefront.utils.concurrency import process_with_retry

admin_router = APIRouter(prefix="/admin", tags=["admin"])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@admin_router.get("/products")
async def list_all_products(admin: Customer = Depends(require_admin)):
    """All products, including inactive ones."""
    return [product_payload(p) for p in current_domain.repository_for(Product).list_all()]


@admin_router.post("/products", status_code=201)
async def create_product(body: CreateProductRequest, admin: Customer = Depends(require_admin)):
    data = body.model_dump(exclude={"sizes", "colors"})
    command = CreateProduct(
        **data,
        sizes=json.dumps(body.sizes),
        colors=json.dumps([c.model_dump() for c in body.colors]),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return product_payload(current_domain.repository_for(Product).get(product_id))


@admin_router.put("/products/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest, admin: Customer = Depends(require_admin)):
    data = body.model_dump(exclude_none=True, exclude={"sizes", "colors"})
    if body.sizes is not None:
        data["sizes"] = json.dumps(body.sizes)
    if body.colors is not None:
        data["colors"] = json.dumps([c.model_dump() for c in body.colors])

    process_with_retry(UpdateProduct(product_id=product_id, **data))
    return product_payload(current_domain.repository_for(Product).get(product_id))


@admin_router.delete("/products/{product_id}")
async def delete_product(product_id: str, admin: Customer = Depends(require_admin)):
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return {"message": "Product deleted successfully"}


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
@admin_router.get("/customers")
async def list_customers(admin: Customer = Depends(require_admin)):
    return [customer_summary_payload(c) for c in current_domain.repository_for(Customer).list_all()]


@admin_router.put("/customers/{customer_id}/role")
async def change_role(customer_id: str, body: ChangeRoleRequest, admin: Customer = Depends(require_admin)):
    demotions = {role.value for role in CustomerRole} - {CustomerRole.ADMIN.value}
    if str(admin.id) == customer_id and body.role in demotions:
        raise Forbidden("Cannot demote yourself")

    process_with_retry(ChangeCustomerRole(customer_id=customer_id, role=body.role))
    customer = current_domain.repository_for(Customer).get(customer_id)
    return {"message": "Customer role updated successfully", "customer": customer_summary_payload(customer)}


@admin_router.delete("/customers/{customer_id}")
async def delete_customer(customer_id: str, admin: Customer = Depends(require_admin)):
    if str(admin.id) == customer_id:
        raise Forbidden("Cannot delete your own admin account")

    current_domain.process(RemoveCustomer(customer_id=customer_id), asynchronous=False)
    return {"message": "Customer deleted successfully"}
