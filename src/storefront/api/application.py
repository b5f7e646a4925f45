"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.admin_routes import admin_router
from storefront.api.errors import register_exception_handlers
from storefront.api.routes import auth_router, cart_router, order_router, product_router, user_router
from storefront.auth import IdentityVerifier, verifier_from_env
from storefront.domain import storefront
from storefront.utils.logging import clear_context


def create_app(verifier: IdentityVerifier | None = None) -> FastAPI:
    """Build the application around one identity verifier.

    When ``verifier`` is None it is built from the environment. The domain
    must already be initialized.
    """
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout and customer accounts",
    )
    app.state.identity_verifier = verifier or verifier_from_env()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        clear_context()
        with storefront.domain_context():
            response = await call_next(request)
        return response

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(product_router)
    app.include_router(admin_router)

    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
