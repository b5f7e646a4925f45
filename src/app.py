"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the configuration overlay in ``storefront/domain.toml``
and AUTH_PROVIDER selects the identity verifier (see ``storefront.auth``).
"""

from storefront.api.application import create_app
from storefront.domain import storefront

storefront.init()

app = create_app()
