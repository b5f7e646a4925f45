"""Bearer tokens for simulated users.

The target server must run with ``AUTH_PROVIDER=jwt`` and the same
``AUTH_JWT_SECRET`` as the load generator. Administrator tokens carry the
subject in ``LOADTEST_ADMIN_SUBJECT``; that customer must have been
promoted beforehand with ``python src/manage.py make-admin``.
"""

import os

from storefront.auth.jwt_adapter import JWTIdentityVerifier

ADMIN_SUBJECT = os.getenv("LOADTEST_ADMIN_SUBJECT", "loadtest-admin")
ADMIN_EMAIL = os.getenv("LOADTEST_ADMIN_EMAIL", "loadtest-admin@example.com")

_issuer = JWTIdentityVerifier(
    secret=os.getenv("AUTH_JWT_SECRET", "loadtest-secret"),
    audience=os.getenv("AUTH_JWT_AUDIENCE"),
    issuer=os.getenv("AUTH_JWT_ISSUER"),
)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def shopper_token(subject_id: str, email: str, name: str) -> str:
    return _issuer.issue(subject_id, email=email, name=name)


def admin_token() -> str:
    return _issuer.issue(ADMIN_SUBJECT, email=ADMIN_EMAIL, name="Load Test Admin")
